from flask import Blueprint, jsonify, request

from agentbook.decorators import admin_required
from agentbook.errors import NotFoundError
from agentbook.services import PlatformService

api_platform_bp = Blueprint("api_platform", __name__)


@api_platform_bp.get("/settings/<key>")
@admin_required
def get_setting(key):
    value = PlatformService.get_setting(key)
    if value is None and key == "commission_pct":
        value = str(PlatformService.default_commission_pct())
    if value is None:
        raise NotFoundError("Setting not found.")
    return jsonify({"key": key, "value": value})


@api_platform_bp.put("/settings/<key>")
@admin_required
def put_setting(key):
    payload = request.get_json(silent=True) or {}
    setting = PlatformService.set_setting(key, payload.get("value"))
    return jsonify({"key": setting.key, "value": setting.value})
