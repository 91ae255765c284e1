from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from agentbook.extensions import limiter
from agentbook.routes.api.v1.serializers import agent_to_dict
from agentbook.services import AuthService

api_auth_bp = Blueprint("api_auth", __name__)


@api_auth_bp.post("/register")
@limiter.limit("20 per minute")
def api_register():
    agent = AuthService.register_agent(request.get_json(silent=True) or {})
    login_user(agent)
    return jsonify(agent_to_dict(agent)), 201


@api_auth_bp.post("/login")
@limiter.limit("15 per minute")
def api_login():
    agent = AuthService.authenticate_agent(request.get_json(silent=True) or {})
    login_user(agent)
    return jsonify(agent_to_dict(agent))


@api_auth_bp.post("/logout")
@login_required
def api_logout():
    logout_user()
    return jsonify({"ok": True})


@api_auth_bp.get("/me")
@login_required
def api_me():
    return jsonify(agent_to_dict(current_user))
