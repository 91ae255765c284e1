from flask import Blueprint, jsonify, request
from flask_login import current_user

from agentbook.decorators import admin_required, agent_required
from agentbook.errors import NotFoundError
from agentbook.routes.api.v1.serializers import commission_to_dict, money_summary
from agentbook.services import BookingService, CommissionService

api_commission_bp = Blueprint("api_commission", __name__)


@api_commission_bp.get("")
@agent_required
def my_commissions():
    rows = CommissionService.list_for_agent(current_user.id, status=request.args.get("status") or None)
    return jsonify([commission_to_dict(c) for c in rows])


@api_commission_bp.get("/all")
@admin_required
def all_commissions():
    rows = CommissionService.list_all(status=request.args.get("status") or None)
    return jsonify([commission_to_dict(c) for c in rows])


@api_commission_bp.get("/summary")
@agent_required
def commission_summary():
    return jsonify(money_summary(CommissionService.agent_summary(current_user.id)))


@api_commission_bp.get("/booking/<int:booking_id>")
@agent_required
def booking_commission(booking_id):
    BookingService.get_booking(current_user, booking_id)
    commission = CommissionService.get_for_booking(booking_id)
    if commission is None:
        raise NotFoundError("No commission recorded for this booking.")
    return jsonify(commission_to_dict(commission))
