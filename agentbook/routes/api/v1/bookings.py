from datetime import datetime, timezone

from flask import Blueprint, jsonify, request
from flask_login import current_user

from agentbook.decorators import admin_required, agent_required
from agentbook.extensions import limiter
from agentbook.routes.api.v1.serializers import booking_to_dict, money_summary
from agentbook.schemas import BookingListQuery, parse_payload
from agentbook.services import BookingService

api_booking_bp = Blueprint("api_booking", __name__)


@api_booking_bp.post("")
@limiter.limit("60 per minute")
@agent_required
def create_booking():
    booking = BookingService.request_booking(current_user, request.get_json(silent=True) or {})
    return jsonify(booking_to_dict(booking)), 201


@api_booking_bp.get("")
@agent_required
def my_bookings():
    query = parse_payload(BookingListQuery, request.args.to_dict())
    rows = BookingService.list_for_agent(current_user.id, status=query.status, property_id=query.property_id)
    return jsonify([booking_to_dict(b) for b in rows])


@api_booking_bp.get("/requests")
@agent_required
def booking_requests():
    return jsonify([booking_to_dict(b) for b in BookingService.list_requests(current_user.id)])


@api_booking_bp.get("/agency")
@agent_required
def agency_bookings():
    if not current_user.agency:
        return jsonify([])
    return jsonify([booking_to_dict(b) for b in BookingService.list_for_agency(current_user.agency)])


@api_booking_bp.get("/stats")
@agent_required
def booking_stats():
    agent_id = None if current_user.role == "admin" else current_user.id
    stats = BookingService.booking_stats(agent_id=agent_id)
    stats["status_breakdown"] = {
        status: money_summary(values) for status, values in stats["status_breakdown"].items()
    }
    return jsonify(money_summary(stats))


@api_booking_bp.get("/<int:booking_id>")
@agent_required
def get_booking(booking_id):
    booking = BookingService.get_booking(current_user, booking_id)
    return jsonify(booking_to_dict(booking, with_commission=True))


@api_booking_bp.post("/<int:booking_id>/confirm")
@agent_required
def confirm_booking(booking_id):
    booking = BookingService.confirm_booking(current_user, booking_id)
    return jsonify(booking_to_dict(booking, with_commission=True))


@api_booking_bp.post("/<int:booking_id>/decline")
@agent_required
def decline_booking(booking_id):
    booking = BookingService.decline_booking(current_user, booking_id)
    return jsonify(booking_to_dict(booking))


@api_booking_bp.post("/<int:booking_id>/cancel")
@agent_required
def cancel_booking(booking_id):
    booking = BookingService.cancel_booking(current_user, booking_id)
    return jsonify(booking_to_dict(booking))


@api_booking_bp.post("/<int:booking_id>/pay")
@agent_required
def mark_paid(booking_id):
    booking = BookingService.mark_paid(current_user, booking_id)
    return jsonify(booking_to_dict(booking, with_commission=True))


@api_booking_bp.post("/archive-sweep")
@admin_required
def archive_sweep():
    archived = BookingService.archive_sweep(datetime.now(timezone.utc))
    return jsonify({"archived": archived})
