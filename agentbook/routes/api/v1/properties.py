from flask import Blueprint, jsonify, request
from flask_login import current_user

from agentbook.decorators import agent_required
from agentbook.errors import ForbiddenError, NotFoundError
from agentbook.extensions import cache
from agentbook.routes.api.v1.serializers import availability_to_dict, booking_to_dict, property_to_dict
from agentbook.schemas import AvailabilityChange, DateRange, parse_payload
from agentbook.services import AvailabilityService, BookingService, PropertyService

api_property_bp = Blueprint("api_property", __name__)


def _owned_property(property_id):
    listing = PropertyService.get_property(property_id)
    if listing is None:
        raise NotFoundError("Property not found.")
    if listing.agent_id != current_user.id and current_user.role != "admin":
        raise ForbiddenError("Only the owning agent can manage this calendar.")
    return listing


@api_property_bp.get("")
@cache.cached(timeout=60, query_string=True, unless=lambda: current_user.is_authenticated)
def list_properties():
    filters = {key: value for key, value in request.args.items() if value != ""}
    if not current_user.is_authenticated:
        # Drafts and withdrawn listings stay private to agents.
        filters["status"] = "active"
    listings = PropertyService.list_properties(filters)
    return jsonify([property_to_dict(listing) for listing in listings])


@api_property_bp.post("")
@agent_required
def create_property():
    listing = PropertyService.create_property(current_user.id, request.get_json(silent=True) or {})
    return jsonify(property_to_dict(listing)), 201


@api_property_bp.get("/<int:property_id>")
def get_property(property_id):
    listing = PropertyService.get_property(property_id)
    if listing is None or (listing.status != "active" and not current_user.is_authenticated):
        raise NotFoundError("Property not found.")
    return jsonify(property_to_dict(listing))


@api_property_bp.patch("/<int:property_id>")
@agent_required
def update_property(property_id):
    listing = PropertyService.update_property(property_id, current_user.id, request.get_json(silent=True) or {})
    if listing is None:
        raise NotFoundError("Property not found.")
    return jsonify(property_to_dict(listing))


@api_property_bp.delete("/<int:property_id>")
@agent_required
def delete_property(property_id):
    if PropertyService.delete_property(property_id, current_user.id) is None:
        raise NotFoundError("Property not found.")
    return jsonify({"ok": True})


@api_property_bp.get("/<int:property_id>/availability")
@agent_required
def list_availability(property_id):
    records = AvailabilityService.list_availability(property_id)
    records.sort(key=lambda record: (record.start_date, record.end_date))
    return jsonify([availability_to_dict(record) for record in records])


@api_property_bp.post("/<int:property_id>/availability")
@agent_required
def change_availability(property_id):
    _owned_property(property_id)
    change = parse_payload(AvailabilityChange, request.get_json(silent=True))
    if change.is_available:
        record = AvailabilityService.open_range(property_id, change.start_date, change.end_date, notes=change.notes)
    else:
        record = AvailabilityService.block_range(property_id, change.start_date, change.end_date, notes=change.notes)
    return jsonify(availability_to_dict(record)), 201


@api_property_bp.delete("/<int:property_id>/availability")
@agent_required
def release_availability(property_id):
    _owned_property(property_id)
    date_range = parse_payload(DateRange, request.get_json(silent=True))
    released = AvailabilityService.release_exact_range(property_id, date_range.start_date, date_range.end_date)
    return jsonify({"released": released})


@api_property_bp.delete("/<int:property_id>/availability/<int:record_id>")
@agent_required
def delete_availability_record(property_id, record_id):
    _owned_property(property_id)
    if AvailabilityService.delete_record(property_id, record_id) is None:
        raise NotFoundError("Availability record not found.")
    return jsonify({"ok": True})


@api_property_bp.get("/<int:property_id>/bookings")
@agent_required
def property_bookings(property_id):
    _owned_property(property_id)
    return jsonify([booking_to_dict(booking) for booking in BookingService.list_for_property(property_id)])
