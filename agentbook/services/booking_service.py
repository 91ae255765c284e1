import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, or_
from sqlalchemy.orm import aliased

from agentbook.errors import ConflictError, ForbiddenError, InvalidTransitionError, NotFoundError, ValidationError
from agentbook.extensions import db
from agentbook.models import Agent, Booking, Property
from agentbook.models.base import utcnow
from agentbook.schemas import BookingRequest, as_date, parse_payload
from agentbook.services.availability_service import AvailabilityService
from agentbook.services.commission_service import CommissionService
from agentbook.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

# "archived" is reached only through archive_sweep.
BOOKING_TRANSITIONS = {
    "pending": {"confirmed", "cancelled", "archived"},
    "confirmed": {"cancelled", "paid", "archived"},
    "paid": {"archived"},
    "cancelled": set(),
    "archived": set(),
}
ARCHIVABLE_STATUSES = ("pending", "confirmed", "paid")


class BookingService:
    @staticmethod
    def _is_owner_side(booking, actor):
        if actor.role == "admin" or actor.id == booking.owner_agent_id:
            return True
        if actor.id == booking.booking_agent_id:
            # A requester never approves their own request.
            return False
        return actor.same_agency(booking.owner_agent)

    @staticmethod
    def _require_owner_side(booking, actor):
        if not BookingService._is_owner_side(booking, actor):
            raise ForbiddenError("Only the property owner's agency can act on this booking.")

    @staticmethod
    def _can_view(booking, actor):
        return actor.id == booking.booking_agent_id or BookingService._is_owner_side(booking, actor)

    @staticmethod
    def _ensure_transition(booking, new_status):
        current = booking.status
        if new_status not in BOOKING_TRANSITIONS.get(current, set()):
            raise InvalidTransitionError(f"Invalid status transition from {current} to {new_status}.")

    @staticmethod
    def _load(booking_id, lock=False):
        query = Booking.query.filter_by(id=booking_id)
        if lock:
            query = query.with_for_update().populate_existing()
        booking = query.first()
        if not booking:
            raise NotFoundError("Booking not found.")
        return booking

    @staticmethod
    def request_booking(actor, request):
        if not isinstance(request, BookingRequest):
            request = parse_payload(BookingRequest, request)
        if request.check_in >= request.check_out:
            raise ValidationError("Check-in must be before check-out.")

        listing = db.session.get(Property, request.property_id)
        if not listing:
            raise NotFoundError("Property not found.")
        if not listing.is_bookable:
            raise ConflictError("Property is not open for bookings.")

        booking = Booking(
            property_id=listing.id,
            owner_agent_id=listing.agent_id,
            booking_agent_id=actor.id,
            client_name=request.client_name,
            client_email=str(request.client_email).lower(),
            client_phone=request.client_phone or None,
            check_in=request.check_in,
            check_out=request.check_out,
            total_amount=request.total_amount,
            status="pending",
        )
        if AvailabilityService.is_date_range_booked(listing.id, booking.check_in, booking.last_night):
            raise ConflictError("Property already booked for the selected dates.")

        # No availability is held yet; competing pending requests may coexist.
        with unit_of_work():
            db.session.add(booking)
        logger.info(
            "Booking %s requested by agent %s on property %s (%s..%s)",
            booking.id,
            actor.id,
            listing.id,
            booking.check_in,
            booking.check_out,
        )
        return booking

    @staticmethod
    def confirm_booking(actor, booking_id):
        with unit_of_work():
            booking = BookingService._load(booking_id)
            BookingService._require_owner_side(booking, actor)

            # Write to the property row before reading the ledger. The write takes
            # the row lock on PostgreSQL and the database write lock on SQLite,
            # so confirmations on one property serialize on every backend.
            locked = Property.query.filter_by(id=booking.property_id).update(
                {"updated_at": utcnow()}, synchronize_session=False
            )
            if not locked:
                raise NotFoundError("Property not found.")
            booking = BookingService._load(booking_id, lock=True)
            BookingService._ensure_transition(booking, "confirmed")

            AvailabilityService.add_booked_range(
                booking.property_id,
                booking.check_in,
                booking.last_night,
                notes=f"Booking #{booking.id}",
                booking_id=booking.id,
            )
            CommissionService.add_commission(booking)
            booking.status = "confirmed"
            booking.confirmed_at = datetime.now(timezone.utc)
        logger.info("Booking %s confirmed by agent %s", booking.id, actor.id)
        return booking

    @staticmethod
    def cancel_booking(actor, booking_id):
        with unit_of_work():
            booking = BookingService._load(booking_id, lock=True)
            if not BookingService._can_view(booking, actor):
                raise ForbiddenError("Not authorized for this booking.")
            BookingService._ensure_transition(booking, "cancelled")

            previous = booking.status
            if previous == "confirmed":
                AvailabilityService.delete_exact_range(booking.property_id, booking.check_in, booking.last_night)
            booking.status = "cancelled"
            booking.cancelled_at = datetime.now(timezone.utc)
        logger.info("Booking %s cancelled from %s by agent %s", booking.id, previous, actor.id)
        return booking

    @staticmethod
    def decline_booking(actor, booking_id):
        with unit_of_work():
            booking = BookingService._load(booking_id, lock=True)
            BookingService._require_owner_side(booking, actor)
            if booking.status != "pending":
                raise InvalidTransitionError(f"Only pending bookings can be declined, not {booking.status}.")
            booking.status = "cancelled"
            booking.cancelled_at = datetime.now(timezone.utc)
        logger.info("Booking %s declined by agent %s", booking.id, actor.id)
        return booking

    @staticmethod
    def mark_paid(actor, booking_id):
        with unit_of_work():
            booking = BookingService._load(booking_id, lock=True)
            BookingService._require_owner_side(booking, actor)
            BookingService._ensure_transition(booking, "paid")
            booking.status = "paid"
            booking.paid_at = datetime.now(timezone.utc)
            if booking.commission:
                booking.commission.status = "paid"
        logger.info("Booking %s marked paid by agent %s", booking.id, actor.id)
        return booking

    @staticmethod
    def archive_sweep(now=None):
        """Archive every open booking whose check-out date has passed.

        Safe to run repeatedly or alongside other requests: it only moves
        eligible rows forward and never touches availability.
        """
        stamp = now or datetime.now(timezone.utc)
        today = as_date(stamp)
        with unit_of_work():
            count = (
                Booking.query.filter(Booking.status.in_(ARCHIVABLE_STATUSES))
                .filter(Booking.check_out < today)
                .update(
                    {"status": "archived", "archived_at": datetime.now(timezone.utc)},
                    synchronize_session=False,
                )
            )
        if count:
            logger.info("Archive sweep moved %s booking(s) with check-out before %s", count, today)
        return count

    @staticmethod
    def get_booking(actor, booking_id):
        booking = BookingService._load(booking_id)
        if not BookingService._can_view(booking, actor):
            raise ForbiddenError("Not authorized for this booking.")
        return booking

    @staticmethod
    def list_for_agent(agent_id, status=None, property_id=None):
        query = Booking.query.filter(
            or_(Booking.owner_agent_id == agent_id, Booking.booking_agent_id == agent_id)
        )
        if status:
            query = query.filter(Booking.status == status)
        if property_id:
            query = query.filter(Booking.property_id == property_id)
        return query.order_by(Booking.created_at.desc()).all()

    @staticmethod
    def list_requests(agent_id):
        """Pending requests waiting on this agent as property owner."""
        return (
            Booking.query.filter(Booking.owner_agent_id == agent_id, Booking.status == "pending")
            .order_by(Booking.check_in.asc())
            .all()
        )

    @staticmethod
    def list_for_property(property_id):
        return Booking.query.filter_by(property_id=property_id).order_by(Booking.check_in.asc()).all()

    @staticmethod
    def list_for_agency(agency):
        owner = aliased(Agent)
        requester = aliased(Agent)
        return (
            Booking.query.join(owner, owner.id == Booking.owner_agent_id)
            .join(requester, requester.id == Booking.booking_agent_id)
            .filter(or_(owner.agency == agency, requester.agency == agency))
            .order_by(Booking.created_at.desc())
            .all()
        )

    @staticmethod
    def booking_stats(agent_id=None):
        query = db.session.query(
            Booking.status,
            func.count(Booking.id),
            func.coalesce(func.sum(Booking.total_amount), 0),
        )
        if agent_id is not None:
            query = query.filter(or_(Booking.owner_agent_id == agent_id, Booking.booking_agent_id == agent_id))
        rows = query.group_by(Booking.status).all()

        breakdown = {}
        total_count = 0
        revenue_count = 0
        total_revenue = Decimal("0.00")
        for status, count, revenue in rows:
            revenue = Decimal(str(revenue)).quantize(Decimal("0.01"))
            breakdown[status] = {"count": count, "revenue": revenue}
            total_count += count
            # Cancelled bookings never earn anything.
            if status != "cancelled":
                revenue_count += count
                total_revenue += revenue
        average = (total_revenue / revenue_count).quantize(Decimal("0.01")) if revenue_count else Decimal("0.00")
        return {
            "total_bookings": total_count,
            "total_revenue": total_revenue,
            "average_booking_value": average,
            "status_breakdown": breakdown,
        }
