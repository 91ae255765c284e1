import logging

from agentbook.errors import ConflictError, NotFoundError, ValidationError
from agentbook.extensions import db
from agentbook.models import AvailabilityRecord, Property
from agentbook.schemas import as_date
from agentbook.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

BOOKED = 0
OPEN = 1


class AvailabilityService:
    """Per-property calendar of booked, blocked and explicitly open ranges.

    Ranges are inclusive day ranges. Overlap is the interval test
    ``a.start <= b.end and b.start <= a.end``, evaluated in SQL. The ledger
    does not stop two booked ranges from overlapping on its own account;
    ``block_range`` refuses only when asked to book over an existing booked
    range, and the booking workflow calls it inside its confirmation
    transaction.
    """

    @staticmethod
    def _normalize_range(start, end):
        try:
            start_date, end_date = as_date(start), as_date(end)
        except (TypeError, ValueError) as exc:
            raise ValidationError("Invalid date range.") from exc
        if start_date > end_date:
            raise ValidationError("Start date must not be after end date.")
        return start_date, end_date

    @staticmethod
    def _require_property(property_id):
        listing = db.session.get(Property, property_id)
        if not listing:
            raise NotFoundError("Property not found.")
        return listing

    @staticmethod
    def list_availability(property_id):
        AvailabilityService._require_property(property_id)
        return AvailabilityRecord.query.filter_by(property_id=property_id).all()

    @staticmethod
    def is_date_range_booked(property_id, start, end):
        start_date, end_date = AvailabilityService._normalize_range(start, end)
        return (
            AvailabilityRecord.query.filter(AvailabilityRecord.property_id == property_id)
            .filter(AvailabilityRecord.is_available == BOOKED)
            .filter(AvailabilityRecord.start_date <= end_date, AvailabilityRecord.end_date >= start_date)
            .first()
            is not None
        )

    @staticmethod
    def add_booked_range(property_id, start, end, notes=None, booking_id=None):
        """Insert a booked record in the caller's transaction (flush only)."""
        start_date, end_date = AvailabilityService._normalize_range(start, end)
        if AvailabilityService.is_date_range_booked(property_id, start_date, end_date):
            logger.warning(
                "Range %s..%s already booked on property %s", start_date, end_date, property_id
            )
            raise ConflictError("Selected dates are already booked.")

        record = AvailabilityRecord(
            property_id=property_id,
            booking_id=booking_id,
            start_date=start_date,
            end_date=end_date,
            is_available=BOOKED,
            notes=(notes or "").strip() or None,
        )
        db.session.add(record)
        db.session.flush()
        return record

    @staticmethod
    def delete_exact_range(property_id, start, end, booked_only=True):
        """Delete records matching (start, end) exactly (flush only).

        The booking workflow removes only booked records; manual releases
        pass ``booked_only=False`` so explicitly opened ranges can go too.
        """
        start_date, end_date = AvailabilityService._normalize_range(start, end)
        query = AvailabilityRecord.query.filter_by(
            property_id=property_id,
            start_date=start_date,
            end_date=end_date,
        )
        if booked_only:
            query = query.filter(AvailabilityRecord.is_available == BOOKED)
        deleted = query.delete(synchronize_session="fetch")
        db.session.flush()
        return deleted

    @staticmethod
    def block_range(property_id, start, end, notes=None, booking_id=None):
        with unit_of_work():
            AvailabilityService._require_property(property_id)
            record = AvailabilityService.add_booked_range(
                property_id, start, end, notes=notes, booking_id=booking_id
            )
        logger.info(
            "Blocked %s..%s on property %s (record %s)",
            record.start_date,
            record.end_date,
            property_id,
            record.id,
        )
        return record

    @staticmethod
    def open_range(property_id, start, end, notes=None):
        start_date, end_date = AvailabilityService._normalize_range(start, end)
        with unit_of_work():
            AvailabilityService._require_property(property_id)
            record = AvailabilityRecord(
                property_id=property_id,
                start_date=start_date,
                end_date=end_date,
                is_available=OPEN,
                notes=(notes or "").strip() or None,
            )
            db.session.add(record)
        return record

    @staticmethod
    def release_exact_range(property_id, start, end):
        # Overlapping manual edits are left alone; no exact match is a no-op.
        with unit_of_work():
            deleted = AvailabilityService.delete_exact_range(property_id, start, end, booked_only=False)
        if deleted:
            logger.info("Released %s record(s) %s..%s on property %s", deleted, start, end, property_id)
        return deleted

    @staticmethod
    def delete_record(property_id, record_id):
        """Remove one calendar record by id; returns None if it is not on this property."""
        record = AvailabilityRecord.query.filter_by(id=record_id, property_id=property_id).first()
        if record is None:
            return None
        start_date, end_date = record.start_date, record.end_date
        with unit_of_work():
            db.session.delete(record)
        logger.info(
            "Removed availability record %s (%s..%s) from property %s", record_id, start_date, end_date, property_id
        )
        return record
