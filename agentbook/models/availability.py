from agentbook.extensions import db
from agentbook.models.base import PKType, TimestampMixin


class AvailabilityRecord(TimestampMixin, db.Model):
    """Inclusive day range on a property's calendar.

    ``is_available`` is 0 for booked or blocked days and 1 for ranges an
    agent explicitly opened.
    """

    __tablename__ = "property_availability"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    property_id = db.Column(PKType, db.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    booking_id = db.Column(PKType, db.ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True, index=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    is_available = db.Column(db.SmallInteger, nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)

    listing = db.relationship("Property", back_populates="availability")
    booking = db.relationship("Booking", back_populates="availability")

    __table_args__ = (
        db.Index("ix_availability_property_range", "property_id", "start_date", "end_date"),
        db.CheckConstraint("start_date <= end_date", name="ck_availability_range_order"),
        db.CheckConstraint("is_available IN (0, 1)", name="ck_availability_flag"),
    )
