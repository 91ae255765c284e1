from datetime import timedelta

from agentbook.extensions import db
from agentbook.models.base import Money, PKType, TimestampMixin

BOOKING_STATUSES = ("pending", "confirmed", "paid", "cancelled", "archived")


class Booking(TimestampMixin, db.Model):
    __tablename__ = "bookings"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    property_id = db.Column(PKType, db.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_agent_id = db.Column(PKType, db.ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True)
    booking_agent_id = db.Column(PKType, db.ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True)

    client_name = db.Column(db.String(160), nullable=False)
    client_email = db.Column(db.String(255), nullable=False)
    client_phone = db.Column(db.String(32), nullable=True)
    check_in = db.Column(db.Date, nullable=False)
    check_out = db.Column(db.Date, nullable=False)
    total_amount = db.Column(Money, nullable=False)
    status = db.Column(db.String(24), nullable=False, default="pending", index=True)

    confirmed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    cancelled_at = db.Column(db.DateTime(timezone=True), nullable=True)
    paid_at = db.Column(db.DateTime(timezone=True), nullable=True)
    archived_at = db.Column(db.DateTime(timezone=True), nullable=True)

    listing = db.relationship("Property", back_populates="bookings")
    owner_agent = db.relationship("Agent", back_populates="owned_bookings", foreign_keys=[owner_agent_id])
    booking_agent = db.relationship("Agent", back_populates="placed_bookings", foreign_keys=[booking_agent_id])
    commission = db.relationship("Commission", back_populates="booking", uselist=False, cascade="all, delete-orphan")
    availability = db.relationship("AvailabilityRecord", back_populates="booking", lazy="dynamic")

    __table_args__ = (
        db.Index("ix_bookings_property_status", "property_id", "status"),
        db.Index("ix_bookings_owner_status", "owner_agent_id", "status"),
        db.CheckConstraint("check_in < check_out", name="ck_booking_dates_ordered"),
    )

    @property
    def last_night(self):
        """Last occupied day; the check-out day itself stays free."""
        return self.check_out - timedelta(days=1)

    @property
    def is_self_booking(self):
        return self.owner_agent_id == self.booking_agent_id
