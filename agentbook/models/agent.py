from flask_login import UserMixin

from agentbook.extensions import db
from agentbook.models.base import PKType, TimestampMixin


class Agent(UserMixin, TimestampMixin, db.Model):
    __tablename__ = "agents"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    phone = db.Column(db.String(32), nullable=True)
    agency = db.Column(db.String(160), nullable=True, index=True)
    agency_phone = db.Column(db.String(32), nullable=True)
    agency_email = db.Column(db.String(255), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(24), nullable=False, default="agent", index=True)
    is_active_agent = db.Column(db.Boolean, nullable=False, default=True)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True)

    properties = db.relationship(
        "Property", back_populates="agent", lazy="dynamic", cascade="all, delete-orphan"
    )
    owned_bookings = db.relationship(
        "Booking", back_populates="owner_agent", lazy="dynamic", foreign_keys="Booking.owner_agent_id"
    )
    placed_bookings = db.relationship(
        "Booking", back_populates="booking_agent", lazy="dynamic", foreign_keys="Booking.booking_agent_id"
    )

    def same_agency(self, other):
        return bool(self.agency) and other is not None and self.agency == other.agency
