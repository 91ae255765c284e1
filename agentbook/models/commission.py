from agentbook.extensions import db
from agentbook.models.base import Money, PKType, TimestampMixin


class Commission(TimestampMixin, db.Model):
    __tablename__ = "commissions"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    booking_id = db.Column(PKType, db.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, unique=True)
    owner_agent_id = db.Column(PKType, db.ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True)
    booking_agent_id = db.Column(PKType, db.ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True)
    total_amount = db.Column(Money, nullable=False)
    owner_commission = db.Column(Money, nullable=False)
    booking_commission = db.Column(Money, nullable=False, default=0)
    platform_fee = db.Column(Money, nullable=False, default=0)
    commission_rate = db.Column(db.Numeric(5, 2), nullable=False)
    status = db.Column(db.String(16), nullable=False, default="pending", index=True)

    booking = db.relationship("Booking", back_populates="commission")
    owner_agent = db.relationship("Agent", foreign_keys=[owner_agent_id])
    booking_agent = db.relationship("Agent", foreign_keys=[booking_agent_id])

    __table_args__ = (
        db.CheckConstraint("commission_rate >= 0 AND commission_rate <= 100", name="ck_commission_rate_range"),
    )
