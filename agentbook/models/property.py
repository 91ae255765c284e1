from agentbook.extensions import db
from agentbook.models.base import Money, PKType, TimestampMixin

LISTING_TYPES = ("rental", "sale")
PROPERTY_STATUSES = ("draft", "active", "inactive", "sold")


class Property(TimestampMixin, db.Model):
    __tablename__ = "properties"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    agent_id = db.Column(PKType, db.ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True)
    listing_type = db.Column(db.String(16), nullable=False, default="rental", index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    location = db.Column(db.String(255), nullable=False, index=True)
    property_type = db.Column(db.String(64), nullable=False, index=True)
    price = db.Column(Money, nullable=False)
    price_type = db.Column(db.String(16), nullable=False, default="night")
    beds = db.Column(db.Integer, nullable=False, default=0)
    baths = db.Column(db.Integer, nullable=False, default=0)
    sqm = db.Column(db.Integer, nullable=False)
    amenities = db.Column(db.JSON, nullable=False, default=list)
    images = db.Column(db.JSON, nullable=False, default=list)
    status = db.Column(db.String(16), nullable=False, default="draft", index=True)
    license_number = db.Column(db.String(64), nullable=True)

    agent = db.relationship("Agent", back_populates="properties")
    availability = db.relationship(
        "AvailabilityRecord", back_populates="listing", lazy="dynamic", cascade="all, delete-orphan"
    )
    bookings = db.relationship("Booking", back_populates="listing", lazy="dynamic", cascade="all, delete-orphan")

    __table_args__ = (
        db.Index("ix_properties_listing_status", "listing_type", "status"),
        db.CheckConstraint("price >= 0", name="ck_property_price_non_negative"),
        db.CheckConstraint("sqm > 0", name="ck_property_sqm_positive"),
    )

    @property
    def is_bookable(self):
        return self.listing_type == "rental" and self.status == "active"
