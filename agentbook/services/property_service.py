import logging

from agentbook.errors import ConflictError, ForbiddenError, ValidationError
from agentbook.extensions import cache, db
from agentbook.models import Booking, Commission, Property
from agentbook.schemas import PropertyFilters, PropertyUpdate, parse_payload, property_create_adapter
from agentbook.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"description", "license_number"}


class PropertyService:
    """Plain persistence for rental and sale listings."""

    @staticmethod
    def get_property(property_id):
        return db.session.get(Property, property_id)

    @staticmethod
    def list_properties(filters=None):
        if not isinstance(filters, PropertyFilters):
            filters = parse_payload(PropertyFilters, filters)

        query = Property.query
        if filters.location:
            query = query.filter(Property.location.ilike(f"%{filters.location}%"))
        if filters.property_type:
            query = query.filter(Property.property_type == filters.property_type)
        if filters.listing_type:
            query = query.filter(Property.listing_type == filters.listing_type)
        if filters.status:
            query = query.filter(Property.status == filters.status)
        if filters.min_price is not None:
            query = query.filter(Property.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Property.price <= filters.max_price)
        if filters.agent_id:
            query = query.filter(Property.agent_id == filters.agent_id)
        return query.order_by(Property.created_at.desc()).all()

    @staticmethod
    def create_property(agent_id, payload):
        payload = dict(payload or {})
        payload.setdefault("listing_type", "rental")
        data = parse_payload(property_create_adapter, payload)

        listing = Property(agent_id=agent_id, **data.model_dump())
        with unit_of_work():
            db.session.add(listing)
        cache.clear()
        logger.info("Agent %s listed %s property %s", agent_id, listing.listing_type, listing.id)
        return listing

    @staticmethod
    def _owned(property_id, agent_id):
        listing = db.session.get(Property, property_id)
        if listing is not None and listing.agent_id != agent_id:
            raise ForbiddenError("Only the owning agent can change this property.")
        return listing

    @staticmethod
    def update_property(property_id, agent_id, payload):
        data = parse_payload(PropertyUpdate, payload)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        listing = PropertyService._owned(property_id, agent_id)
        if listing is None:
            return None

        if changes.get("status") == "sold" and listing.listing_type != "sale":
            raise ValidationError("Only sale listings can be marked sold.")
        price_type = changes.get("price_type")
        if price_type and (price_type == "total") != (listing.listing_type == "sale"):
            raise ValidationError("Price type does not match the listing type.")

        with unit_of_work():
            for field, value in changes.items():
                setattr(listing, field, value)
        cache.clear()
        return listing

    @staticmethod
    def delete_property(property_id, agent_id):
        listing = PropertyService._owned(property_id, agent_id)
        if listing is None:
            return None
        # Deleting would cascade into the commission ledger.
        has_commissions = (
            db.session.query(Commission.id)
            .join(Booking, Booking.id == Commission.booking_id)
            .filter(Booking.property_id == property_id)
            .first()
            is not None
        )
        if has_commissions:
            raise ConflictError("Property has recorded commissions; set it inactive instead.")
        with unit_of_work():
            db.session.delete(listing)
        cache.clear()
        logger.info("Agent %s removed property %s", agent_id, property_id)
        return listing
