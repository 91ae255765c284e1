from decimal import Decimal

import pytest
from conftest import booking_payload, make_listing

from agentbook.errors import ConflictError, ForbiddenError, ValidationError
from agentbook.services import AgentService, BookingService, CommissionService, PropertyService


def test_create_normalizes_listing(owner):
    listing = make_listing(owner.id, price="180.005", title="  Riverside studio  ")

    assert listing.listing_type == "rental"
    assert listing.title == "Riverside studio"
    assert listing.price == Decimal("180.01")
    assert listing.amenities == ["balcony", "wifi"]
    assert listing.is_bookable


def test_create_rejects_mismatched_price_type(owner):
    with pytest.raises(ValidationError):
        make_listing(owner.id, price_type="total")
    with pytest.raises(ValidationError):
        make_listing(owner.id, listing_type="sale", price_type="night")
    with pytest.raises(ValidationError):
        make_listing(owner.id, sqm=0)


def test_catalog_filters_are_conjunctive(owner, partner):
    make_listing(owner.id, title="Alfama flat", location="Lisbon, Alfama", price="150")
    make_listing(owner.id, title="Porto loft", location="Porto, Ribeira", price="90")
    make_listing(partner.id, title="Lisbon villa", location="Lisbon, Belem", property_type="villa", price="400")
    make_listing(partner.id, title="Lisbon draft", location="Lisbon, Baixa", status="draft", price="120")

    lisbon = PropertyService.list_properties({"location": "lisbon", "status": "active"})
    assert sorted(p.title for p in lisbon) == ["Alfama flat", "Lisbon villa"]

    cheap = PropertyService.list_properties({"location": "lisbon", "max_price": "200"})
    assert sorted(p.title for p in cheap) == ["Alfama flat", "Lisbon draft"]

    villas = PropertyService.list_properties({"property_type": "villa", "agent_id": partner.id})
    assert [p.title for p in villas] == ["Lisbon villa"]

    assert len(PropertyService.list_properties()) == 4


def test_update_is_owner_only(owner, partner, listing):
    with pytest.raises(ForbiddenError):
        PropertyService.update_property(listing.id, partner.id, {"price": "10"})

    updated = PropertyService.update_property(
        listing.id, owner.id, {"price": "210", "description": "Renovated in 2023", "status": "inactive"}
    )

    assert updated.price == Decimal("210.00")
    assert updated.description == "Renovated in 2023"
    assert not updated.is_bookable
    assert PropertyService.update_property(9999, owner.id, {"price": "1"}) is None


def test_only_sale_listings_can_be_sold(owner, listing):
    with pytest.raises(ValidationError):
        PropertyService.update_property(listing.id, owner.id, {"status": "sold"})

    sale = make_listing(owner.id, listing_type="sale", price_type="total", price="450000")
    assert PropertyService.update_property(sale.id, owner.id, {"status": "sold"}).status == "sold"


def test_delete_property(owner, partner, listing):
    with pytest.raises(ForbiddenError):
        PropertyService.delete_property(listing.id, partner.id)

    PropertyService.delete_property(listing.id, owner.id)

    assert PropertyService.get_property(listing.id) is None
    assert PropertyService.delete_property(listing.id, owner.id) is None


def test_property_with_commissions_cannot_be_deleted(owner, partner, listing):
    booking = BookingService.request_booking(partner, booking_payload(listing.id, "2024-06-01", "2024-06-05"))
    BookingService.confirm_booking(owner, booking.id)
    BookingService.cancel_booking(owner, booking.id)

    with pytest.raises(ConflictError):
        PropertyService.delete_property(listing.id, owner.id)

    assert PropertyService.get_property(listing.id) is not None
    assert CommissionService.get_for_booking(booking.id) is not None


def test_property_with_only_requests_can_be_deleted(owner, partner, listing):
    BookingService.request_booking(partner, booking_payload(listing.id, "2024-06-01", "2024-06-05"))

    PropertyService.delete_property(listing.id, owner.id)

    assert PropertyService.get_property(listing.id) is None
    assert BookingService.list_for_agent(partner.id) == []


def test_agent_directory(owner, colleague, partner):
    harbor = AgentService.list_agents(agency="Harbor Realty")
    assert sorted(a.email for a in harbor) == ["casey@harbor-realty.com", "olivia@harbor-realty.com"]
    assert owner.same_agency(colleague)
    assert not owner.same_agency(partner)

    AgentService.update_agent(partner.id, {"phone": "+351911111111"})
    AgentService.deactivate_agent(colleague.id)

    assert AgentService.get_by_email("PARKER@summit-homes.com").phone == "+351911111111"
    assert [a.id for a in AgentService.list_agents(agency="Harbor Realty", active_only=True)] == [owner.id]
