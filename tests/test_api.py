import pytest
from conftest import PASSWORD, booking_payload, make_agent

LISTING = {
    "title": "Harbour duplex",
    "location": "Porto, Ribeira",
    "property_type": "apartment",
    "price": "220",
    "price_type": "night",
    "beds": 3,
    "baths": 2,
    "sqm": 110,
    "amenities": ["wifi", "parking"],
    "status": "active",
}


def _register(app, name, email, agency=None):
    client = app.test_client()
    resp = client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": PASSWORD, "agency": agency},
    )
    assert resp.status_code == 201
    return client, resp.get_json()


def _admin_client(app):
    with app.app_context():
        make_agent("Ada Admin", "ada@agentbook-platform.com", role="admin")
    client = app.test_client()
    resp = client.post("/api/v1/auth/login", json={"email": "ada@agentbook-platform.com", "password": PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture
def agents(app):
    owner, _ = _register(app, "Olivia Owner", "olivia@harbor-realty.com", "Harbor Realty")
    partner, _ = _register(app, "Parker Partner", "parker@summit-homes.com", "Summit Homes")
    return owner, partner


@pytest.fixture
def listing_id(agents):
    owner, _ = agents
    resp = owner.post("/api/v1/properties", json=LISTING)
    assert resp.status_code == 201
    return resp.get_json()["id"]


def test_bookings_require_login(client):
    assert client.get("/api/v1/bookings").status_code == 401
    assert client.post("/api/v1/bookings", json={}).status_code == 401
    assert client.get("/api/v1/properties").status_code == 200


def test_register_and_login(app, client):
    _, body = _register(app, "Sam Seller", "sam@coastline-estates.com", "Coastline Estates")
    assert body["agency"] == "Coastline Estates"
    assert body["role"] == "agent"

    duplicate = client.post(
        "/api/v1/auth/register",
        json={"name": "Sam Again", "email": "SAM@coastline-estates.com", "password": PASSWORD},
    )
    assert duplicate.status_code == 409

    bad = client.post("/api/v1/auth/login", json={"email": "sam@coastline-estates.com", "password": "wrong-pass"})
    assert bad.status_code == 401
    assert bad.get_json() == {"error": "Invalid credentials."}

    ok = client.post("/api/v1/auth/login", json={"email": "sam@coastline-estates.com", "password": PASSWORD})
    assert ok.status_code == 200
    assert client.get("/api/v1/auth/me").get_json()["email"] == "sam@coastline-estates.com"


def test_short_password_is_a_validation_error(client):
    resp = client.post(
        "/api/v1/auth/register",
        json={"name": "Tess", "email": "tess@coastline-estates.com", "password": "short"},
    )
    assert resp.status_code == 400
    assert "password" in resp.get_json()["error"]


def test_booking_flow_over_http(agents, listing_id):
    owner, partner = agents

    resp = partner.post("/api/v1/bookings", json=booking_payload(listing_id, "2024-06-01", "2024-06-05"))
    assert resp.status_code == 201
    booking = resp.get_json()
    assert booking["status"] == "pending"

    assert partner.post(f"/api/v1/bookings/{booking['id']}/confirm").status_code == 403

    resp = owner.post(f"/api/v1/bookings/{booking['id']}/confirm")
    assert resp.status_code == 200
    confirmed = resp.get_json()
    assert confirmed["status"] == "confirmed"
    assert confirmed["commission"]["owner_commission"] == "450.00"
    assert confirmed["commission"]["booking_commission"] == "450.00"
    assert confirmed["commission"]["platform_fee"] == "100.00"

    calendar = owner.get(f"/api/v1/properties/{listing_id}/availability").get_json()
    assert [(r["start_date"], r["end_date"]) for r in calendar] == [("2024-06-01", "2024-06-04")]

    overlap = partner.post("/api/v1/bookings", json=booking_payload(listing_id, "2024-06-04", "2024-06-08"))
    assert overlap.status_code == 409

    adjacent = partner.post("/api/v1/bookings", json=booking_payload(listing_id, "2024-06-05", "2024-06-08"))
    assert adjacent.status_code == 201

    assert owner.post(f"/api/v1/bookings/{booking['id']}/decline").status_code == 409
    assert owner.post(f"/api/v1/bookings/{booking['id']}/pay").get_json()["status"] == "paid"

    summary = partner.get("/api/v1/commissions/summary").get_json()
    assert summary["booking_commission"] == "450.00"
    assert summary["paid"] == "450.00"

    requests = owner.get("/api/v1/bookings/requests").get_json()
    assert [b["id"] for b in requests] == [adjacent.get_json()["id"]]


def test_booking_errors(agents, listing_id):
    _, partner = agents

    inverted = partner.post("/api/v1/bookings", json=booking_payload(listing_id, "2024-06-05", "2024-06-01"))
    assert inverted.status_code == 400

    missing_property = partner.post("/api/v1/bookings", json=booking_payload(9999, "2024-06-01", "2024-06-05"))
    assert missing_property.status_code == 404

    assert partner.get("/api/v1/bookings/9999").status_code == 404
    assert partner.post("/api/v1/bookings/9999/cancel").status_code == 404


def test_calendar_is_managed_by_owner(agents, listing_id):
    owner, partner = agents
    block = {"start_date": "2024-08-01", "end_date": "2024-08-03", "is_available": 0, "notes": "Repairs"}

    assert partner.post(f"/api/v1/properties/{listing_id}/availability", json=block).status_code == 403
    assert owner.post(f"/api/v1/properties/{listing_id}/availability", json=block).status_code == 201
    assert owner.post(f"/api/v1/properties/{listing_id}/availability", json=block).status_code == 409

    resp = owner.delete(
        f"/api/v1/properties/{listing_id}/availability",
        json={"start_date": "2024-08-01", "end_date": "2024-08-03"},
    )
    assert resp.get_json() == {"released": 1}


def test_property_catalog_filters(agents, listing_id, client):
    owner, _ = agents
    owner.post("/api/v1/properties", json=dict(LISTING, title="Lisbon penthouse", location="Lisbon, Chiado"))

    porto = client.get("/api/v1/properties?location=porto").get_json()
    assert [p["id"] for p in porto] == [listing_id]

    bad = client.get("/api/v1/properties?min_price=cheap")
    assert bad.status_code == 400

    assert client.get(f"/api/v1/properties/{listing_id}").get_json()["amenities"] == ["parking", "wifi"]
    assert client.get("/api/v1/properties/9999").status_code == 404


def test_admin_only_endpoints(app, agents):
    _, partner = agents
    admin = _admin_client(app)

    assert partner.post("/api/v1/bookings/archive-sweep").status_code == 403
    assert admin.post("/api/v1/bookings/archive-sweep").get_json() == {"archived": 0}

    assert partner.put("/api/v1/platform/settings/commission_pct", json={"value": "12"}).status_code == 403
    assert admin.get("/api/v1/platform/settings/commission_pct").get_json()["value"] == "10"
    resp = admin.put("/api/v1/platform/settings/commission_pct", json={"value": "12.5"})
    assert resp.get_json() == {"key": "commission_pct", "value": "12.5"}
    assert admin.put("/api/v1/platform/settings/commission_pct", json={"value": "250"}).status_code == 400


def test_anonymous_catalog_shows_active_listings_only(agents, listing_id, client):
    owner, _ = agents
    draft = owner.post("/api/v1/properties", json=dict(LISTING, title="Unfinished loft", status="draft")).get_json()

    public = client.get("/api/v1/properties").get_json()
    assert [p["id"] for p in public] == [listing_id]
    assert client.get("/api/v1/properties?status=draft").get_json() == []
    assert client.get(f"/api/v1/properties/{draft['id']}").status_code == 404

    mine = owner.get("/api/v1/properties?status=draft").get_json()
    assert [p["id"] for p in mine] == [draft["id"]]
    assert owner.get(f"/api/v1/properties/{draft['id']}").status_code == 200


def test_calendar_record_can_be_deleted_by_id(agents, listing_id):
    owner, partner = agents
    opened = owner.post(
        f"/api/v1/properties/{listing_id}/availability",
        json={"start_date": "2024-09-01", "end_date": "2024-09-30", "is_available": 1},
    ).get_json()

    assert partner.delete(f"/api/v1/properties/{listing_id}/availability/{opened['id']}").status_code == 403
    assert owner.delete(f"/api/v1/properties/{listing_id}/availability/{opened['id']}").status_code == 200
    assert owner.delete(f"/api/v1/properties/{listing_id}/availability/{opened['id']}").status_code == 404
    assert owner.get(f"/api/v1/properties/{listing_id}/availability").get_json() == []


def test_booked_property_cannot_be_deleted(agents, listing_id):
    owner, partner = agents
    booking = partner.post("/api/v1/bookings", json=booking_payload(listing_id, "2024-06-01", "2024-06-05")).get_json()
    owner.post(f"/api/v1/bookings/{booking['id']}/confirm")

    assert owner.delete(f"/api/v1/properties/{listing_id}").status_code == 409
    assert owner.get(f"/api/v1/properties/{listing_id}").status_code == 200
