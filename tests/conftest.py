import pytest

from agentbook import create_app
from agentbook.extensions import db
from agentbook.services import AuthService, PropertyService

PASSWORD = "correct-horse-42"


def make_agent(name, email, agency=None, role="agent"):
    return AuthService.register_agent(
        {"name": name, "email": email, "password": PASSWORD, "agency": agency},
        role=role,
    )


def make_listing(agent_id, **overrides):
    payload = {
        "title": "Sea-view apartment",
        "location": "Lisbon, Alfama",
        "property_type": "apartment",
        "price": "180.00",
        "price_type": "night",
        "beds": 2,
        "baths": 1,
        "sqm": 75,
        "amenities": ["wifi", "balcony", "wifi"],
        "images": ["front.jpg", "kitchen.jpg"],
        "status": "active",
    }
    payload.update(overrides)
    return PropertyService.create_property(agent_id, payload)


def booking_payload(property_id, check_in, check_out, total="1000.00"):
    return {
        "property_id": property_id,
        "client_name": "Jordan Client",
        "client_email": "jordan@clientmail.com",
        "client_phone": "+351900000000",
        "check_in": check_in,
        "check_out": check_out,
        "total_amount": total,
    }


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def owner(ctx):
    return make_agent("Olivia Owner", "olivia@harbor-realty.com", agency="Harbor Realty")


@pytest.fixture
def colleague(ctx):
    return make_agent("Casey Colleague", "casey@harbor-realty.com", agency="Harbor Realty")


@pytest.fixture
def partner(ctx):
    return make_agent("Parker Partner", "parker@summit-homes.com", agency="Summit Homes")


@pytest.fixture
def admin(ctx):
    return make_agent("Ada Admin", "ada@agentbook-platform.com", role="admin")


@pytest.fixture
def listing(owner):
    return make_listing(owner.id)
