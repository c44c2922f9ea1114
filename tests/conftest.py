import pytest

from swellshare import create_app
from swellshare.extensions import db
from swellshare.services import AuthService

PASSWORD = "surfsup123"
VALID_CARD = {
    "cardholder_name": "Kai Renter",
    "card_number": "4242 4242 4242 4242",
    "expiry_date": "12/99",
    "cvv": "123",
}


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


def _register(app, email, full_name=None):
    with app.app_context():
        user = AuthService.register_user(email, PASSWORD, full_name=full_name)
        return user.id


def login_client(app, email, password=PASSWORD):
    """Fresh test client signed in through the JSON API."""
    client = app.test_client()
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def owner(app):
    return {"id": _register(app, "owner@swellshare.test", "Olive Owner"), "email": "owner@swellshare.test"}


@pytest.fixture
def renter(app):
    return {"id": _register(app, "renter@swellshare.test", "Kai Renter"), "email": "renter@swellshare.test"}


@pytest.fixture
def admin(app):
    return {"id": _register(app, "admin@swellshare.test"), "email": "admin@swellshare.test"}


@pytest.fixture
def owner_client(app, owner):
    return login_client(app, owner["email"])


@pytest.fixture
def renter_client(app, renter):
    return login_client(app, renter["email"])


@pytest.fixture
def admin_client(app, admin):
    return login_client(app, admin["email"])


def create_board(client, **overrides):
    payload = {
        "title": "Performance Shortboard",
        "description": "Great for tight turns.",
        "price_per_day": "40",
        "location": "Huntington Beach, CA",
        "board_type": "Shortboard",
        "length": "5.10",
    }
    payload.update(overrides)
    resp = client.post("/api/v1/surfboards", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


@pytest.fixture
def board(owner_client):
    return create_board(owner_client)


def request_board(client, board_id, start_date="2030-07-01", end_date="2030-07-04"):
    resp = client.post(
        "/api/v1/rentals/requests",
        json={"surfboard_id": board_id, "start_date": start_date, "end_date": end_date},
    )
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def book_board(client, board_id, start_date="2030-07-01", end_date="2030-07-04", card=None):
    return client.post(
        "/api/v1/rentals",
        json={
            "surfboard_id": board_id,
            "start_date": start_date,
            "end_date": end_date,
            "payment": card or VALID_CARD,
        },
    )
