from swellshare.extensions import db
from swellshare.models import Rental

from conftest import VALID_CARD, book_board, create_board, request_board


def test_index_lists_available_boards(client, owner_client):
    create_board(owner_client, title="Classic Log", board_type="Longboard")
    hidden = create_board(owner_client, title="Secret Gun", board_type="Gun")
    owner_client.patch(f"/api/v1/surfboards/{hidden['id']}/availability", json={"available": False})

    resp = client.get("/")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Classic Log" in html
    assert "Secret Gun" not in html


def test_index_filters_by_type(client, owner_client):
    create_board(owner_client, title="Classic Log", board_type="Longboard")
    create_board(owner_client, title="Fish Twin", board_type="Fish")
    html = client.get("/?board_type=Fish").get_data(as_text=True)
    assert "Fish Twin" in html
    assert "Classic Log" not in html


def test_detail_page_for_visitor_prompts_sign_in(client, board):
    resp = client.get(f"/surfboards/{board['id']}")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert board["title"] in html
    assert "to rent this surfboard" in html


def test_detail_page_shows_fee_breakdown(renter_client, board):
    html = renter_client.get(f"/surfboards/{board['id']}").get_data(as_text=True)
    # 3 default days at 40/day
    assert "$120.00" in html
    assert "$129.78" in html


def test_dashboard_requires_login(client):
    resp = client.get("/dashboard")
    assert resp.status_code == 302
    assert "/login" in resp.headers["Location"]


def test_web_register_and_login(app):
    client = app.test_client()
    resp = client.post(
        "/register",
        data={"email": "web@example.com", "password": "surfsup123", "full_name": "Web Surfer"},
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")
    assert client.get("/dashboard").status_code == 200

    client.get("/logout")
    resp = client.post("/login", data={"email": "web@example.com", "password": "nope"}, follow_redirects=True)
    assert "Invalid credentials." in resp.get_data(as_text=True)

    resp = client.post("/login", data={"email": "web@example.com", "password": "surfsup123", "next": "/profile"})
    assert resp.headers["Location"].endswith("/profile")
    assert "Web Surfer" in client.get("/profile").get_data(as_text=True)


def test_login_ignores_external_next(app, owner):
    client = app.test_client()
    resp = client.post(
        "/login",
        data={"email": owner["email"], "password": "surfsup123", "next": "https://evil.example.com/"},
    )
    assert resp.headers["Location"].endswith("/dashboard")


def test_list_board_through_form(owner_client):
    assert owner_client.get("/surfboards/new").status_code == 200
    resp = owner_client.post(
        "/surfboards/new",
        data={
            "title": "Form Fish",
            "price_per_day": "30",
            "location": "Santa Cruz, CA",
            "board_type": "Fish",
        },
        follow_redirects=True,
    )
    html = resp.get_data(as_text=True)
    assert "Your surfboard has been listed successfully." in html
    assert "Form Fish" in html


def test_form_errors_become_toasts(owner_client):
    resp = owner_client.post(
        "/surfboards/new",
        data={"title": "", "price_per_day": "30", "location": "Malibu", "board_type": "Fish"},
        follow_redirects=True,
    )
    assert "Title is required." in resp.get_data(as_text=True)


def test_rent_through_form_confirms_and_opens_rental(app, renter_client, board):
    form = {"start_date": "2030-07-01", "end_date": "2030-07-03", **VALID_CARD}
    resp = renter_client.post(f"/surfboards/{board['id']}/rent", data=form)
    assert resp.status_code == 302
    assert "/rentals/" in resp.headers["Location"]

    page = renter_client.get(resp.headers["Location"]).get_data(as_text=True)
    assert "Payment successful! Your rental has been confirmed." in page
    assert "Messages" in page
    with app.app_context():
        assert Rental.query.one().status == "confirmed"


def test_rent_through_form_with_bad_card(app, renter_client, board):
    form = {"start_date": "2030-07-01", "end_date": "2030-07-03", **VALID_CARD, "expiry_date": "01/20"}
    resp = renter_client.post(f"/surfboards/{board['id']}/rent", data=form, follow_redirects=True)
    assert "Card has expired." in resp.get_data(as_text=True)
    with app.app_context():
        assert Rental.query.count() == 0


def test_owner_dashboard_approves_request(app, owner_client, renter_client, board):
    rental = request_board(renter_client, board["id"])
    html = owner_client.get("/dashboard?requests=pending").get_data(as_text=True)
    assert "renter@swellshare.test" in html

    resp = owner_client.post(
        f"/rentals/{rental['id']}/status",
        data={"status": "confirmed", "next": "/dashboard?requests=pending"},
        follow_redirects=True,
    )
    assert "The rental has been confirmed successfully." in resp.get_data(as_text=True)
    with app.app_context():
        assert db.session.get(Rental, rental["id"]).status == "confirmed"


def test_rental_page_shows_thread(owner_client, renter_client, board):
    rental = request_board(renter_client, board["id"])
    renter_client.post(f"/api/v1/rentals/{rental['id']}/messages", json={"message": "Can I pick it up early?"})
    html = owner_client.get(f"/rentals/{rental['id']}").get_data(as_text=True)
    assert "Can I pick it up early?" in html
    assert "Approve" in html


def test_receipt_page_and_pdf(owner_client, renter_client, board):
    txn = book_board(renter_client, board["id"]).get_json()["payment"]["transaction_id"]

    html = renter_client.get(f"/receipt/{txn}").get_data(as_text=True)
    assert txn in html
    assert "$129.78" in html

    resp = renter_client.get(f"/receipt/{txn}?format=pdf")
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")

    assert owner_client.get(f"/receipt/{txn}").status_code == 200


def test_admin_dashboard_access(admin_client, owner_client, board):
    resp = admin_client.get("/admin")
    assert resp.status_code == 200
    assert board["title"] in resp.get_data(as_text=True)
    assert owner_client.get("/admin").status_code == 403


def test_admin_updates_fees_through_form(admin_client, client):
    resp = admin_client.post("/admin/settings/fees", data={"SERVICE_FEE_FLAT": "0.50"}, follow_redirects=True)
    assert "Fee settings saved." in resp.get_data(as_text=True)
    assert client.get("/api/v1/payments/quote?amount=100").get_json()["service_fee"] == "3.40"


def test_unknown_page_renders_error_template(client):
    resp = client.get("/does-not-exist")
    assert resp.status_code == 404
    assert "Page not found" in resp.get_data(as_text=True)


def test_login_ignores_backslash_next(app, owner):
    client = app.test_client()
    resp = client.post(
        "/login",
        data={"email": owner["email"], "password": "surfsup123", "next": "/\\evil.example"},
    )
    assert resp.headers["Location"].endswith("/dashboard")


def test_status_form_ignores_backslash_next(owner_client, renter_client, board):
    rental = request_board(renter_client, board["id"])
    resp = owner_client.post(
        f"/rentals/{rental['id']}/status",
        data={"status": "confirmed", "next": "/\\evil.example"},
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")
