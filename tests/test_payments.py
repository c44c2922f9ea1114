from datetime import date
from decimal import Decimal

import pytest

from swellshare.errors import AppError
from swellshare.services import PaymentService

from conftest import VALID_CARD, book_board


def test_fee_breakdown_for_round_amount(app):
    with app.app_context():
        breakdown = PaymentService.fee_breakdown(Decimal("100"))
    assert breakdown == {
        "amount": Decimal("100.00"),
        "service_fee": Decimal("3.20"),
        "platform_fee": Decimal("5.00"),
        "total": Decimal("108.20"),
    }


def test_fee_breakdown_rounds_half_up(app):
    with app.app_context():
        breakdown = PaymentService.fee_breakdown(Decimal("25"))
    # 25 * 2.9% = 0.725 -> 1.025 with the flat fee, rounded half up.
    assert breakdown["service_fee"] == Decimal("1.03")
    assert breakdown["platform_fee"] == Decimal("1.25")
    assert breakdown["total"] == Decimal("27.28")


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"cardholder_name": " "}, "Cardholder name is required."),
        ({"card_number": "4242"}, "Card number must be 13 to 19 digits."),
        ({"expiry_date": "1299"}, "Expiry date must use the MM/YY format."),
        ({"expiry_date": "13/30"}, "Expiry month must be between 01 and 12."),
        ({"expiry_date": "01/24"}, "Card has expired."),
        ({"cvv": "12a"}, "CVV must be 3 or 4 digits."),
    ],
)
def test_validate_card_errors(overrides, message):
    with pytest.raises(AppError) as excinfo:
        PaymentService.validate_card({**VALID_CARD, **overrides}, today=date(2026, 10, 19))
    assert excinfo.value.message == message


def test_validate_card_accepts_camel_case_and_current_month():
    card = PaymentService.validate_card(
        {"cardholderName": "Kai", "cardNumber": "4242-4242-4242-4242", "expiryDate": "10/26", "cvv": "1234"},
        today=date(2026, 10, 19),
    )
    assert card["card_number"] == "4242424242424242"


def test_process_payment_success(renter_client):
    resp = renter_client.post(
        "/api/v1/payments/process",
        json={
            "amount": 100,
            "paymentData": {
                "cardholderName": "Kai Renter",
                "cardNumber": "4242424242424242",
                "expiryDate": "12/99",
                "cvv": "123",
            },
            "surfboardId": 1,
            "startDate": "2030-07-01",
            "endDate": "2030-07-04",
        },
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["success"] is True
    assert data["payment"]["transactionId"].startswith("txn_")
    assert Decimal(data["payment"]["originalAmount"]) == Decimal("100.00")
    assert Decimal(data["payment"]["serviceFee"]) == Decimal("3.20")
    assert Decimal(data["payment"]["platformFee"]) == Decimal("5.00")
    assert Decimal(data["payment"]["amount"]) == Decimal("108.20")


def test_process_payment_reports_failure(renter_client):
    resp = renter_client.post(
        "/api/v1/payments/process",
        json={"amount": 100, "paymentData": {**VALID_CARD, "card_number": "123"}},
    )
    assert resp.status_code == 402
    data = resp.get_json()
    assert data["success"] is False
    assert data["payment"] is None
    assert data["message"] == "Card number must be 13 to 19 digits."


def test_process_payment_rejects_bad_amount(renter_client):
    resp = renter_client.post("/api/v1/payments/process", json={"amount": 0, "paymentData": VALID_CARD})
    assert resp.status_code == 402
    assert resp.get_json()["message"] == "Amount must be a positive number."


def test_quote_endpoint(client):
    data = client.get("/api/v1/payments/quote?amount=100").get_json()
    assert data == {"amount": "100.00", "service_fee": "3.20", "platform_fee": "5.00", "total": "108.20"}
    assert client.get("/api/v1/payments/quote?amount=abc").status_code == 400


def test_payment_history_and_visibility(app, owner_client, renter_client, board):
    booking = book_board(renter_client, board["id"]).get_json()
    txn = booking["payment"]["transaction_id"]

    history = renter_client.get("/api/v1/payments/me").get_json()
    assert [row["transaction_id"] for row in history] == [txn]
    assert history[0]["rental"]["surfboard"]["title"] == board["title"]

    assert owner_client.get("/api/v1/payments/me").get_json() == []
    assert owner_client.get(f"/api/v1/payments/{txn}").status_code == 200
    assert renter_client.get("/api/v1/payments/txn_missing").status_code == 404

    outsider = app.test_client()
    outsider.post("/api/v1/auth/register", json={"email": "outsider@example.com", "password": "surfsup123"})
    assert outsider.get(f"/api/v1/payments/{txn}").status_code == 403


def test_process_payment_accepts_numeric_card_fields(renter_client):
    resp = renter_client.post(
        "/api/v1/payments/process",
        json={
            "amount": 100,
            "paymentData": {
                "cardholderName": "Kai Renter",
                "cardNumber": 4242424242424242,
                "expiryDate": "12/99",
                "cvv": 123,
            },
        },
    )
    assert resp.status_code == 200
    assert resp.get_json()["success"] is True


def test_process_payment_with_non_object_card(renter_client):
    resp = renter_client.post("/api/v1/payments/process", json={"amount": 100, "paymentData": "oops"})
    assert resp.status_code == 402
    assert resp.get_json()["message"] == "Cardholder name is required."
