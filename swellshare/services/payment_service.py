import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from uuid import uuid4

from flask import current_app
from sqlalchemy.orm import joinedload

from swellshare.errors import AppError
from swellshare.models import Payment, Rental
from swellshare.services.platform_service import PlatformService
from swellshare.utils import as_text

CENT = Decimal("0.01")
EXPIRY_PATTERN = re.compile(r"^(\d{2})/(\d{2})$")


def to_money(value):
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class PaymentService:
    @staticmethod
    def parse_amount(value):
        try:
            amount = Decimal(str(value).strip())
            if not amount.is_finite() or amount <= 0:
                raise ValueError
        except (InvalidOperation, ValueError) as exc:
            raise AppError("Amount must be a positive number.", 400) from exc
        return to_money(amount)

    @staticmethod
    def fee_breakdown(amount):
        """Service fee is pct + flat, platform fee is pct; all rounded to cents."""
        base = to_money(amount)
        settings = PlatformService.fee_settings()
        service_fee = to_money(
            base * settings["SERVICE_FEE_PCT"] / Decimal("100") + settings["SERVICE_FEE_FLAT"]
        )
        platform_fee = to_money(base * settings["PLATFORM_FEE_PCT"] / Decimal("100"))
        return {
            "amount": base,
            "service_fee": service_fee,
            "platform_fee": platform_fee,
            "total": base + service_fee + platform_fee,
        }

    @staticmethod
    def normalize_card(card):
        if not isinstance(card, dict):
            card = {}
        return {
            "cardholder_name": as_text(card.get("cardholder_name") or card.get("cardholderName")),
            "card_number": re.sub(r"[\s-]", "", as_text(card.get("card_number") or card.get("cardNumber"))),
            "expiry_date": as_text(card.get("expiry_date") or card.get("expiryDate")),
            "cvv": as_text(card.get("cvv")),
        }

    @staticmethod
    def validate_card(card, today=None):
        card = PaymentService.normalize_card(card)
        if not card["cardholder_name"]:
            raise AppError("Cardholder name is required.", 400)
        if not re.fullmatch(r"\d{13,19}", card["card_number"]):
            raise AppError("Card number must be 13 to 19 digits.", 400)

        match = EXPIRY_PATTERN.match(card["expiry_date"])
        if not match:
            raise AppError("Expiry date must use the MM/YY format.", 400)
        month, year = int(match.group(1)), 2000 + int(match.group(2))
        if not 1 <= month <= 12:
            raise AppError("Expiry month must be between 01 and 12.", 400)
        today = today or date.today()
        if (year, month) < (today.year, today.month):
            raise AppError("Card has expired.", 400)

        if not re.fullmatch(r"\d{3,4}", card["cvv"]):
            raise AppError("CVV must be 3 or 4 digits.", 400)
        return card

    @staticmethod
    def simulate_charge(amount, card, surfboard_id=None, start_date=None, end_date=None):
        """Simulated processor call. Never raises for card problems; reports them instead."""
        try:
            base = PaymentService.parse_amount(amount)
            PaymentService.validate_card(card)
        except AppError as exc:
            current_app.logger.info("Simulated charge declined for surfboard %s: %s", surfboard_id, exc.message)
            return {"success": False, "message": exc.message, "payment": None}

        breakdown = PaymentService.fee_breakdown(base)
        transaction_id = f"txn_{uuid4().hex[:24]}"
        current_app.logger.info(
            "Simulated charge %s for surfboard %s (%s to %s): %s",
            transaction_id,
            surfboard_id,
            start_date,
            end_date,
            breakdown["total"],
        )
        return {
            "success": True,
            "message": "Payment processed successfully",
            "payment": {
                "transactionId": transaction_id,
                "originalAmount": breakdown["amount"],
                "serviceFee": breakdown["service_fee"],
                "platformFee": breakdown["platform_fee"],
                "amount": breakdown["total"],
            },
        }

    @staticmethod
    def build_payment(rental, user_id, charge):
        details = charge["payment"]
        return Payment(
            rental=rental,
            user_id=user_id,
            transaction_id=details["transactionId"],
            amount=details["originalAmount"],
            service_fee=details["serviceFee"],
            platform_fee=details["platformFee"],
            total_amount=details["amount"],
            status="completed",
        )

    @staticmethod
    def list_for_user(user_id):
        return (
            Payment.query.options(joinedload(Payment.rental).joinedload(Rental.surfboard))
            .filter(Payment.user_id == user_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .all()
        )

    @staticmethod
    def get_for_viewer(transaction_id, user):
        payment = Payment.query.filter_by(transaction_id=transaction_id).first()
        if not payment:
            raise AppError("Payment not found.", 404)
        owner_id = payment.rental.surfboard.owner_id if payment.rental and payment.rental.surfboard else None
        if not user.is_admin and user.id not in {payment.user_id, owner_id}:
            raise AppError("Forbidden.", 403)
        return payment
