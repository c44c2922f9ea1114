from datetime import date, datetime
from decimal import Decimal

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from swellshare.errors import AppError
from swellshare.extensions import db
from swellshare.models import RENTAL_STATUSES, Rental, Surfboard
from swellshare.services.payment_service import PaymentService, to_money
from swellshare.services.surfboard_service import SurfboardService
from swellshare.utils import as_text

RENTAL_TRANSITIONS = {
    "pending": {"confirmed", "canceled"},
    "confirmed": {"completed"},
    "canceled": set(),
    "completed": set(),
}
OWNER_ONLY_TARGETS = {"confirmed", "canceled"}


class RentalService:
    @staticmethod
    def parse_date(value, label):
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise AppError(f"Invalid {label}.", 400)
        raw = value.strip()
        try:
            # Accept plain dates as well as full ISO timestamps from date pickers.
            return date.fromisoformat(raw[:10])
        except ValueError as exc:
            raise AppError(f"Invalid {label}.", 400) from exc

    @staticmethod
    def parse_range(start, end):
        start_date = RentalService.parse_date(start, "start date")
        end_date = RentalService.parse_date(end, "end date")
        if end_date < start_date:
            raise AppError("End date cannot be before start date.", 400)
        return start_date, end_date

    @staticmethod
    def rental_days(start_date, end_date):
        return max(1, (end_date - start_date).days)

    @staticmethod
    def quote(board, start_date, end_date):
        days = RentalService.rental_days(start_date, end_date)
        return to_money(Decimal(str(board.price_per_day)) * days)

    @staticmethod
    def _bookable_board(board_id, renter):
        board = db.session.get(Surfboard, board_id) if board_id is not None else None
        if not board:
            raise AppError("Surfboard not found.", 404)
        if not SurfboardService.is_public(board):
            raise AppError("Surfboard is not available for rent.", 409)
        if board.owner_id == renter.id:
            raise AppError("You cannot rent your own surfboard.", 400)
        return board

    @staticmethod
    def request_rental(renter, board_id, start, end):
        """Create a pending request that the owner confirms or declines."""
        start_date, end_date = RentalService.parse_range(start, end)
        board = RentalService._bookable_board(board_id, renter)
        rental = Rental(
            surfboard=board,
            renter_id=renter.id,
            start_date=start_date,
            end_date=end_date,
            total_price=RentalService.quote(board, start_date, end_date),
            status="pending",
        )
        db.session.add(rental)
        board.has_requests = True
        db.session.commit()
        current_app.logger.info("Rental %s requested for surfboard %s", rental.id, board.id)
        return rental

    @staticmethod
    def book_with_payment(renter, board_id, start, end, card):
        """Charge first, then write rental and payment in a single transaction."""
        start_date, end_date = RentalService.parse_range(start, end)
        board = RentalService._bookable_board(board_id, renter)
        total_price = RentalService.quote(board, start_date, end_date)

        charge = PaymentService.simulate_charge(
            total_price,
            card,
            surfboard_id=board.id,
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
        )
        if not charge["success"]:
            raise AppError(charge["message"] or "Payment failed.", 402)

        rental = Rental(
            surfboard=board,
            renter_id=renter.id,
            start_date=start_date,
            end_date=end_date,
            total_price=total_price,
            status="confirmed",
        )
        payment = PaymentService.build_payment(rental, renter.id, charge)
        try:
            db.session.add(rental)
            db.session.add(payment)
            board.has_requests = True
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.exception(
                "Booking write failed after charge %s", charge["payment"]["transactionId"]
            )
            raise AppError("Payment succeeded but the booking could not be saved.", 500) from exc

        current_app.logger.info(
            "Rental %s confirmed with payment %s", rental.id, payment.transaction_id
        )
        return rental, payment

    @staticmethod
    def get_for_participant(rental_id, user):
        rental = db.session.get(Rental, rental_id)
        if not rental:
            raise AppError("Rental not found.", 404)
        if not RentalService.is_participant(rental, user):
            raise AppError("Forbidden.", 403)
        return rental

    @staticmethod
    def is_participant(rental, user):
        return user.is_admin or user.id in {rental.renter_id, rental.owner_id}

    @staticmethod
    def allowed_transitions(rental, user):
        targets = set()
        for target in RENTAL_TRANSITIONS.get(rental.status, set()):
            if target in OWNER_ONLY_TARGETS:
                if user.is_admin or user.id == rental.owner_id:
                    targets.add(target)
            elif RentalService.is_participant(rental, user):
                targets.add(target)
        return targets

    @staticmethod
    def transition(rental, new_status, actor):
        current = rental.status
        new_status = as_text(new_status).lower()
        if new_status == "declined":
            new_status = "canceled"
        if new_status not in RENTAL_STATUSES:
            raise AppError("Unknown rental status.", 400)
        if new_status not in RENTAL_TRANSITIONS.get(current, set()):
            raise AppError(f"Invalid status transition from {current} to {new_status}.", 400)
        if new_status not in RentalService.allowed_transitions(rental, actor):
            raise AppError("Not authorized for this rental.", 403)

        rental.status = new_status
        db.session.flush()
        SurfboardService.refresh_has_requests(rental.surfboard)
        db.session.commit()
        current_app.logger.info("Rental %s moved from %s to %s by user %s", rental.id, current, new_status, actor.id)
        return rental

    @staticmethod
    def list_for_renter(renter_id):
        return (
            Rental.query.options(joinedload(Rental.surfboard))
            .filter(Rental.renter_id == renter_id)
            .order_by(Rental.created_at.desc(), Rental.id.desc())
            .all()
        )

    @staticmethod
    def list_for_owner(owner_id, status=None):
        query = (
            Rental.query.options(joinedload(Rental.surfboard), joinedload(Rental.renter))
            .join(Surfboard, Surfboard.id == Rental.surfboard_id)
            .filter(Surfboard.owner_id == owner_id)
        )
        if status:
            if status not in RENTAL_STATUSES:
                raise AppError("Unknown rental status.", 400)
            query = query.filter(Rental.status == status)
        return query.order_by(Rental.created_at.desc(), Rental.id.desc()).all()
