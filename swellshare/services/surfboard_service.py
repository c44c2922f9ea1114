from decimal import Decimal, InvalidOperation

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.orm import joinedload

from swellshare.errors import AppError
from swellshare.extensions import db
from swellshare.models import OPEN_RENTAL_STATUSES, Rental, Surfboard
from swellshare.utils import as_text

BOOLEAN_TRUE = {"1", "true", "yes", "on"}


class SurfboardService:
    BOARD_TYPES = ("Shortboard", "Longboard", "Fish", "Funboard", "Hybrid", "Gun", "Foam", "SUP", "Other")
    DIMENSION_FIELDS = ("length", "width", "thickness", "volume")
    EDITABLE_FIELDS = (
        "title",
        "description",
        "price_per_day",
        "image_url",
        "location",
        "board_type",
        "length",
        "width",
        "thickness",
        "volume",
        "available",
    )

    @staticmethod
    def _parse_bool(value):
        if isinstance(value, bool):
            return value
        return str(value or "").strip().lower() in BOOLEAN_TRUE

    @staticmethod
    def _parse_price(value):
        try:
            price = Decimal(str(value).strip())
            if not price.is_finite() or price <= 0:
                raise ValueError
        except (InvalidOperation, ValueError) as exc:
            raise AppError("Price per day must be a positive number.", 400) from exc
        return price.quantize(Decimal("0.01"))

    @staticmethod
    def _parse_dimension(value, label):
        raw = as_text(value)
        if not raw:
            return None
        try:
            number = Decimal(raw)
            if not number.is_finite() or number <= 0:
                raise ValueError
        except (InvalidOperation, ValueError) as exc:
            raise AppError(f"Invalid {label} value.", 400) from exc
        return number.quantize(Decimal("0.01"))

    @staticmethod
    def _normalize_board_type(value):
        raw = as_text(value)
        for board_type in SurfboardService.BOARD_TYPES:
            if board_type.lower() == raw.lower():
                return board_type
        raise AppError("Invalid board type.", 400)

    @staticmethod
    def _clean_fields(payload, partial=False):
        fields = {}

        if not partial or "title" in payload:
            title = as_text(payload.get("title"))
            if not title:
                raise AppError("Title is required.", 400)
            if len(title) > 140:
                raise AppError("Title is too long.", 400)
            fields["title"] = title

        if not partial or "price_per_day" in payload:
            if payload.get("price_per_day") in (None, ""):
                raise AppError("Price per day is required.", 400)
            fields["price_per_day"] = SurfboardService._parse_price(payload.get("price_per_day"))

        if not partial or "location" in payload:
            location = as_text(payload.get("location"))
            if not location:
                raise AppError("Location is required.", 400)
            fields["location"] = location

        if not partial or "board_type" in payload:
            fields["board_type"] = SurfboardService._normalize_board_type(payload.get("board_type"))

        if not partial or "description" in payload:
            fields["description"] = as_text(payload.get("description")) or None

        if not partial or "image_url" in payload:
            fields["image_url"] = as_text(payload.get("image_url")) or None

        for name in SurfboardService.DIMENSION_FIELDS:
            if not partial or name in payload:
                fields[name] = SurfboardService._parse_dimension(payload.get(name), name)

        if "available" in payload:
            fields["available"] = SurfboardService._parse_bool(payload.get("available"))

        return fields

    @staticmethod
    def get(board_id):
        board = db.session.get(Surfboard, board_id)
        if not board:
            raise AppError("Surfboard not found.", 404)
        return board

    @staticmethod
    def get_owned(board_id, owner_id):
        board = Surfboard.query.filter_by(id=board_id, owner_id=owner_id).first()
        if not board:
            raise AppError("Surfboard not found or you do not have permission to change it.", 404)
        return board

    @staticmethod
    def create_surfboard(owner_id, payload):
        fields = SurfboardService._clean_fields(payload)
        fields.setdefault("available", True)
        board = Surfboard(
            owner_id=owner_id,
            has_requests=False,
            is_approved=not current_app.config.get("REQUIRE_LISTING_APPROVAL", False),
            **fields,
        )
        db.session.add(board)
        db.session.commit()
        current_app.logger.info("Surfboard %s listed by user %s", board.id, owner_id)
        return board

    @staticmethod
    def update_surfboard(board_id, owner_id, payload):
        board = SurfboardService.get_owned(board_id, owner_id)
        editable = {key: payload[key] for key in SurfboardService.EDITABLE_FIELDS if key in payload}
        for name, value in SurfboardService._clean_fields(editable, partial=True).items():
            setattr(board, name, value)
        db.session.commit()
        return board

    @staticmethod
    def set_availability(board_id, owner_id, available):
        board = SurfboardService.get_owned(board_id, owner_id)
        board.available = SurfboardService._parse_bool(available)
        db.session.commit()
        return board

    @staticmethod
    def toggle_availability(board_id, owner_id):
        board = SurfboardService.get_owned(board_id, owner_id)
        board.available = not board.available
        db.session.commit()
        return board

    @staticmethod
    def delete_surfboard(board_id, owner_id):
        board = SurfboardService.get_owned(board_id, owner_id)
        db.session.delete(board)
        db.session.commit()
        current_app.logger.info("Surfboard %s removed by owner %s", board_id, owner_id)

    @staticmethod
    def public_query():
        query = Surfboard.query.filter(Surfboard.available.is_(True))
        if current_app.config.get("REQUIRE_LISTING_APPROVAL", False):
            query = query.filter(Surfboard.is_approved.is_(True))
        return query

    @staticmethod
    def is_public(board):
        if not board.available:
            return False
        return board.is_approved or not current_app.config.get("REQUIRE_LISTING_APPROVAL", False)

    @staticmethod
    def list_available(page=1, per_page=12, board_type=None, location=None, q=None):
        query = SurfboardService.public_query().options(joinedload(Surfboard.owner))
        if board_type:
            query = query.filter(Surfboard.board_type == SurfboardService._normalize_board_type(board_type))
        if location:
            query = query.filter(Surfboard.location.ilike(f"%{as_text(location)}%"))
        if q:
            term = f"%{as_text(q)}%"
            query = query.filter(or_(Surfboard.title.ilike(term), Surfboard.description.ilike(term)))
        query = query.order_by(Surfboard.created_at.desc(), Surfboard.id.desc())
        return query.paginate(page=page, per_page=per_page, error_out=False)

    @staticmethod
    def list_for_owner(owner_id):
        return (
            Surfboard.query.filter_by(owner_id=owner_id)
            .order_by(Surfboard.created_at.desc(), Surfboard.id.desc())
            .all()
        )

    @staticmethod
    def refresh_has_requests(board):
        """Recompute the denormalized flag: true while a pending or confirmed rental exists."""
        board.has_requests = (
            Rental.query.filter(Rental.surfboard_id == board.id)
            .filter(Rental.status.in_(OPEN_RENTAL_STATUSES))
            .first()
            is not None
        )
        return board.has_requests

    @staticmethod
    def list_all():
        return Surfboard.query.options(joinedload(Surfboard.owner)).order_by(Surfboard.created_at.desc()).all()

    @staticmethod
    def list_pending_approval():
        return (
            Surfboard.query.filter(Surfboard.is_approved.is_(False))
            .order_by(Surfboard.created_at.asc())
            .all()
        )

    @staticmethod
    def approve(board_id):
        board = SurfboardService.get(board_id)
        board.is_approved = True
        db.session.commit()
        current_app.logger.info("Surfboard %s approved", board_id)
        return board

    @staticmethod
    def admin_delete(board_id):
        board = SurfboardService.get(board_id)
        db.session.delete(board)
        db.session.commit()
        current_app.logger.info("Surfboard %s removed by admin", board_id)
