from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy import func

from swellshare.errors import AppError
from swellshare.extensions import cache, db
from swellshare.models import Rental, Surfboard
from swellshare.routes.api.v1.serializers import fee_breakdown_to_dict, surfboard_to_dict
from swellshare.services import FileService, PaymentService, RentalService, SurfboardService

api_surfboard_bp = Blueprint("api_surfboard", __name__)


def _visible_to_viewer(board):
    if current_user.is_authenticated and (current_user.is_admin or current_user.id == board.owner_id):
        return True
    return SurfboardService.is_public(board)


def _request_payload():
    if request.is_json:
        return request.get_json(silent=True) or {}
    payload = request.form.to_dict()
    image = request.files.get("image")
    if image and image.filename:
        payload["image_url"] = FileService.save_board_image(
            image, current_app.config["UPLOAD_DIR"], current_app.static_url_path
        )
    return payload


@api_surfboard_bp.get("")
def list_surfboards():
    page = request.args.get("page", default=1, type=int)
    per_page = request.args.get("per_page", default=12, type=int)
    paginated = SurfboardService.list_available(
        page=page,
        per_page=max(1, min(per_page, 50)),
        board_type=request.args.get("board_type"),
        location=request.args.get("location"),
        q=request.args.get("q"),
    )
    return jsonify(
        {
            "items": [surfboard_to_dict(board) for board in paginated.items],
            "meta": {
                "page": paginated.page,
                "pages": paginated.pages,
                "total": paginated.total,
                "has_next": paginated.has_next,
                "has_prev": paginated.has_prev,
            },
        }
    )


@api_surfboard_bp.get("/types")
def board_types():
    return jsonify(list(SurfboardService.BOARD_TYPES))


@api_surfboard_bp.get("/stats")
@cache.cached(timeout=120)
def marketplace_stats():
    listed = SurfboardService.public_query().count()
    locations = (
        db.session.query(func.count(func.distinct(Surfboard.location)))
        .filter(Surfboard.location != "")
        .scalar()
    )
    completed = Rental.query.filter_by(status="completed").count()
    return jsonify(
        {
            "boards_listed": listed,
            "locations": int(locations or 0),
            "completed_rentals": completed,
        }
    )


@api_surfboard_bp.get("/mine")
@login_required
def my_surfboards():
    return jsonify([surfboard_to_dict(board) for board in SurfboardService.list_for_owner(current_user.id)])


@api_surfboard_bp.get("/<int:board_id>")
def get_surfboard(board_id):
    board = SurfboardService.get(board_id)
    if not _visible_to_viewer(board):
        raise AppError("Surfboard not found.", 404)
    return jsonify(surfboard_to_dict(board))


@api_surfboard_bp.get("/<int:board_id>/quote")
def quote(board_id):
    board = SurfboardService.get(board_id)
    if not _visible_to_viewer(board):
        raise AppError("Surfboard not found.", 404)
    start_date, end_date = RentalService.parse_range(request.args.get("start_date"), request.args.get("end_date"))
    base = RentalService.quote(board, start_date, end_date)
    return jsonify(
        {
            "surfboard_id": board.id,
            "days": RentalService.rental_days(start_date, end_date),
            "price_per_day": str(board.price_per_day),
            **fee_breakdown_to_dict(PaymentService.fee_breakdown(base)),
        }
    )


@api_surfboard_bp.post("")
@login_required
def create_surfboard():
    board = SurfboardService.create_surfboard(current_user.id, _request_payload())
    return jsonify(surfboard_to_dict(board)), 201


@api_surfboard_bp.patch("/<int:board_id>")
@login_required
def update_surfboard(board_id):
    board = SurfboardService.update_surfboard(board_id, current_user.id, _request_payload())
    return jsonify(surfboard_to_dict(board))


@api_surfboard_bp.patch("/<int:board_id>/availability")
@login_required
def update_availability(board_id):
    payload = request.get_json(silent=True) or {}
    if "available" in payload:
        board = SurfboardService.set_availability(board_id, current_user.id, payload["available"])
    else:
        board = SurfboardService.toggle_availability(board_id, current_user.id)
    return jsonify({"id": board.id, "available": board.available})


@api_surfboard_bp.delete("/<int:board_id>")
@login_required
def delete_surfboard(board_id):
    SurfboardService.delete_surfboard(board_id, current_user.id)
    return jsonify({"ok": True})
