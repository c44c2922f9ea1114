from datetime import date, timedelta

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from swellshare.errors import AppError
from swellshare.services import FileService, PaymentService, RentalService, SurfboardService

web_marketplace_bp = Blueprint("web_marketplace", __name__)

SURFBOARD_FORM_FIELDS = (
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
)


def _form_payload():
    payload = {name: request.form.get(name) for name in SURFBOARD_FORM_FIELDS if name in request.form}
    image_file = request.files.get("image")
    if image_file and image_file.filename:
        payload["image_url"] = FileService.save_board_image(
            image_file, current_app.config["UPLOAD_DIR"], current_app.static_url_path
        )
    return payload


@web_marketplace_bp.get("/")
def index():
    page = request.args.get("page", 1, type=int)
    board_type = (request.args.get("board_type") or "").strip() or None
    location = (request.args.get("location") or "").strip() or None
    q = (request.args.get("q") or "").strip() or None
    try:
        boards_page = SurfboardService.list_available(
            page=page, per_page=12, board_type=board_type, location=location, q=q
        )
    except AppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("web_marketplace.index"))
    return render_template(
        "index.html",
        boards_page=boards_page,
        board_types=SurfboardService.BOARD_TYPES,
        filters={"board_type": board_type or "", "location": location or "", "q": q or ""},
    )


@web_marketplace_bp.get("/surfboards/<int:board_id>")
def surfboard_detail(board_id):
    board = SurfboardService.get(board_id)
    is_owner = current_user.is_authenticated and current_user.id == board.owner_id
    is_admin = current_user.is_authenticated and current_user.is_admin
    if not (is_owner or is_admin or SurfboardService.is_public(board)):
        abort(404)

    start = date.today()
    end = start + timedelta(days=3)
    base = RentalService.quote(board, start, end)
    return render_template(
        "surfboard_detail.html",
        board=board,
        is_owner=is_owner,
        default_start=start.isoformat(),
        default_end=end.isoformat(),
        default_days=RentalService.rental_days(start, end),
        breakdown=PaymentService.fee_breakdown(base),
    )


@web_marketplace_bp.route("/surfboards/new", methods=["GET", "POST"])
@login_required
def new_surfboard():
    if request.method == "GET":
        return render_template("surfboard_form.html", board=None, board_types=SurfboardService.BOARD_TYPES)

    try:
        board = SurfboardService.create_surfboard(current_user.id, _form_payload())
        flash("Your surfboard has been listed successfully.", "success")
        return redirect(url_for("web_marketplace.surfboard_detail", board_id=board.id))
    except AppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("web_marketplace.new_surfboard"))


@web_marketplace_bp.route("/surfboards/<int:board_id>/edit", methods=["GET", "POST"])
@login_required
def edit_surfboard(board_id):
    if request.method == "GET":
        board = SurfboardService.get_owned(board_id, current_user.id)
        return render_template("surfboard_form.html", board=board, board_types=SurfboardService.BOARD_TYPES)

    try:
        SurfboardService.update_surfboard(board_id, current_user.id, _form_payload())
        flash("Your surfboard has been updated successfully.", "success")
        return redirect(url_for("web_dashboard.dashboard"))
    except AppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("web_marketplace.edit_surfboard", board_id=board_id))


@web_marketplace_bp.post("/surfboards/<int:board_id>/availability")
@login_required
def toggle_availability(board_id):
    try:
        board = SurfboardService.toggle_availability(board_id, current_user.id)
        flash("Listing is now available." if board.available else "Listing is now hidden.", "success")
    except AppError as exc:
        flash(exc.message, "error")
    return redirect(url_for("web_dashboard.dashboard"))


@web_marketplace_bp.post("/surfboards/<int:board_id>/delete")
@login_required
def delete_surfboard(board_id):
    try:
        SurfboardService.delete_surfboard(board_id, current_user.id)
        flash("Your surfboard has been removed successfully.", "success")
    except AppError as exc:
        flash(exc.message, "error")
    return redirect(url_for("web_dashboard.dashboard"))


@web_marketplace_bp.post("/surfboards/<int:board_id>/rent")
@login_required
def rent_surfboard(board_id):
    card = {
        "cardholder_name": request.form.get("cardholder_name"),
        "card_number": request.form.get("card_number"),
        "expiry_date": request.form.get("expiry_date"),
        "cvv": request.form.get("cvv"),
    }
    try:
        rental, _payment = RentalService.book_with_payment(
            renter=current_user,
            board_id=board_id,
            start=request.form.get("start_date"),
            end=request.form.get("end_date"),
            card=card,
        )
        flash("Payment successful! Your rental has been confirmed.", "success")
        return redirect(url_for("web_rental.rental_detail", rental_id=rental.id))
    except AppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("web_marketplace.surfboard_detail", board_id=board_id))


@web_marketplace_bp.post("/surfboards/<int:board_id>/request")
@login_required
def request_surfboard(board_id):
    try:
        rental = RentalService.request_rental(
            renter=current_user,
            board_id=board_id,
            start=request.form.get("start_date"),
            end=request.form.get("end_date"),
        )
        flash("Rental request sent to the owner.", "success")
        return redirect(url_for("web_rental.rental_detail", rental_id=rental.id))
    except AppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("web_marketplace.surfboard_detail", board_id=board_id))
