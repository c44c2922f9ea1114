from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from swellshare.errors import AppError
from swellshare.models import RENTAL_STATUSES
from swellshare.services import PaymentService, RentalService, SurfboardService
from swellshare.utils import is_safe_redirect

web_dashboard_bp = Blueprint("web_dashboard", __name__)


@web_dashboard_bp.get("/dashboard")
@login_required
def dashboard():
    request_status = (request.args.get("requests") or "").strip().lower() or None
    if request_status and request_status not in RENTAL_STATUSES:
        flash("Unknown rental status filter.", "error")
        return redirect(url_for("web_dashboard.dashboard"))

    return render_template(
        "dashboard.html",
        my_boards=SurfboardService.list_for_owner(current_user.id),
        my_rentals=RentalService.list_for_renter(current_user.id),
        owner_rentals=RentalService.list_for_owner(current_user.id, status=request_status),
        payments=PaymentService.list_for_user(current_user.id),
        request_status=request_status or "",
        rental_statuses=RENTAL_STATUSES,
    )


@web_dashboard_bp.post("/rentals/<int:rental_id>/status")
@login_required
def update_rental_status(rental_id):
    try:
        rental = RentalService.get_for_participant(rental_id, current_user)
        rental = RentalService.transition(rental, request.form.get("status"), current_user)
        flash(f"The rental has been {rental.status} successfully.", "success")
    except AppError as exc:
        flash(exc.message, "error")
    next_url = (request.form.get("next") or "").strip()
    if is_safe_redirect(next_url):
        return redirect(next_url)
    return redirect(url_for("web_dashboard.dashboard"))
