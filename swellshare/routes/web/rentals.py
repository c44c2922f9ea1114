from flask import Blueprint, flash, redirect, render_template, url_for
from flask_login import current_user, login_required

from swellshare.errors import AppError
from swellshare.services import ChatService, RentalService

web_rental_bp = Blueprint("web_rental", __name__)


@web_rental_bp.get("/rentals/<int:rental_id>")
@login_required
def rental_detail(rental_id):
    try:
        rental = RentalService.get_for_participant(rental_id, current_user)
    except AppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("web_dashboard.dashboard"))

    return render_template(
        "rental_detail.html",
        rental=rental,
        is_owner=current_user.id == rental.owner_id,
        allowed_transitions=sorted(RentalService.allowed_transitions(rental, current_user)),
        messages=ChatService.list_messages(rental.id, current_user),
    )
