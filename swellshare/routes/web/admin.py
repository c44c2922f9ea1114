from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import login_required
from sqlalchemy import func

from swellshare.decorators import admin_required
from swellshare.errors import AppError
from swellshare.extensions import db
from swellshare.models import Payment, Rental, Surfboard, User
from swellshare.services import PlatformService, SurfboardService

web_admin_bp = Blueprint("web_admin", __name__)


@web_admin_bp.get("/admin")
@login_required
@admin_required
def admin_dashboard():
    total_revenue = db.session.query(func.coalesce(func.sum(Payment.platform_fee), 0)).scalar()
    return render_template(
        "admin_dashboard.html",
        pending_boards=SurfboardService.list_pending_approval(),
        all_boards=SurfboardService.list_all(),
        total_users=User.query.count(),
        total_boards=Surfboard.query.count(),
        total_rentals=Rental.query.count(),
        platform_revenue=float(total_revenue or 0),
        fee_settings=PlatformService.fee_settings(),
    )


@web_admin_bp.post("/admin/surfboards/<int:board_id>/approve")
@login_required
@admin_required
def approve_surfboard(board_id):
    try:
        SurfboardService.approve(board_id)
        flash("Surfboard approved successfully.", "success")
    except AppError as exc:
        flash(exc.message, "error")
    return redirect(url_for("web_admin.admin_dashboard"))


@web_admin_bp.post("/admin/surfboards/<int:board_id>/delete")
@login_required
@admin_required
def delete_surfboard(board_id):
    try:
        SurfboardService.admin_delete(board_id)
        flash("Surfboard removed successfully.", "success")
    except AppError as exc:
        flash(exc.message, "error")
    return redirect(url_for("web_admin.admin_dashboard"))


@web_admin_bp.post("/admin/settings/fees")
@login_required
@admin_required
def update_fees():
    try:
        PlatformService.update_fee_settings(request.form.to_dict())
        flash("Fee settings saved.", "success")
    except AppError as exc:
        flash(exc.message, "error")
    return redirect(url_for("web_admin.admin_dashboard"))
