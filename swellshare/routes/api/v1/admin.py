from flask import Blueprint, jsonify, request
from flask_login import login_required

from swellshare.decorators import admin_required
from swellshare.routes.api.v1.serializers import fee_breakdown_to_dict, surfboard_to_dict
from swellshare.services import PlatformService, SurfboardService

api_admin_bp = Blueprint("api_admin", __name__)


@api_admin_bp.get("/surfboards")
@login_required
@admin_required
def all_surfboards():
    return jsonify([surfboard_to_dict(board) for board in SurfboardService.list_all()])


@api_admin_bp.get("/surfboards/pending")
@login_required
@admin_required
def pending_surfboards():
    return jsonify([surfboard_to_dict(board) for board in SurfboardService.list_pending_approval()])


@api_admin_bp.post("/surfboards/<int:board_id>/approve")
@login_required
@admin_required
def approve_surfboard(board_id):
    board = SurfboardService.approve(board_id)
    return jsonify({"id": board.id, "is_approved": board.is_approved})


@api_admin_bp.delete("/surfboards/<int:board_id>")
@login_required
@admin_required
def delete_surfboard(board_id):
    SurfboardService.admin_delete(board_id)
    return jsonify({"ok": True})


@api_admin_bp.get("/settings/fees")
@login_required
@admin_required
def fee_settings():
    return jsonify(fee_breakdown_to_dict(PlatformService.fee_settings()))


@api_admin_bp.put("/settings/fees")
@login_required
@admin_required
def update_fee_settings():
    payload = request.get_json(silent=True) or {}
    return jsonify(fee_breakdown_to_dict(PlatformService.update_fee_settings(payload)))
