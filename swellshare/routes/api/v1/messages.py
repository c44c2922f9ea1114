from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from swellshare.routes.api.v1.serializers import message_to_dict
from swellshare.services import ChatService

api_message_bp = Blueprint("api_message", __name__)


@api_message_bp.get("/<int:rental_id>/messages")
@login_required
def list_messages(rental_id):
    rows = ChatService.list_messages(rental_id, current_user, after_id=request.args.get("after_id", type=int))
    return jsonify(
        {
            "items": [message_to_dict(row, viewer_id=current_user.id) for row in rows],
            "poll_interval": current_app.config["MESSAGE_POLL_INTERVAL_SECONDS"],
        }
    )


@api_message_bp.post("/<int:rental_id>/messages")
@login_required
def send_message(rental_id):
    payload = request.get_json(silent=True) or {}
    row = ChatService.post_message(rental_id, current_user, payload.get("message"))
    return jsonify(message_to_dict(row, viewer_id=current_user.id)), 201
