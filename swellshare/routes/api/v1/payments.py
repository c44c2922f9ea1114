from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from swellshare.routes.api.v1.serializers import charge_to_dict, fee_breakdown_to_dict, payment_to_dict
from swellshare.services import PaymentService

api_payment_bp = Blueprint("api_payment", __name__)


@api_payment_bp.post("/process")
@login_required
def process_payment():
    payload = request.get_json(silent=True) or {}
    charge = PaymentService.simulate_charge(
        amount=payload.get("amount"),
        card=payload.get("paymentData") or payload.get("payment") or {},
        surfboard_id=payload.get("surfboardId") or payload.get("surfboard_id"),
        start_date=payload.get("startDate") or payload.get("start_date"),
        end_date=payload.get("endDate") or payload.get("end_date"),
    )
    return jsonify(charge_to_dict(charge)), 200 if charge["success"] else 402


@api_payment_bp.get("/quote")
def quote():
    amount = PaymentService.parse_amount(request.args.get("amount"))
    return jsonify(fee_breakdown_to_dict(PaymentService.fee_breakdown(amount)))


@api_payment_bp.get("/me")
@login_required
def my_payments():
    return jsonify([payment_to_dict(p) for p in PaymentService.list_for_user(current_user.id)])


@api_payment_bp.get("/<transaction_id>")
@login_required
def get_payment(transaction_id):
    return jsonify(payment_to_dict(PaymentService.get_for_viewer(transaction_id, current_user)))
