from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from swellshare.routes.api.v1.serializers import payment_to_dict, rental_to_dict
from swellshare.services import RentalService

api_rental_bp = Blueprint("api_rental", __name__)


@api_rental_bp.post("")
@login_required
def book_rental():
    payload = request.get_json(silent=True) or {}
    rental, payment = RentalService.book_with_payment(
        renter=current_user,
        board_id=payload.get("surfboard_id"),
        start=payload.get("start_date"),
        end=payload.get("end_date"),
        card=payload.get("payment") or {},
    )
    return jsonify({"rental": rental_to_dict(rental), "payment": payment_to_dict(payment)}), 201


@api_rental_bp.post("/requests")
@login_required
def request_rental():
    payload = request.get_json(silent=True) or {}
    rental = RentalService.request_rental(
        renter=current_user,
        board_id=payload.get("surfboard_id"),
        start=payload.get("start_date"),
        end=payload.get("end_date"),
    )
    return jsonify(rental_to_dict(rental)), 201


@api_rental_bp.get("/me")
@login_required
def my_rentals():
    return jsonify([rental_to_dict(r) for r in RentalService.list_for_renter(current_user.id)])


@api_rental_bp.get("/owner")
@login_required
def owner_rentals():
    status = (request.args.get("status") or "").strip().lower() or None
    rows = RentalService.list_for_owner(current_user.id, status=status)
    return jsonify(
        [
            {
                **rental_to_dict(r),
                "renter_email": r.renter.email if r.renter else None,
            }
            for r in rows
        ]
    )


@api_rental_bp.get("/<int:rental_id>")
@login_required
def get_rental(rental_id):
    rental = RentalService.get_for_participant(rental_id, current_user)
    data = rental_to_dict(rental)
    data["allowed_transitions"] = sorted(RentalService.allowed_transitions(rental, current_user))
    data["payment"] = payment_to_dict(rental.payment) if rental.payment else None
    return jsonify(data)


@api_rental_bp.patch("/<int:rental_id>/status")
@login_required
def update_status(rental_id):
    payload = request.get_json(silent=True) or {}
    rental = RentalService.get_for_participant(rental_id, current_user)
    rental = RentalService.transition(rental, payload.get("status"), current_user)
    return jsonify({"id": rental.id, "status": rental.status, "has_requests": rental.surfboard.has_requests})
