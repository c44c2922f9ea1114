"""JSON shapes returned by the v1 API."""


def _iso(value):
    return value.isoformat() if value is not None else None


def _money(value):
    return str(value) if value is not None else None


def _number(value):
    return float(value) if value is not None else None


def surfboard_to_dict(board):
    return {
        "id": board.id,
        "title": board.title,
        "description": board.description,
        "price_per_day": _money(board.price_per_day),
        "image_url": board.image_url,
        "location": board.location,
        "board_type": board.board_type,
        "length": _number(board.length),
        "width": _number(board.width),
        "thickness": _number(board.thickness),
        "volume": _number(board.volume),
        "available": board.available,
        "has_requests": board.has_requests,
        "is_approved": board.is_approved,
        "owner_id": board.owner_id,
        "created_at": _iso(board.created_at),
        "updated_at": _iso(board.updated_at),
    }


def rental_to_dict(rental, include_surfboard=True):
    data = {
        "id": rental.id,
        "surfboard_id": rental.surfboard_id,
        "renter_id": rental.renter_id,
        "owner_id": rental.owner_id,
        "start_date": _iso(rental.start_date),
        "end_date": _iso(rental.end_date),
        "days": rental.days,
        "total_price": _money(rental.total_price),
        "status": rental.status,
        "created_at": _iso(rental.created_at),
        "updated_at": _iso(rental.updated_at),
    }
    if include_surfboard:
        data["surfboard"] = surfboard_to_dict(rental.surfboard) if rental.surfboard else None
    return data


def payment_to_dict(payment):
    rental = payment.rental
    return {
        "id": payment.id,
        "rental_id": payment.rental_id,
        "user_id": payment.user_id,
        "transaction_id": payment.transaction_id,
        "amount": _money(payment.amount),
        "service_fee": _money(payment.service_fee),
        "platform_fee": _money(payment.platform_fee),
        "total_amount": _money(payment.total_amount),
        "status": payment.status,
        "created_at": _iso(payment.created_at),
        "rental": {
            "id": rental.id,
            "start_date": _iso(rental.start_date),
            "end_date": _iso(rental.end_date),
            "surfboard": {"title": rental.surfboard.title} if rental.surfboard else None,
        }
        if rental
        else None,
    }


def charge_to_dict(charge):
    details = charge.get("payment")
    return {
        "success": charge["success"],
        "message": charge["message"],
        "payment": {key: _money(value) if key != "transactionId" else value for key, value in details.items()}
        if details
        else None,
    }


def message_to_dict(row, viewer_id=None):
    return {
        "id": row.id,
        "rental_id": row.rental_id,
        "sender_id": row.sender_id,
        "sender_email": row.sender.email if row.sender else "Unknown user",
        "is_mine": viewer_id is not None and row.sender_id == viewer_id,
        "message": row.message,
        "created_at": _iso(row.created_at),
    }


def profile_to_dict(profile):
    return {
        "id": profile.id,
        "email": profile.email,
        "full_name": profile.full_name,
        "avatar_url": profile.avatar_url,
        "phone": profile.phone,
        "bio": profile.bio,
        "location": profile.location,
        "created_at": _iso(profile.created_at),
    }


def fee_breakdown_to_dict(breakdown):
    return {key: _money(value) for key, value in breakdown.items()}
