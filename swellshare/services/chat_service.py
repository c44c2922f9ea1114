from flask import current_app
from sqlalchemy.orm import joinedload

from swellshare.errors import AppError
from swellshare.extensions import db
from swellshare.models import Message
from swellshare.services.rental_service import RentalService
from swellshare.utils import as_text

MAX_MESSAGE_LENGTH = 2000


class ChatService:
    @staticmethod
    def list_messages(rental_id, user, after_id=None):
        RentalService.get_for_participant(rental_id, user)
        query = Message.query.options(joinedload(Message.sender)).filter(Message.rental_id == rental_id)
        if after_id:
            query = query.filter(Message.id > int(after_id))
        return query.order_by(Message.created_at.asc(), Message.id.asc()).all()

    @staticmethod
    def post_message(rental_id, user, message):
        RentalService.get_for_participant(rental_id, user)
        text = as_text(message)
        if not text:
            raise AppError("Message is required.", 400)
        if len(text) > MAX_MESSAGE_LENGTH:
            raise AppError(f"Message must be at most {MAX_MESSAGE_LENGTH} characters.", 400)

        row = Message(rental_id=rental_id, sender_id=user.id, message=text)
        db.session.add(row)
        db.session.commit()
        current_app.logger.debug("Message %s posted to rental %s", row.id, rental_id)
        return row
