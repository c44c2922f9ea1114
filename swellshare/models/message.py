from swellshare.extensions import db
from swellshare.models.base import PKType, TimestampMixin


class Message(TimestampMixin, db.Model):
    __tablename__ = "messages"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    rental_id = db.Column(PKType, db.ForeignKey("rentals.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = db.Column(db.Text, nullable=False)

    rental = db.relationship("Rental", back_populates="messages")
    sender = db.relationship("User", back_populates="sent_messages", foreign_keys=[sender_id])
