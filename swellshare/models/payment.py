from swellshare.extensions import db
from swellshare.models.base import MoneyType, PKType, TimestampMixin


class Payment(TimestampMixin, db.Model):
    __tablename__ = "payments"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    rental_id = db.Column(PKType, db.ForeignKey("rentals.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    user_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    transaction_id = db.Column(db.String(64), nullable=False, unique=True, index=True)
    amount = db.Column(MoneyType, nullable=False)
    service_fee = db.Column(MoneyType, nullable=False, default=0)
    platform_fee = db.Column(MoneyType, nullable=False, default=0)
    total_amount = db.Column(MoneyType, nullable=False)
    status = db.Column(db.String(24), nullable=False, default="completed", index=True)

    rental = db.relationship("Rental", back_populates="payment")
    user = db.relationship("User", back_populates="payments")
