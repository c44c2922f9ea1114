from swellshare.extensions import db
from swellshare.models.base import MoneyType, PKType, TimestampMixin

RENTAL_STATUSES = ("pending", "confirmed", "canceled", "completed")
OPEN_RENTAL_STATUSES = ("pending", "confirmed")


class Rental(TimestampMixin, db.Model):
    __tablename__ = "rentals"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    surfboard_id = db.Column(PKType, db.ForeignKey("surfboards.id", ondelete="CASCADE"), nullable=False, index=True)
    renter_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    total_price = db.Column(MoneyType, nullable=False)
    status = db.Column(db.String(24), nullable=False, default="pending", index=True)

    surfboard = db.relationship("Surfboard", back_populates="rentals")
    renter = db.relationship("User", back_populates="rentals")
    payment = db.relationship("Payment", back_populates="rental", uselist=False, cascade="all, delete-orphan")
    messages = db.relationship(
        "Message",
        back_populates="rental",
        lazy="dynamic",
        cascade="all, delete-orphan",
        order_by="Message.created_at",
    )

    __table_args__ = (
        db.Index("ix_rentals_renter_status", "renter_id", "status"),
        db.Index("ix_rentals_surfboard_status", "surfboard_id", "status"),
        db.CheckConstraint("end_date >= start_date", name="ck_rental_dates_ordered"),
    )

    @property
    def owner_id(self):
        return self.surfboard.owner_id if self.surfboard else None

    @property
    def days(self):
        return max(1, (self.end_date - self.start_date).days)
