from swellshare.extensions import db
from swellshare.models.base import PKType, TimestampMixin


class Surfboard(TimestampMixin, db.Model):
    __tablename__ = "surfboards"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    owner_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = db.Column(db.String(140), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price_per_day = db.Column(db.Numeric(10, 2), nullable=False)
    image_url = db.Column(db.String(500), nullable=True)
    location = db.Column(db.String(160), nullable=False, default="", index=True)
    board_type = db.Column(db.String(24), nullable=False, default="Other", index=True)

    length = db.Column(db.Numeric(6, 2), nullable=True)
    width = db.Column(db.Numeric(6, 2), nullable=True)
    thickness = db.Column(db.Numeric(6, 2), nullable=True)
    volume = db.Column(db.Numeric(6, 2), nullable=True)

    available = db.Column(db.Boolean, nullable=False, default=True, index=True)
    has_requests = db.Column(db.Boolean, nullable=False, default=False)
    is_approved = db.Column(db.Boolean, nullable=False, default=True, index=True)

    owner = db.relationship("User", back_populates="surfboards")
    rentals = db.relationship("Rental", back_populates="surfboard", lazy="dynamic", cascade="all, delete-orphan")

    __table_args__ = (
        db.Index("ix_surfboards_owner_available", "owner_id", "available"),
        db.CheckConstraint("price_per_day > 0", name="ck_surfboard_price_positive"),
    )
