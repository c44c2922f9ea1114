from flask_login import UserMixin

from swellshare.extensions import db
from swellshare.models.base import PKType, TimestampMixin


class User(UserMixin, TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(24), nullable=False, default="user", index=True)
    is_active_user = db.Column(db.Boolean, nullable=False, default=True)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    profile = db.relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    surfboards = db.relationship("Surfboard", back_populates="owner", lazy="dynamic")
    rentals = db.relationship("Rental", back_populates="renter", lazy="dynamic")
    payments = db.relationship("Payment", back_populates="user", lazy="dynamic")
    sent_messages = db.relationship(
        "Message",
        back_populates="sender",
        lazy="dynamic",
        foreign_keys="Message.sender_id",
    )

    @property
    def is_admin(self):
        return self.role == "admin"

    @property
    def display_name(self):
        if self.profile and self.profile.full_name:
            return self.profile.full_name
        return self.email
