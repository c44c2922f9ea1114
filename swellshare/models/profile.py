from swellshare.extensions import db
from swellshare.models.base import PKType, TimestampMixin


class Profile(TimestampMixin, db.Model):
    __tablename__ = "profiles"

    id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    email = db.Column(db.String(255), nullable=True)
    full_name = db.Column(db.String(120), nullable=True)
    avatar_url = db.Column(db.String(500), nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    bio = db.Column(db.Text, nullable=True)
    location = db.Column(db.String(160), nullable=True)

    user = db.relationship("User", back_populates="profile")
