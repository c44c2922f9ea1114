from swellshare.extensions import db
from swellshare.models.base import TimestampMixin


class PlatformSetting(TimestampMixin, db.Model):
    """Runtime overrides for fee settings, keyed by config name."""

    __tablename__ = "platform_settings"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.String(255), nullable=False)
