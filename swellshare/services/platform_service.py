from decimal import Decimal, InvalidOperation

from flask import current_app

from swellshare.errors import AppError
from swellshare.extensions import db
from swellshare.models import PlatformSetting

FEE_SETTING_KEYS = ("SERVICE_FEE_PCT", "SERVICE_FEE_FLAT", "PLATFORM_FEE_PCT")


class PlatformService:
    @staticmethod
    def get_setting(key, default=None):
        setting = db.session.get(PlatformSetting, key)
        if not setting:
            return default
        return setting.value

    @staticmethod
    def get_decimal(key, default=None):
        """Read a decimal setting: stored override first, then app config."""
        if default is None:
            default = current_app.config.get(key, "0")
        raw = PlatformService.get_setting(key, str(default))
        try:
            return Decimal(str(raw))
        except (InvalidOperation, ValueError):
            return Decimal(str(default))

    @staticmethod
    def set_setting(key, value):
        setting = db.session.get(PlatformSetting, key)
        if setting:
            setting.value = str(value)
        else:
            setting = PlatformSetting(key=key, value=str(value))
            db.session.add(setting)
        db.session.commit()
        return setting

    @staticmethod
    def fee_settings():
        return {key: PlatformService.get_decimal(key) for key in FEE_SETTING_KEYS}

    @staticmethod
    def update_fee_settings(payload):
        updated = {}
        for key in FEE_SETTING_KEYS:
            raw = payload.get(key, payload.get(key.lower()))
            if raw is None or str(raw).strip() == "":
                continue
            try:
                value = Decimal(str(raw).strip())
            except (InvalidOperation, ValueError) as exc:
                raise AppError(f"Invalid value for {key.lower()}.", 400) from exc
            if value < 0 or (key.endswith("_PCT") and value > 100):
                raise AppError(f"Invalid value for {key.lower()}.", 400)
            PlatformService.set_setting(key, value)
            updated[key] = value
        if updated:
            current_app.logger.info("Fee settings updated: %s", ", ".join(sorted(updated)))
        return PlatformService.fee_settings()
