from decimal import Decimal, InvalidOperation

from flask import current_app

from agentbook.errors import ValidationError
from agentbook.extensions import db
from agentbook.models import PlatformSetting
from agentbook.services.unit_of_work import unit_of_work

# Settings an admin may change through the API.
EDITABLE_SETTINGS = {"commission_pct"}


class PlatformService:
    @staticmethod
    def default_commission_pct():
        return Decimal(str(current_app.config.get("DEFAULT_COMMISSION_PCT", "10")))

    @staticmethod
    def get_setting(key, default=None):
        setting = db.session.get(PlatformSetting, key)
        if not setting:
            return default
        return setting.value

    @staticmethod
    def get_decimal(key, default):
        raw = PlatformService.get_setting(key, str(default))
        try:
            return Decimal(str(raw))
        except InvalidOperation:
            current_app.logger.warning("Platform setting %s holds a non-numeric value %r", key, raw)
            return Decimal(str(default))

    @staticmethod
    def set_setting(key, value):
        if key not in EDITABLE_SETTINGS:
            raise ValidationError(f"Unknown setting: {key}.")
        if key == "commission_pct":
            try:
                pct = Decimal(str(value))
            except InvalidOperation as exc:
                raise ValidationError("Commission percentage must be a number.") from exc
            if not pct.is_finite() or pct < 0 or pct > 100:
                raise ValidationError("Commission percentage must be between 0 and 100.")
            value = pct

        with unit_of_work():
            setting = db.session.get(PlatformSetting, key)
            if setting:
                setting.value = str(value)
            else:
                setting = PlatformSetting(key=key, value=str(value))
                db.session.add(setting)
        current_app.logger.info("Platform setting %s set to %s", key, value)
        return setting
