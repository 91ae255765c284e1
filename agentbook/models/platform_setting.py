from agentbook.extensions import db
from agentbook.models.base import TimestampMixin


class PlatformSetting(TimestampMixin, db.Model):
    """Marketplace-wide key/value settings such as ``commission_pct``."""

    __tablename__ = "platform_settings"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.String(255), nullable=False)
