"""Request clock — "now" in the configured timezone, overridable in tests."""

from datetime import datetime
from zoneinfo import ZoneInfo

from app.config import settings


def get_now() -> datetime:
    return datetime.now(ZoneInfo(settings.default_tz))
