"""Time helpers. Timestamps are stored as naive UTC."""

from datetime import datetime

import pytz

from app.config import get_settings

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)


def utcnow() -> datetime:
    return datetime.now(pytz.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime | None) -> datetime | None:
    """Normalize a datetime for storage.

    Naive values are read as local time in the configured timezone.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = tz.localize(value)
    return value.astimezone(pytz.utc).replace(tzinfo=None)
