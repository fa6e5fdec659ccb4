"""Clock helpers. Every instant in the identity domain is timezone-aware UTC."""

from datetime import datetime, timedelta, timezone
from typing import Callable

# Anything returning "now"; injected where expiry is evaluated
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def minutes_after(start: datetime, minutes: int) -> datetime:
    return ensure_tz_aware(start) + timedelta(minutes=minutes)
