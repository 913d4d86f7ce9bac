from datetime import datetime

import pytz


def utc_now() -> datetime:
    return datetime.now(pytz.UTC)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    SQLite hands timestamps back without tzinfo even for
    ``TIMESTAMP(timezone=True)`` columns; those are stored as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def parse_datetime(value) -> datetime:
    """Parse an ISO-8601 string (a trailing ``Z`` is accepted) into UTC.

    Raises ValueError for anything that is not a datetime or ISO string.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str):
        raise ValueError("Expected an ISO-8601 datetime string")
    return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def isoformat(value: datetime):
    return as_utc(value).isoformat() if value else None
