"""Datetime helpers.

MongoDB hands back naive datetimes in UTC, truncated to milliseconds, so
everything stored or compared here is naive UTC at millisecond precision too.
"""
from datetime import datetime, timezone


def _to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return _to_millis(datetime.now(timezone.utc).replace(tzinfo=None))


def to_naive_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to naive UTC at millisecond precision.

    Examples:
        >>> from datetime import timedelta
        >>> to_naive_utc(datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2))))
        datetime.datetime(2024, 1, 1, 10, 0)
        >>> to_naive_utc(datetime(2024, 1, 1, 12, 0, 0, 123456))
        datetime.datetime(2024, 1, 1, 12, 0, 0, 123000)
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return _to_millis(value)
