"""Date and timestamp utilities"""

from datetime import datetime, timedelta, timezone

from lypay_survey.domain.exceptions import MalformedEntryError


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts a trailing "Z" as produced by JavaScript's toISOString().

    Raises:
        MalformedEntryError: If the value is not a valid ISO-8601 string
    """
    if not isinstance(value, str):
        raise MalformedEntryError(f"Timestamp must be a string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError as e:
        raise MalformedEntryError(f"Unparsable timestamp: {value!r}") from e


def trailing_cutoff(now: datetime, hours: int = 0, days: int = 0) -> datetime:
    """Start of a trailing window ending at now"""
    return ensure_utc(now) - timedelta(hours=hours, days=days)
