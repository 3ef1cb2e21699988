"""Timestamps written to preferences and document metadata."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def to_timestamp(dt: datetime | None = None) -> str:
    """Format as an ISO 8601 UTC timestamp with second precision.

    Naive datetimes are taken to be UTC; None means now.
    """
    dt = dt or utc_now()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="seconds")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored timestamp; empty or malformed values give None."""
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


__all__ = [
    "utc_now",
    "to_timestamp",
    "parse_timestamp",
]
