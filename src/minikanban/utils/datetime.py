"""Utilities for datetime handling."""

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    """Convert datetime to ISO format string with millisecond precision and Z suffix."""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    """Current UTC time as an ISO string."""
    return to_iso(now_utc())


def from_iso(value: str) -> datetime:
    """Parse ISO format string to datetime."""
    # Handle both 'Z' suffix and explicit timezone
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_iso(value: str | None) -> datetime | None:
    """Parse an ISO string, returning None for missing or unparseable values."""
    if not value:
        return None
    try:
        return from_iso(value)
    except ValueError:
        return None
