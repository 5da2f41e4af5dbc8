# File: src/timetracker/utils/datetime.py
"""UTC datetime utilities. Timestamps are stored as naive UTC."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get current UTC datetime as NAIVE for database storage."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC tzinfo to a naive UTC timestamp read back from the database."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
