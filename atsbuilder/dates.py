"""Date parsing and the 30-day month arithmetic used by every scorer."""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

MONTH = timedelta(days=30)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO date/datetime string or date object into a naive UTC datetime.

    Returns None for None or empty strings. Raises ValueError for anything
    else that cannot be interpreted as a date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported date value: {value!r}")
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def months_between(start: datetime, end: datetime) -> float:
    """Elapsed time in 30-day months. Negative when ``end`` precedes ``start``."""
    return (end - start) / MONTH


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Reference time as a naive UTC datetime; aware values are converted."""
    return parse_date(now) if now else utcnow()
