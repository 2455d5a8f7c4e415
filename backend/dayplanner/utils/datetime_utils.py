"""
Timezone-aware datetime utilities.

SQLite hands back naive datetimes; everything stored is UTC, so naive
values are treated as UTC throughout.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Args:
        dt: datetime to convert (can be None, naive, or timezone-aware)

    Returns:
        Optional[datetime]: UTC timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def is_within(dt: Optional[datetime], window: timedelta, now: Optional[datetime] = None) -> bool:
    """Check whether ``dt`` falls inside the trailing ``window`` ending at ``now``."""
    moment = ensure_utc(dt)
    if moment is None:
        return False
    return (ensure_utc(now) or now_utc()) - moment < window


def format_date(dt: Optional[datetime]) -> str:
    """Render a datetime as YYYY-MM-DD for exports ("" when missing)."""
    moment = ensure_utc(dt)
    return moment.date().isoformat() if moment else ""
