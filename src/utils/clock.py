"""Timestamp helpers."""

from datetime import datetime, timedelta, timezone
from typing import Optional

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


def next_after(previous: Optional[datetime]) -> datetime:
    """Current time, nudged forward so it is strictly later than previous."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + _TICK
    return now
