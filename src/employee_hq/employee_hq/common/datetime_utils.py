from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def load_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    return ZoneInfo(name)


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current business time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz) if tz else datetime.now()


def to_business_time(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Return `value` as a naive business-local timestamp.

    Naive timestamps are assumed to already be business-local. Rows are stored
    naive, so everything the services compare is naive too.
    """
    if value.tzinfo is None:
        return value
    if tz is not None:
        value = value.astimezone(tz)
    return value.replace(tzinfo=None)


def elapsed_hours(start: datetime, end: datetime) -> float:
    """Real-valued hours between two timestamps (not truncated)."""
    return (end - start).total_seconds() / 3600


def month_bounds(day: date) -> Tuple[date, date]:
    """Return [first day of month, first day of next month)."""
    start = day.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def trailing_days(today: date, days: int) -> List[date]:
    """The last `days` calendar days ending at `today`, oldest first."""
    return [today - timedelta(days=i) for i in range(days - 1, -1, -1)]
