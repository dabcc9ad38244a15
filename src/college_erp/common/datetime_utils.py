from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(month: str) -> Optional[tuple[date, date]]:
    """Return (first_day, last_day) for a "YYYY-MM" string, or None if it does not parse."""
    try:
        first = datetime.strptime((month or "").strip(), "%Y-%m").date()
    except ValueError:
        return None
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days from start to end, both included."""
    return abs((end - start).days) + 1
