# Rev 0.1.0
"""Date helpers shared by the timeline and the filters.

Stored dates are ISO strings. A date-only value ("2023-01-15") means midnight
UTC; datetimes without an offset are taken as UTC as well.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

DateLike = Union[str, date, datetime]

ONE_DAY = timedelta(days=1)


def parse_utc(value: DateLike) -> datetime:
    """Return an aware UTC datetime for an ISO string, date or datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            raise ValueError("empty date")
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        dt = datetime.fromisoformat(s)
    else:
        raise TypeError(f"unsupported date value: {value!r}")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def midnight_utc(value: DateLike) -> datetime:
    return parse_utc(value).replace(hour=0, minute=0, second=0, microsecond=0)


def fmt_date(value: DateLike) -> str:
    """dd/mm/yyyy, the way dates are shown across the dashboard."""
    return parse_utc(value).strftime("%d/%m/%Y")


def fmt_day_month(value: DateLike) -> str:
    return parse_utc(value).strftime("%d/%m")


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def date_or_today(value: Optional[DateLike]) -> str:
    """UTC calendar date of `value` as YYYY-MM-DD; today when missing or unparsable."""
    if value is None or value == "":
        return today_iso()
    try:
        return parse_utc(value).date().isoformat()
    except ValueError:
        return today_iso()
