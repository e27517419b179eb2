"""Calendar helpers for DATE columns (scheduled_for, start_date) that carry no timezone."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_local_date(value: str | date | datetime) -> date:
    """
    "YYYY-MM-DD" is taken as-is (no UTC shift); full ISO datetimes are cut to their calendar day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _DATE_ONLY.match(value):
        return date.fromisoformat(value)
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def months_ago(today: date, months: int) -> date:
    """Calendar-month subtraction, day clamped to the target month's length (Mar 31 - 1 -> Feb 28/29)."""
    month_index = today.year * 12 + (today.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(today.day, last_day))


def week_start(d: date) -> date:
    """Monday of d's week (same convention as PostgreSQL date_trunc('week', ...))."""
    return d - timedelta(days=d.weekday())


def week_end(d: date) -> date:
    return week_start(d) + timedelta(days=6)


def js_weekday(d: date) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday (the convention stored in templates)."""
    return (d.weekday() + 1) % 7


def sunday_on_or_before(d: date) -> date:
    return d - timedelta(days=js_weekday(d))


def current_week_number(start_date: date, today: date) -> int:
    """1-based week of a program started on start_date; negative/zero before it starts."""
    return (today - start_date).days // 7 + 1


def is_today(value: str | date | datetime, today: date | None = None) -> bool:
    today = today or date.today()
    return parse_local_date(value) == today


def is_tomorrow(value: str | date | datetime, today: date | None = None) -> bool:
    today = today or date.today()
    return parse_local_date(value) == today + timedelta(days=1)
