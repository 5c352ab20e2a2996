"""
Calendar helpers for YYYY-MM-DD date strings.

Snapshot dates stay as zero-padded ISO strings everywhere so they sort
lexicographically; these helpers are only used where real calendar
arithmetic is needed.
"""
from __future__ import annotations

import re
from datetime import MINYEAR, date, datetime

_YMD_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_ymd(s: str) -> date:
    """Parse a zero-padded YYYY-MM-DD string. Raises ValueError on failure."""
    if not isinstance(s, str) or not _YMD_RE.match(s):
        raise ValueError(f"not a YYYY-MM-DD date: {s!r}")
    return datetime.strptime(s, "%Y-%m-%d").date()


def format_ymd(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def today_iso() -> str:
    """Local calendar date, YYYY-MM-DD."""
    return format_ymd(date.today())


def is_leap_year(year: int) -> bool:
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def days_in_month(year: int, month: int) -> int:
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    if month in (4, 6, 9, 11):
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    raise ValueError(f"month out of range: {month}")


def subtract_months(d: date, months: int) -> date:
    """
    Step back `months` calendar months, clamping the day to the target month.

    2025-03-31 minus 1 month is 2025-02-28; minus 13 months is 2024-02-29.
    """
    year = d.year
    month = d.month - months
    while month <= 0:
        month += 12
        year -= 1
    if year < MINYEAR:
        return date.min
    day = min(d.day, days_in_month(year, month))
    return date(year, month, day)


def subtract_years(d: date, years: int) -> date:
    """Step back whole years; Feb 29 becomes Feb 28 on a non-leap target year."""
    year = d.year - years
    if year < MINYEAR:
        return date.min
    day = min(d.day, days_in_month(year, d.month))
    return date(year, d.month, day)
