"""Helpers for the zero-padded ``YYYY-MM-DD`` / ``YYYY-MM`` strings used as keys.

Both formats sort lexicographically in calendar order, so range checks are
plain string comparisons.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import List

DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def is_day(value) -> bool:
    """True for a real calendar date written as ``YYYY-MM-DD``."""
    if not isinstance(value, str) or not DAY_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_month(value) -> bool:
    return isinstance(value, str) and bool(MONTH_RE.match(value))


def day_string(d: date) -> str:
    return d.isoformat()


def month_of(day: str) -> str:
    return day[:7]


def next_month(month: str) -> str:
    year, mon = (int(part) for part in month.split("-"))
    if mon == 12:
        return f"{year + 1}-01"
    return f"{year}-{mon + 1:02d}"


def months_spanned(start_day: str, end_day: str) -> List[str]:
    """Inclusive list of ``YYYY-MM`` months touched by ``[start_day, end_day]``."""
    months: List[str] = []
    current = month_of(start_day)
    last = month_of(end_day)
    while current <= last:
        months.append(current)
        current = next_month(current)
    return months


def day_window(end: date, days: int) -> List[str]:
    """``days`` consecutive dates ending at ``end`` (inclusive), oldest first."""
    start = end - timedelta(days=days - 1)
    return [day_string(start + timedelta(days=i)) for i in range(days)]
