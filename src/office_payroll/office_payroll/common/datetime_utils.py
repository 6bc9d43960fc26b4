from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> date:
    """Parse a month picker value (YYYY-MM or YYYY-MM-DD) into its first day."""
    v = (value or "").strip()
    try:
        if len(v) == 7:
            parsed = datetime.strptime(v, "%Y-%m").date()
        else:
            parsed = parse_iso_date(v)
    except ValueError:
        raise ValidationError("الشهر غير صالح (YYYY-MM)")
    return parsed.replace(day=1)


def month_start(value: date) -> date:
    return value.replace(day=1)


def next_month(value: date) -> date:
    """First day of the calendar month after ``value``."""
    if value.month == 12:
        return date(value.year + 1, 1, 1)
    return date(value.year, value.month + 1, 1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
