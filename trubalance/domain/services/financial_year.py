# trubalance/domain/services/financial_year.py
"""
Indian financial year helpers.

FY runs April to March and is named by the calendar year it starts in:
  - 2025-03-15 → FY 2024  (Apr 2024 – Mar 2025)
  - 2025-04-01 → FY 2025  (Apr 2025 – Mar 2026)
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from trubalance.domain.errors import InvalidInputError

_FY_START_MONTH = 4


def financial_year_for(day: date | datetime | None = None) -> int:
    """Return the FY start year that ``day`` (default: today) belongs to."""
    day = day or date.today()
    return day.year if day.month >= _FY_START_MONTH else day.year - 1


def financial_year_bounds(fy: int) -> tuple[datetime, datetime]:
    """
    Return ``(start, end)`` for FY ``fy``, both inclusive:
    April 1 00:00:00 of ``fy`` to March 31 23:59:59.999999 of ``fy + 1``.
    """
    return (
        datetime(fy, _FY_START_MONTH, 1),
        datetime.combine(date(fy + 1, 3, 31), time.max),
    )


def parse_day(value: Any) -> date | datetime | None:
    """Accept a ``date``, ``datetime`` or ISO string; ``None`` and "" give ``None``."""
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"Unrecognised date: {value!r}")


def as_date(value: Any) -> date | None:
    day = parse_day(value)
    return day.date() if isinstance(day, datetime) else day


def in_financial_year(day: date | datetime | str | None, fy: int) -> bool:
    day = parse_day(day)
    if day is None:
        return False
    if isinstance(day, datetime):
        # compare as naive local wall-clock time
        day = day.replace(tzinfo=None)
    else:
        day = datetime.combine(day, time.min)
    start, end = financial_year_bounds(fy)
    return start <= day <= end


def fy_label(fy: int) -> str:
    """2025 → "2025-26"."""
    return f"{fy}-{(fy + 1) % 100:02d}"
