from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Union

from ..core.exceptions import ValidationError

_MONTH_LOOKUP = {name.lower(): name for name in calendar.month_name if name}
_MONTH_LOOKUP.update({abbr.lower(): calendar.month_name[i] for i, abbr in enumerate(calendar.month_abbr) if abbr})


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Union[date, str], field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date((value or "").strip())
    except (ValueError, AttributeError):
        raise ValidationError(f"{field_name} should be in YYYY-MM-DD format")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def current_period(now: datetime) -> tuple[str, str]:
    """(English month name, four-digit year) for the given moment."""
    return calendar.month_name[now.month], f"{now.year:04d}"


def normalize_period(month: Union[int, str], year: Union[int, str]) -> tuple[str, str]:
    """Normalize a payslip period to its stored form, e.g. (10, 2026) -> ("October", "2026").

    Months are accepted as 1-12 or as full/three-letter English names in any case.
    """
    if isinstance(month, int) and not isinstance(month, bool):
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid month: {month}")
        month_name = calendar.month_name[month]
    else:
        key = str(month or "").strip().lower()
        if key.isdigit():
            return normalize_period(int(key), year)
        month_name = _MONTH_LOOKUP.get(key)
        if not month_name:
            raise ValidationError(f"Invalid month: {month!r}")

    year_s = str(year).strip() if year is not None else ""
    if len(year_s) != 4 or not year_s.isdigit():
        raise ValidationError(f"Year must be 4 digits: {year!r}")
    return month_name, year_s
