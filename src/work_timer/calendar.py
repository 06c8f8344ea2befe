"""Day classification: sparse overrides on top of a weekday/weekend rule."""

from __future__ import annotations

import calendar as _stdlib_calendar
import re
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping

from work_timer.types import DayType

_MONTH = re.compile(r"([0-9]{4})-([0-9]{2})")


def _as_date(d: date | str) -> date | None:
    """Coerce an ISO string to a date. Returns None when it does not parse."""
    if isinstance(d, date):
        return d
    try:
        return date.fromisoformat(d)
    except (TypeError, ValueError):
        return None


def _key(d: date | str) -> str:
    if isinstance(d, datetime):
        d = d.date()
    return d.isoformat() if isinstance(d, date) else d


def date_key(d: date | str) -> str:
    """Canonical 'YYYY-MM-DD' key for a date, datetime or ISO date string.

    Raises ValueError for anything else, including ISO variants such as
    '20250301' that would never match a computed key.
    """
    key = _key(d)
    parsed = _as_date(key)
    if parsed is None or parsed.isoformat() != key:
        raise ValueError(f"Invalid date {d!r} (expected 'YYYY-MM-DD')")
    return key


def default_day_type(d: date) -> DayType:
    """Saturday and Sunday are weekends, everything else a workday."""
    return DayType.WEEKEND if d.weekday() >= 5 else DayType.WORKDAY


def classify(d: date | str, overrides: Mapping[str, DayType | str]) -> DayType:
    """Effective day type for a date.

    Total over its input: an override wins, otherwise the weekday rule,
    and a string that is not an ISO date falls back to workday.
    """
    key = _key(d)
    override = overrides.get(key) if isinstance(key, str) else None
    if override:
        try:
            return DayType(override)
        except ValueError:
            pass

    parsed = _as_date(d)
    if parsed is None:
        return DayType.WORKDAY
    return default_day_type(parsed)


def set_day_type(
    overrides: Mapping[str, DayType],
    d: date | str,
    day_type: DayType | str,
) -> dict[str, DayType]:
    """Return a new override map with d set to day_type.

    Setting a date to its own computed default removes the override, so the
    map only ever holds real exceptions. Raises ValueError for a date that
    is not 'YYYY-MM-DD' or an unknown day type.
    """
    result = dict(overrides)
    key = date_key(d)
    day_type = DayType(day_type)

    if day_type == default_day_type(date.fromisoformat(key)):
        result.pop(key, None)
    else:
        result[key] = day_type
    return result


def set_day_types(
    overrides: Mapping[str, DayType],
    dates: Iterable[date | str],
    day_type: DayType | str,
) -> dict[str, DayType]:
    """Apply set_day_type to several dates at once."""
    result = dict(overrides)
    for d in dates:
        result = set_day_type(result, d, day_type)
    return result


def parse_month(value: date | str) -> date:
    """First day of the month named by a date or a 'YYYY-MM' string.

    Raises ValueError for a malformed month string.
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.replace(day=1)
    match = _MONTH.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid month {value!r} (expected 'YYYY-MM')")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {value!r} (month must be 01-12)")
    return date(year, month, 1)


def days_in_month(month: date | str) -> list[date]:
    """Every date of the month, first through last inclusive."""
    first = parse_month(month)
    _, length = _stdlib_calendar.monthrange(first.year, first.month)
    return [first + timedelta(days=i) for i in range(length)]
