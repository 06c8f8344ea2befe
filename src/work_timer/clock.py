"""Interval arithmetic: 'HH:MM' parsing and overnight-aware elapsed minutes."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

_HHMM = re.compile(r"[0-9]{2}:[0-9]{2}")


def require_naive(dt: datetime, name: str) -> None:
    """Reject timezone-aware datetimes. All times are wall-clock."""
    if dt.tzinfo is not None:
        raise TypeError(
            f"{name} must be a naive datetime (no tzinfo), "
            f"got tzinfo={dt.tzinfo!r}. "
            f"All times are wall-clock local times."
        )


def is_hhmm(s: object) -> bool:
    """True if s has the two-digit-colon-two-digit shape (range unchecked)."""
    return isinstance(s, str) and _HHMM.fullmatch(s) is not None


def parse_time_of_day(s: str | None, anchor: date | None = None) -> datetime | None:
    """Parse 'HH:MM' to a datetime on the anchor date (default: today).

    Seconds and microseconds are zero, so two parses on the same anchor
    subtract cleanly. Returns None for anything else, including shapes
    that are right but out of range ("25:61").
    """
    if not is_hhmm(s):
        return None
    hours, minutes = (int(part) for part in s.split(":"))
    if hours > 23 or minutes > 59:
        return None
    if anchor is None:
        anchor = date.today()
    return datetime.combine(anchor, time(hours, minutes))


def minutes_between(a: datetime, b: datetime) -> int:
    """Elapsed minutes from a to b.

    When b is not after a the pair is an overnight span:
    (a -> midnight) + (midnight -> b). Equal inputs give a full day.
    """
    if b > a:
        return int((b - a).total_seconds()) // 60

    midnight = datetime.combine(a.date() + timedelta(days=1), time(0, 0))
    day_start = datetime.combine(b.date(), time(0, 0))
    to_midnight = int((midnight - a).total_seconds()) // 60
    from_midnight = int((b - day_start).total_seconds()) // 60
    return to_midnight + from_midnight


def minutes_of_day(dt: datetime) -> int:
    """Minutes since midnight for a parsed time of day."""
    return dt.hour * 60 + dt.minute
