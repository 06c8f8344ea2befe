"""Work-hour calculator: gross span, break subtraction and weekend capping."""

from __future__ import annotations

from datetime import date, datetime

from work_timer.clock import minutes_between, parse_time_of_day
from work_timer.types import (
    DayType,
    SettingsConfig,
    TimeEntry,
    TimeRange,
    WorkHours,
)

_NO_HOURS = WorkHours(total_hours=0, effective_hours=0)


def break_overlap_minutes(
    start: datetime, end: datetime, rest: TimeRange, anchor: date
) -> int:
    """Minutes of a break interval that fall inside [start, end].

    A break that does not parse, does not touch the interval, or only
    touches it at a single instant contributes 0.
    """
    rest_start = parse_time_of_day(rest.start, anchor)
    rest_end = parse_time_of_day(rest.end, anchor)
    if rest_start is None or rest_end is None:
        return 0

    overlap_start = max(start, rest_start)
    overlap_end = min(end, rest_end)
    if overlap_start >= overlap_end:
        return 0
    return minutes_between(overlap_start, overlap_end)


def compute_effective_hours(
    entry: TimeEntry | None,
    day_type: DayType | str,
    settings: SettingsConfig,
    anchor: date | None = None,
) -> WorkHours:
    """Effective worked hours for one day.

    1. Gross minutes between start and end (overnight-aware).
    2. Subtract the overlap with each break of the day type's break set.
       Breaks are not deduplicated against each other.
    3. Floor at zero, convert to hours.
    4. Weekends and holidays are clamped to settings.max_weekend_hours.

    Missing or unparseable start/end is not an error: the day is worth
    zero hours, and so is an entry whose start equals its end. The anchor
    date only pins the parsed times to one day; it defaults to today and
    does not affect the result.
    """
    if entry is None or not entry.start or not entry.end:
        return _NO_HOURS

    if anchor is None:
        anchor = date.today()
    start = parse_time_of_day(entry.start, anchor)
    end = parse_time_of_day(entry.end, anchor)
    if start is None or end is None or start == end:
        return _NO_HOURS

    day_type = DayType(day_type)
    total_minutes = minutes_between(start, end)
    effective_minutes = total_minutes

    for rest in settings.rest_times_for(day_type):
        effective_minutes -= break_overlap_minutes(start, end, rest, anchor)

    effective_hours = max(0, effective_minutes) / 60

    if not day_type.is_workday and effective_hours > settings.max_weekend_hours:
        effective_hours = settings.max_weekend_hours

    return WorkHours(
        total_hours=total_minutes / 60,
        effective_hours=effective_hours,
    )
