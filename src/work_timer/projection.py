"""End-time projection and countdown.

The projector extends today's standard end-of-work time by the month's
outstanding deficit ("make up the shortfall today"), as long as the
standard end time is still ahead. The countdown decomposes the time left
until the projected end. The current instant is always passed in.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from work_timer.clock import parse_time_of_day, require_naive
from work_timer.types import (
    Countdown,
    DailyCalculation,
    DashboardStats,
    DayType,
    EndTimeProjection,
    SettingsConfig,
)


def project_end_time(
    standard_end: str,
    today: DailyCalculation | None,
    deficit_hours: float,
    now: datetime,
) -> EndTimeProjection:
    """Projected end-of-work time for the day containing now.

    - Unparseable standard_end: both fields None.
    - No calculation for today, a rest-type day, or no positive hours yet:
      projected == standard.
    - Deficit present and standard end still in the future: projected is
      standard + ceil(deficit_hours * 60) minutes.
    - Standard end already passed: no extension.

    Raises TypeError if now is timezone-aware.
    """
    require_naive(now, "now")

    standard = parse_time_of_day(standard_end, now.date())
    if standard is None:
        return EndTimeProjection(projected_end_time=None, standard_end_time=None)

    if (
        today is None
        or not DayType(today.day_type).is_workday
        or not today.effective_hours > 0
    ):
        return EndTimeProjection(projected_end_time=standard, standard_end_time=standard)

    projected = standard
    if deficit_hours > 0 and standard > now:
        # deficit_hours is a float sum of minutes/60; a whole-minute
        # deficit must not round up to the next minute.
        deficit_minutes = math.ceil(round(deficit_hours * 60, 6))
        projected = standard + timedelta(minutes=deficit_minutes)

    return EndTimeProjection(projected_end_time=projected, standard_end_time=standard)


def project_from_stats(
    settings: SettingsConfig,
    stats: DashboardStats,
    now: datetime,
) -> EndTimeProjection:
    """project_end_time using today's entry from a month's stats.

    When now falls outside the aggregated month there is no calculation
    for today and the standard end time is returned unchanged.
    """
    today = stats.daily.get(now.date().isoformat())
    return project_end_time(
        settings.standard_work_time.end, today, stats.deficit_hours, now
    )


def countdown(projected_end: datetime | None, now: datetime) -> Countdown | None:
    """Whole hours/minutes/seconds left until projected_end.

    None when there is no projection yet. Once the remaining time reaches
    zero the countdown is over and all components are 0.
    """
    if projected_end is None:
        return None
    require_naive(now, "now")

    total_seconds = math.floor((projected_end - now).total_seconds())
    if total_seconds <= 0:
        return Countdown(hours=0, minutes=0, seconds=0, is_over=True)

    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return Countdown(hours=hours, minutes=minutes, seconds=seconds, is_over=False)
