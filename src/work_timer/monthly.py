"""Monthly aggregation: per-day calculations folded into DashboardStats."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Mapping

from work_timer.calculator import compute_effective_hours
from work_timer.calendar import classify, days_in_month, parse_month
from work_timer.types import (
    TARGET_HOURS_PER_WORKDAY,
    DailyCalculation,
    DashboardStats,
    DayType,
    SettingsConfig,
    TimeEntry,
)

if TYPE_CHECKING:
    from work_timer.store import TimerState

logger = logging.getLogger(__name__)


def aggregate_month(
    month: date | str,
    time_entries: Mapping[str, TimeEntry],
    overrides: Mapping[str, DayType],
    settings: SettingsConfig,
) -> DashboardStats:
    """Compute DashboardStats for every date of a month.

    Every date gets a DailyCalculation, including days with no data, so
    callers can tell "not recorded" rows apart from the totals. Only days
    with positive effective hours are counted: workday/restday-work into
    the workday bucket, weekend/holiday into the rest bucket.
    """
    first = parse_month(month)

    workday_hours = 0.0
    workday_count = 0
    weekend_hours = 0.0
    weekend_count = 0
    daily: dict[str, DailyCalculation] = {}

    for d in days_in_month(first):
        key = d.isoformat()
        day_type = classify(d, overrides)
        hours = compute_effective_hours(time_entries.get(key), day_type, settings, d)
        daily[key] = DailyCalculation(day_type=day_type, effective_hours=hours.effective_hours)

        if hours.effective_hours > 0:
            if day_type.is_workday:
                workday_hours += hours.effective_hours
                workday_count += 1
            else:
                # Already capped by the calculator.
                weekend_hours += hours.effective_hours
                weekend_count += 1

    average_hours = workday_hours / workday_count if workday_count > 0 else 0
    workday_overtime = workday_hours - workday_count * TARGET_HOURS_PER_WORKDAY
    weekend_overtime = weekend_hours

    deficit_hours = 0.0
    if 0 < average_hours < TARGET_HOURS_PER_WORKDAY:
        deficit_hours = workday_count * TARGET_HOURS_PER_WORKDAY - workday_hours

    return DashboardStats(
        month_key=first.strftime("%Y-%m"),
        total_workday_count=workday_count,
        total_weekend_day_count=weekend_count,
        total_workday_hours=workday_hours,
        total_weekend_hours=weekend_hours,
        average_hours=average_hours,
        workday_overtime=workday_overtime,
        weekend_overtime=weekend_overtime,
        total_overtime=workday_overtime + weekend_overtime,
        deficit_hours=deficit_hours,
        daily=daily,
    )


class MonthlyStatsCache:
    """Memoizes aggregate_month per (month, entries, overrides, settings) version.

    Recomputes only when the month changes or the state reports a new
    version for one of its three inputs.
    """

    def __init__(self) -> None:
        self._key: tuple[str, int, int, int] | None = None
        self._stats: DashboardStats | None = None
        self.hits = 0
        self.misses = 0

    def get(self, state: "TimerState", month: date | str) -> DashboardStats:
        key = (parse_month(month).isoformat(),) + state.versions
        if key == self._key and self._stats is not None:
            self.hits += 1
            return self._stats

        self.misses += 1
        logger.debug("Recomputing month stats", extra={"cache_key": key})
        snapshot = state.snapshot
        self._stats = aggregate_month(
            month, snapshot.time_entries, snapshot.day_types, snapshot.settings
        )
        self._key = key
        return self._stats

    def clear(self) -> None:
        self._key = None
        self._stats = None
