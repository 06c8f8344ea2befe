"""work-timer: work-hour calculation and monthly aggregation engine."""

from work_timer.calculator import compute_effective_hours
from work_timer.calendar import (
    classify,
    date_key,
    days_in_month,
    default_day_type,
    parse_month,
    set_day_type,
    set_day_types,
)
from work_timer.clock import minutes_between, parse_time_of_day
from work_timer.loaders import export_snapshot, import_snapshot, load_snapshot, save_snapshot
from work_timer.monthly import MonthlyStatsCache, aggregate_month
from work_timer.projection import countdown, project_end_time, project_from_stats
from work_timer.store import TimerState
from work_timer.types import (
    DEFAULT_SETTINGS,
    Countdown,
    DailyCalculation,
    DashboardStats,
    DayType,
    EndTimeProjection,
    SettingsConfig,
    Snapshot,
    SnapshotError,
    TimeEntry,
    TimeRange,
    WorkHours,
)

__all__ = [
    "Countdown",
    "DEFAULT_SETTINGS",
    "DailyCalculation",
    "DashboardStats",
    "DayType",
    "EndTimeProjection",
    "MonthlyStatsCache",
    "SettingsConfig",
    "Snapshot",
    "SnapshotError",
    "TimeEntry",
    "TimeRange",
    "TimerState",
    "WorkHours",
    "aggregate_month",
    "classify",
    "compute_effective_hours",
    "date_key",
    "countdown",
    "days_in_month",
    "default_day_type",
    "export_snapshot",
    "import_snapshot",
    "load_snapshot",
    "minutes_between",
    "parse_month",
    "parse_time_of_day",
    "project_end_time",
    "project_from_stats",
    "save_snapshot",
    "set_day_type",
    "set_day_types",
]
