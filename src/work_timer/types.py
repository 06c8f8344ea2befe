"""Shared types: entries, settings, derived results and SnapshotError."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class DayType(str, Enum):
    """Category of a calendar day. Values match the persisted strings."""

    WORKDAY = "workday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    RESTDAY_WORK = "restday-work"

    @property
    def is_workday(self) -> bool:
        """Workdays and compensated rest-days use workday rules."""
        return self in (DayType.WORKDAY, DayType.RESTDAY_WORK)


@dataclass(frozen=True)
class TimeRange:
    """A start/end pair of 'HH:MM' strings. Also used for break intervals."""

    start: str
    end: str


@dataclass(frozen=True)
class TimeEntry:
    """Clock-in/clock-out for one date. Empty string means not recorded."""

    start: str = ""
    end: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.start) and bool(self.end)


@dataclass(frozen=True)
class SettingsConfig:
    """User-editable calculation settings. Never mutated by the engine."""

    standard_work_time: TimeRange
    workday_rest_times: tuple[TimeRange, ...]
    weekend_rest_times: tuple[TimeRange, ...]
    max_weekend_hours: float

    def rest_times_for(self, day_type: DayType) -> tuple[TimeRange, ...]:
        """Break intervals that apply to a day of the given type."""
        if DayType(day_type).is_workday:
            return self.workday_rest_times
        return self.weekend_rest_times


DEFAULT_SETTINGS = SettingsConfig(
    standard_work_time=TimeRange("09:00", "17:30"),
    workday_rest_times=(
        TimeRange("12:00", "13:30"),  # lunch
        TimeRange("17:30", "18:00"),  # dinner
    ),
    weekend_rest_times=(TimeRange("12:00", "13:30"),),
    max_weekend_hours=8,
)

# Daily target used for overtime and deficit figures.
TARGET_HOURS_PER_WORKDAY = 8


@dataclass(frozen=True)
class WorkHours:
    """Calculator output: gross elapsed hours and hours after breaks/cap."""

    total_hours: float
    effective_hours: float


@dataclass(frozen=True)
class DailyCalculation:
    day_type: DayType
    effective_hours: float


@dataclass(frozen=True)
class DashboardStats:
    """Month-level statistics. A view of entries + overrides + settings.

    Invariants:
        - daily holds one DailyCalculation for every date of the month
        - deficit_hours > 0 only when 0 < average_hours < 8
    """

    month_key: str
    total_workday_count: int
    total_weekend_day_count: int
    total_workday_hours: float
    total_weekend_hours: float
    average_hours: float
    workday_overtime: float
    weekend_overtime: float
    total_overtime: float
    deficit_hours: float
    daily: Mapping[str, DailyCalculation] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not isinstance(self.daily, MappingProxyType):
            object.__setattr__(self, "daily", MappingProxyType(dict(self.daily)))

    @property
    def is_deficit(self) -> bool:
        return self.deficit_hours > 0


@dataclass(frozen=True)
class EndTimeProjection:
    """Standard and projected ("dynamic") end-of-work instants for today."""

    projected_end_time: datetime | None
    standard_end_time: datetime | None

    @property
    def is_adjusted(self) -> bool:
        return self.projected_end_time != self.standard_end_time


@dataclass(frozen=True)
class Countdown:
    hours: int
    minutes: int
    seconds: int
    is_over: bool


HOUR_FORMATS = ("24h", "12h")


@dataclass(frozen=True)
class Snapshot:
    """Everything the persistence and import/export collaborators exchange.

    time_entries and day_types are keyed by ISO date strings ('YYYY-MM-DD').
    """

    time_entries: Mapping[str, TimeEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )
    day_types: Mapping[str, DayType] = field(
        default_factory=lambda: MappingProxyType({})
    )
    settings: SettingsConfig = DEFAULT_SETTINGS
    hour_format: str = "24h"

    def __post_init__(self) -> None:
        for name in ("time_entries", "day_types"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))


class SnapshotError(ValueError):
    """Raised when a snapshot document cannot be imported."""

    def __init__(self, source: str, errors: list[str]) -> None:
        self.source = source
        self.errors = list(errors)
        super().__init__(
            f"Invalid snapshot {source}:\n"
            + "\n".join(f"  - {e}" for e in self.errors)
        )
