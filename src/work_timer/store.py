"""TimerState: the explicit, versioned holder of entries, overrides and settings."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Iterable

from work_timer.calendar import date_key, set_day_type, set_day_types
from work_timer.clock import is_hhmm
from work_timer.loaders import export_snapshot, import_snapshot
from work_timer.schema import check_settings
from work_timer.types import DayType, SettingsConfig, Snapshot, TimeEntry

logger = logging.getLogger(__name__)


class TimerState:
    """Mutable state passed to the presentation layer.

    Holds the current Snapshot and one version counter per input
    (entries, overrides, settings). Every action replaces the snapshot
    and bumps the counters of the inputs it touched; the snapshot itself
    is never mutated, so callers can keep a reference as a consistent view.
    """

    def __init__(self, snapshot: Snapshot | None = None) -> None:
        self._snapshot = snapshot if snapshot is not None else Snapshot()
        self._entries_version = 0
        self._overrides_version = 0
        self._settings_version = 0

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def versions(self) -> tuple[int, int, int]:
        """(entries, overrides, settings) version counters."""
        return (self._entries_version, self._overrides_version, self._settings_version)

    def _replace(self, **changes) -> None:
        self._snapshot = dataclasses.replace(self._snapshot, **changes)

    # ------------------------------------------------------------------
    # Time entries
    # ------------------------------------------------------------------

    def set_time_entry(self, d: date | str, entry: TimeEntry) -> None:
        """Store the entry for a date, replacing any previous one.

        Raises ValueError if the date is not 'YYYY-MM-DD' or a field is
        neither empty nor 'HH:MM' shaped.
        """
        key = date_key(d)
        for field in ("start", "end"):
            value = getattr(entry, field)
            if value and not is_hhmm(value):
                raise ValueError(
                    f"Invalid {field} time {value!r} for {key} "
                    f"(expected 'HH:MM' or empty)"
                )

        entries = dict(self._snapshot.time_entries)
        entries[key] = TimeEntry(start=entry.start, end=entry.end)
        self._replace(time_entries=entries)
        self._entries_version += 1
        logger.debug("Time entry set", extra={"date": key})

    def clear_time_entry(self, d: date | str) -> None:
        key = date_key(d)
        if key not in self._snapshot.time_entries:
            return
        entries = dict(self._snapshot.time_entries)
        del entries[key]
        self._replace(time_entries=entries)
        self._entries_version += 1

    # ------------------------------------------------------------------
    # Day types
    # ------------------------------------------------------------------

    def set_day_type(self, d: date | str, day_type: DayType | str) -> None:
        """Override a date's type. Its computed default clears the override.

        Raises ValueError for a malformed date or unknown type and leaves
        the state unchanged.
        """
        self._replace(day_types=set_day_type(self._snapshot.day_types, d, day_type))
        self._overrides_version += 1

    def set_day_types(self, dates: Iterable[date | str], day_type: DayType | str) -> None:
        self._replace(day_types=set_day_types(self._snapshot.day_types, dates, day_type))
        self._overrides_version += 1

    # ------------------------------------------------------------------
    # Settings and display
    # ------------------------------------------------------------------

    def update_settings(self, **changes) -> None:
        """Replace individual SettingsConfig fields, keeping the others.

        Suspicious values are logged but still applied.
        """
        for name in ("workday_rest_times", "weekend_rest_times"):
            if name in changes:
                changes[name] = tuple(changes[name])
        settings: SettingsConfig = dataclasses.replace(self._snapshot.settings, **changes)
        for problem in check_settings(settings):
            logger.warning("Suspicious setting: %s", problem)
        self._replace(settings=settings)
        self._settings_version += 1

    def toggle_hour_format(self) -> None:
        fmt = "24h" if self._snapshot.hour_format == "12h" else "12h"
        self._replace(hour_format=fmt)

    def reset_to_defaults(self) -> None:
        """Drop all entries and overrides and restore default settings."""
        self._snapshot = Snapshot()
        self._entries_version += 1
        self._overrides_version += 1
        self._settings_version += 1
        logger.info("State reset to defaults")

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_data(self) -> str:
        return export_snapshot(self._snapshot)

    def import_data(self, text: str) -> None:
        """Replace the whole state with an exported document.

        Raises SnapshotError and leaves the state untouched if the
        document is invalid.
        """
        self._snapshot = import_snapshot(text)
        self._entries_version += 1
        self._overrides_version += 1
        self._settings_version += 1
        logger.info(
            "Imported snapshot",
            extra={"entries": len(self._snapshot.time_entries)},
        )
