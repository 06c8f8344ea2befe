"""Snapshot import/export (JSON) and file persistence."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from work_timer.schema import check_settings, validate_snapshot_document
from work_timer.types import (
    DEFAULT_SETTINGS,
    DayType,
    SettingsConfig,
    Snapshot,
    SnapshotError,
    TimeEntry,
    TimeRange,
)

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _range_to_dict(r: TimeRange) -> dict[str, str]:
    return {"start": r.start, "end": r.end}


def _range_from_dict(d: dict) -> TimeRange:
    return TimeRange(start=d["start"], end=d["end"])


def settings_to_dict(settings: SettingsConfig) -> dict:
    return {
        "standardWorkTime": _range_to_dict(settings.standard_work_time),
        "workdayRestTimes": [_range_to_dict(r) for r in settings.workday_rest_times],
        "weekendRestTimes": [_range_to_dict(r) for r in settings.weekend_rest_times],
        "maxWeekendHours": settings.max_weekend_hours,
    }


def settings_from_dict(data: dict) -> SettingsConfig:
    return SettingsConfig(
        standard_work_time=_range_from_dict(data["standardWorkTime"]),
        workday_rest_times=tuple(_range_from_dict(r) for r in data["workdayRestTimes"]),
        weekend_rest_times=tuple(_range_from_dict(r) for r in data["weekendRestTimes"]),
        max_weekend_hours=data["maxWeekendHours"],
    )


def snapshot_to_document(snapshot: Snapshot) -> dict:
    """Build the JSON-ready export document. Keys are sorted by date."""
    return {
        "version": FORMAT_VERSION,
        "timeEntries": {
            key: {"start": entry.start, "end": entry.end}
            for key, entry in sorted(snapshot.time_entries.items())
        },
        "dayTypeMap": {
            key: DayType(value).value
            for key, value in sorted(snapshot.day_types.items())
        },
        "settings": settings_to_dict(snapshot.settings),
        "hourFormat": snapshot.hour_format,
    }


def snapshot_from_document(document: object, source: str = "<document>") -> Snapshot:
    """Build a Snapshot from a parsed export document.

    Sections that are absent fall back to defaults (empty entries and
    overrides, DEFAULT_SETTINGS, 24h display).

    Raises SnapshotError listing every validation problem.
    """
    errors = validate_snapshot_document(document)
    if errors:
        raise SnapshotError(source, errors)

    version = document.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        logger.warning(
            "Snapshot format version differs",
            extra={"source": source, "version": version},
        )

    entries = {
        key: TimeEntry(start=value.get("start", ""), end=value.get("end", ""))
        for key, value in document.get("timeEntries", {}).items()
    }
    day_types = {
        key: DayType(value) for key, value in document.get("dayTypeMap", {}).items()
    }
    settings = DEFAULT_SETTINGS
    if "settings" in document:
        settings = settings_from_dict(document["settings"])
        for problem in check_settings(settings):
            logger.warning("Suspicious setting: %s", problem, extra={"source": source})

    return Snapshot(
        time_entries=entries,
        day_types=day_types,
        settings=settings,
        hour_format=document.get("hourFormat", "24h"),
    )


def export_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot to a JSON document string."""
    return json.dumps(snapshot_to_document(snapshot), indent=2, ensure_ascii=False)


def import_snapshot(text: str, source: str = "<import>") -> Snapshot:
    """Parse a JSON document produced by export_snapshot.

    Raises SnapshotError if the text is not JSON or fails validation.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(source, [f"not valid JSON: {e}"]) from e
    return snapshot_from_document(document, source)


def load_snapshot(path: str | Path) -> Snapshot:
    """Load the persisted snapshot, or the defaults if the file is absent.

    Raises SnapshotError if the file exists but cannot be imported.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No snapshot file, starting from defaults", extra={"path": str(path)})
        return Snapshot()

    with open(path, encoding="utf-8") as f:
        text = f.read()
    snapshot = import_snapshot(text, source=path.name)
    logger.info(
        "Loaded snapshot",
        extra={"path": str(path), "entries": len(snapshot.time_entries)},
    )
    return snapshot


def save_snapshot(snapshot: Snapshot, path: str | Path) -> None:
    """Write the snapshot to path, replacing the previous file atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(export_snapshot(snapshot))
        f.write("\n")
    os.replace(tmp_path, path)
    logger.info(
        "Saved snapshot",
        extra={"path": str(path), "entries": len(snapshot.time_entries)},
    )
