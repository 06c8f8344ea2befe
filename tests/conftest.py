"""Shared test fixtures and data loading for work-timer.

All test data lives in data/fixtures/ as JSON files. This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference month: March 2025 (Sat 2025-03-01 through Mon 2025-03-31).
Reference day for projections: Fri 2025-03-14.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
SNAPSHOT_FILE = FIXTURES_DIR / "snapshot_march.json"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


_settings = _load_json(FIXTURES_DIR / "settings.json")

REFERENCE_MONTH = date(2025, 3, 1)
REFERENCE_NOW = datetime(2025, 3, 14, 15, 0)


def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


def settings_document(name: str) -> dict:
    """Raw settings object (wire format) from settings.json by name."""
    return json.loads(json.dumps(_settings[name]))


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def make_settings(name: str = "default"):
    """Build a SettingsConfig from settings.json by name."""
    from work_timer.loaders import settings_from_dict

    return settings_from_dict(_settings[name])


def make_entries(raw: dict[str, dict]) -> dict:
    """Convert {"2025-03-03": {"start": ..., "end": ...}} to TimeEntry values."""
    from work_timer.types import TimeEntry

    return {key: TimeEntry(start=v["start"], end=v["end"]) for key, v in raw.items()}


def make_overrides(raw: dict[str, str]) -> dict:
    from work_timer.types import DayType

    return {key: DayType(v) for key, v in raw.items()}


def make_daily(raw: dict | None):
    """DailyCalculation from a scenario dict, or None."""
    from work_timer.types import DailyCalculation, DayType

    if raw is None:
        return None
    return DailyCalculation(
        day_type=DayType(raw["day_type"]),
        effective_hours=raw["effective_hours"],
    )


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def default_settings():
    return make_settings("default")


@pytest.fixture
def snapshot_text() -> str:
    return SNAPSHOT_FILE.read_text(encoding="utf-8")


@pytest.fixture
def march_snapshot(snapshot_text):
    """Snapshot with the mixed March 2025 month (3h deficit)."""
    from work_timer.loaders import import_snapshot

    return import_snapshot(snapshot_text, source=SNAPSHOT_FILE.name)


@pytest.fixture
def state():
    from work_timer.store import TimerState

    return TimerState()
