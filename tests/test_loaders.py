"""Tests for snapshot import/export and file persistence.

Test data loaded from: data/fixtures/snapshot_march.json
"""

from __future__ import annotations

import json
import logging

import pytest

from conftest import REFERENCE_MONTH, make_settings, settings_document

from work_timer.loaders import (
    export_snapshot,
    import_snapshot,
    load_snapshot,
    save_snapshot,
    settings_from_dict,
    settings_to_dict,
    snapshot_from_document,
)
from work_timer.monthly import aggregate_month
from work_timer.types import (
    DEFAULT_SETTINGS,
    DayType,
    Snapshot,
    SnapshotError,
    TimeEntry,
)


def _stats(snapshot: Snapshot, month):
    return aggregate_month(month, snapshot.time_entries, snapshot.day_types, snapshot.settings)


class TestImport:

    def test_fixture(self, march_snapshot):
        assert march_snapshot.time_entries["2025-03-03"] == TimeEntry("09:00", "17:30")
        assert march_snapshot.time_entries["2025-03-17"] == TimeEntry("09:00", "")
        assert march_snapshot.day_types == {
            "2025-03-10": DayType.HOLIDAY,
            "2025-03-15": DayType.RESTDAY_WORK,
        }
        assert march_snapshot.settings == DEFAULT_SETTINGS
        assert march_snapshot.hour_format == "24h"

    def test_fixture_aggregates(self, march_snapshot):
        stats = _stats(march_snapshot, REFERENCE_MONTH)
        assert stats.total_workday_count == 4
        assert stats.deficit_hours == pytest.approx(3.0)

    def test_missing_sections_use_defaults(self):
        snapshot = import_snapshot("{}")
        assert snapshot == Snapshot()

    def test_invalid_json(self):
        with pytest.raises(SnapshotError) as exc_info:
            import_snapshot("{not json", source="broken.json")
        assert exc_info.value.source == "broken.json"
        assert exc_info.value.errors[0].startswith("not valid JSON")

    def test_invalid_document_lists_all_errors(self):
        text = json.dumps({
            "timeEntries": {"2025-03-03": {"start": "9am", "end": "17:00"}},
            "dayTypeMap": {"2025-03-04": "vacation"},
        })
        with pytest.raises(SnapshotError) as exc_info:
            import_snapshot(text)
        assert len(exc_info.value.errors) == 2
        assert "vacation" in str(exc_info.value)

    def test_unhashable_day_type(self):
        with pytest.raises(SnapshotError) as exc_info:
            import_snapshot(json.dumps({"dayTypeMap": {"2025-03-01": []}}))
        assert exc_info.value.errors == ["Date 2025-03-01: day type must be a string, got []"]

    def test_snapshot_error_is_value_error(self):
        with pytest.raises(ValueError):
            import_snapshot("[]")

    def test_suspicious_settings_imported_with_warning(self, caplog):
        document = {"settings": settings_document("overlapping_breaks")}
        with caplog.at_level(logging.WARNING, logger="work_timer.loaders"):
            snapshot = snapshot_from_document(document)
        assert snapshot.settings == make_settings("overlapping_breaks")
        assert "overlapping breaks" in caplog.text

    def test_entry_fields_default_to_empty(self):
        snapshot = import_snapshot(json.dumps({"timeEntries": {"2025-03-03": {"start": "09:00"}}}))
        assert snapshot.time_entries["2025-03-03"] == TimeEntry("09:00", "")


class TestExport:

    def test_document_layout(self, march_snapshot):
        document = json.loads(export_snapshot(march_snapshot))
        assert document["version"] == 1
        assert list(document) == ["version", "timeEntries", "dayTypeMap", "settings", "hourFormat"]
        assert document["dayTypeMap"] == {"2025-03-10": "holiday", "2025-03-15": "restday-work"}
        assert document["settings"] == settings_document("default")

    def test_settings_round_trip(self):
        for name in ("default", "no_breaks", "overlapping_breaks", "negative_cap"):
            settings = make_settings(name)
            assert settings_from_dict(settings_to_dict(settings)) == settings

    def test_round_trip_identical_snapshot(self, march_snapshot):
        assert import_snapshot(export_snapshot(march_snapshot)) == march_snapshot

    @pytest.mark.parametrize("month", ["2025-02", "2025-03", "2025-04"])
    def test_round_trip_identical_stats(self, march_snapshot, month):
        restored = import_snapshot(export_snapshot(march_snapshot))
        assert _stats(restored, month) == _stats(march_snapshot, month)


class TestPersistence:

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_snapshot(tmp_path / "absent.json") == Snapshot()

    def test_save_then_load(self, tmp_path, march_snapshot):
        path = tmp_path / "nested" / "data.json"
        save_snapshot(march_snapshot, path)
        assert path.exists()
        assert not path.with_name("data.json.tmp").exists()
        assert load_snapshot(path) == march_snapshot

    def test_save_overwrites(self, tmp_path, march_snapshot):
        path = tmp_path / "data.json"
        save_snapshot(march_snapshot, path)
        save_snapshot(Snapshot(), path)
        assert load_snapshot(path) == Snapshot()

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{\"dayTypeMap\": {\"2025-03-03\": 5}}", encoding="utf-8")
        with pytest.raises(SnapshotError) as exc_info:
            load_snapshot(path)
        assert exc_info.value.source == "data.json"
