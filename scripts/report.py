#!/usr/bin/env python
"""Monthly work-hour report from a saved snapshot.

Run:  uv run python scripts/report.py --month 2025-03
      uv run python scripts/report.py --data backup.json --now 2025-03-14T15:20

Prints:
  1. One row per day of the month (type, recorded span, effective hours)
  2. Month totals (average, overtime, deficit)
  3. Today's standard and projected end time, and the countdown
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from work_timer.config import get_config
from work_timer.debug import show_month
from work_timer.loaders import load_snapshot
from work_timer.logging_utils import setup_logging
from work_timer.monthly import aggregate_month
from work_timer.projection import countdown, project_from_stats
from work_timer.types import SnapshotError

logger = logging.getLogger("work_timer.report")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--data", type=Path, help="snapshot file (default: WORK_TIMER_DATA_FILE)")
    parser.add_argument("--month", help="month to report, YYYY-MM (default: month of --now)")
    parser.add_argument("--now", help="current instant, ISO format (default: local clock)")
    return parser.parse_args(argv)


def section_projection(snapshot, stats, now: datetime) -> None:
    projection = project_from_stats(snapshot.settings, stats, now)
    print()
    if projection.standard_end_time is None:
        print("Standard end time is not a valid HH:MM value.")
        return

    print(f"Standard end:      {projection.standard_end_time:%H:%M}")
    print(f"Projected end:     {projection.projected_end_time:%H:%M}")

    remaining = countdown(projection.projected_end_time, now)
    if remaining.is_over:
        print("Done for today.")
    else:
        print(
            f"Time left:         "
            f"{remaining.hours:02d}:{remaining.minutes:02d}:{remaining.seconds:02d}"
        )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = get_config()
    setup_logging(config.log_level, config.log_json)

    now = datetime.fromisoformat(args.now) if args.now else datetime.now()
    month = args.month or now.strftime("%Y-%m")
    data_file = args.data or config.data_file

    try:
        snapshot = load_snapshot(data_file)
        stats = aggregate_month(
            month, snapshot.time_entries, snapshot.day_types, snapshot.settings
        )
    except SnapshotError as e:
        logger.error("Cannot read snapshot", extra={"errors": e.errors})
        print(e, file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    show_month(stats, snapshot.time_entries, snapshot.hour_format)
    section_projection(snapshot, stats, now)
    return 0


if __name__ == "__main__":
    sys.exit(main())
