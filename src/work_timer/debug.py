"""Plain-text month view for terminal output.

Used by scripts/report.py. Not imported by the engine modules.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping

from work_timer.clock import minutes_of_day, parse_time_of_day
from work_timer.formatting import DAY_TYPE_LABELS, format_hours, format_time
from work_timer.types import DashboardStats, TimeEntry

# 24-hour timeline, each char = 30 minutes (48 chars per day)
CHARS_PER_DAY = 48
MINUTES_PER_CHAR = 30


def _timeline(entry: TimeEntry | None) -> str:
    """'#' for recorded half hours, '.' otherwise. Overnight spans wrap."""
    row = list("." * CHARS_PER_DAY)
    if entry is None:
        return "".join(row)

    start = parse_time_of_day(entry.start)
    end = parse_time_of_day(entry.end)
    if start is None or end is None:
        return "".join(row)

    start_char = minutes_of_day(start) // MINUTES_PER_CHAR
    end_char = -(-minutes_of_day(end) // MINUTES_PER_CHAR)
    if end_char > start_char:
        chars = range(start_char, end_char)
    else:
        chars = list(range(start_char, CHARS_PER_DAY)) + list(range(0, end_char))
    for i in chars:
        row[i] = "#"
    return "".join(row)


def show_month(
    stats: DashboardStats,
    time_entries: Mapping[str, TimeEntry],
    hour_format: str = "24h",
) -> str:
    """Print one row per day of the month plus the month totals.

    Days without a recorded entry show '--:--' rather than zero hours.
    Returns the string and also prints to stdout.
    """
    lines: list[str] = []
    header_hours = "".join(f"{h:02d}" if h % 3 == 0 else "  " for h in range(24))
    lines.append(f"{'':>10s}  {'':<13s}  {'':<15s}  {header_hours}  Hours")

    for key, calc in stats.daily.items():
        d = date.fromisoformat(key)
        label = d.strftime("%a %d %b")
        entry = time_entries.get(key)
        if entry is not None and entry.is_complete:
            span = f"{format_time(entry.start, hour_format)}-{format_time(entry.end, hour_format)}"
            hours = format_hours(calc.effective_hours)
        else:
            span = "--:--"
            hours = ""
        lines.append(
            f"{label:>10s}  {DAY_TYPE_LABELS[calc.day_type]:<13s}  {span:<15s}  "
            f"{_timeline(entry)}  {hours}"
        )

    lines.append("")
    lines.append(f"Month:             {stats.month_key}")
    lines.append(f"Workdays counted:  {stats.total_workday_count}")
    lines.append(f"Rest days worked:  {stats.total_weekend_day_count}")
    lines.append(f"Average per day:   {format_hours(stats.average_hours)}")
    lines.append(f"Workday overtime:  {format_hours(stats.workday_overtime)}")
    lines.append(f"Weekend overtime:  {format_hours(stats.weekend_overtime)}")
    lines.append(f"Total overtime:    {format_hours(stats.total_overtime)}")
    if stats.is_deficit:
        lines.append(f"Deficit:           {format_hours(stats.deficit_hours)}")

    result = "\n".join(lines)
    print(result)
    return result
