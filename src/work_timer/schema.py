"""Input validation for snapshot documents: entries, overrides, settings."""

from __future__ import annotations

from datetime import date

from work_timer.calendar import date_key
from work_timer.clock import is_hhmm, parse_time_of_day
from work_timer.types import HOUR_FORMATS, DayType, SettingsConfig, TimeRange

_DAY_TYPES = {t.value for t in DayType}
_ANCHOR = date(2000, 1, 1)


def _check_date(date_str: object) -> str | None:
    try:
        date_key(date_str)  # type: ignore[arg-type]
    except ValueError:
        return f"Invalid date: {date_str}"
    return None


def validate_time_entries(entries: object) -> list[str]:
    """Validate the timeEntries mapping. Returns list of error messages.

    Checks:
    - Keys are ISO dates
    - Each entry is an object with string 'start' and 'end'
    - Each field is empty or 'HH:MM' shaped
    """
    if not isinstance(entries, dict):
        return ["timeEntries must be an object"]

    errors: list[str] = []
    for date_str, entry in entries.items():
        problem = _check_date(date_str)
        if problem:
            errors.append(problem)
            continue

        if not isinstance(entry, dict):
            errors.append(f"Date {date_str}: entry must be an object")
            continue

        for field in ("start", "end"):
            value = entry.get(field, "")
            if not isinstance(value, str):
                errors.append(f"Date {date_str}: '{field}' must be a string")
            elif value and not is_hhmm(value):
                errors.append(
                    f"Date {date_str}: invalid {field} time '{value}'"
                )

    return errors


def validate_day_types(day_types: object) -> list[str]:
    """Validate the dayTypeMap mapping. Returns list of error messages."""
    if not isinstance(day_types, dict):
        return ["dayTypeMap must be an object"]

    errors: list[str] = []
    for date_str, day_type in day_types.items():
        problem = _check_date(date_str)
        if problem:
            errors.append(problem)
            continue
        if not isinstance(day_type, str):
            errors.append(f"Date {date_str}: day type must be a string, got {day_type!r}")
        elif day_type not in _DAY_TYPES:
            errors.append(
                f"Date {date_str}: unknown day type {day_type!r} "
                f"(expected one of {sorted(_DAY_TYPES)})"
            )
    return errors


def _check_range(label: str, value: object, errors: list[str]) -> None:
    """Check a {start, end} object of strings."""
    if not isinstance(value, dict) or "start" not in value or "end" not in value:
        errors.append(f"{label}: expected {{start, end}}, got {value}")
        return
    for field in ("start", "end"):
        if not isinstance(value[field], str):
            errors.append(f"{label}: '{field}' must be a string")


def validate_settings(settings: object) -> list[str]:
    """Validate the shape of the settings object. Returns error messages.

    Checks:
    - standardWorkTime is a {start, end} object of strings
    - Break lists hold {start, end} objects of strings
    - maxWeekendHours is a number

    Values the engine tolerates (unparseable or reversed breaks, a negative
    cap) pass here; see check_settings.
    """
    if not isinstance(settings, dict):
        return ["settings must be an object"]

    errors: list[str] = []
    if "standardWorkTime" in settings:
        _check_range("standardWorkTime", settings["standardWorkTime"], errors)
    else:
        errors.append("settings: missing 'standardWorkTime'")

    for list_name in ("workdayRestTimes", "weekendRestTimes"):
        breaks = settings.get(list_name)
        if not isinstance(breaks, list):
            errors.append(f"settings: '{list_name}' must be a list")
            continue
        for i, rest in enumerate(breaks):
            _check_range(f"{list_name}[{i}]", rest, errors)

    cap = settings.get("maxWeekendHours")
    if isinstance(cap, bool) or not isinstance(cap, (int, float)):
        errors.append("settings: 'maxWeekendHours' must be a number")

    return errors


def _check_breaks(label: str, breaks: tuple[TimeRange, ...]) -> list[str]:
    problems: list[str] = []
    parsed = []
    for i, rest in enumerate(breaks):
        start = parse_time_of_day(rest.start, _ANCHOR)
        end = parse_time_of_day(rest.end, _ANCHOR)
        if start is None or end is None:
            problems.append(
                f"{label}[{i}]: invalid time range {rest.start!r}-{rest.end!r}"
            )
        elif end <= start:
            problems.append(
                f"{label}[{i}]: break ends before it starts "
                f"({rest.start}-{rest.end})"
            )
        else:
            parsed.append((start, end))

    parsed.sort()
    for j in range(1, len(parsed)):
        if parsed[j][0] < parsed[j - 1][1]:
            problems.append(
                f"{label}: overlapping breaks "
                f"{parsed[j - 1][0]:%H:%M}-{parsed[j - 1][1]:%H:%M} and "
                f"{parsed[j][0]:%H:%M}-{parsed[j][1]:%H:%M}"
            )
    return problems


def check_settings(settings: SettingsConfig) -> list[str]:
    """Report settings the engine accepts but that are probably mistakes.

    The engine applies settings as given: an unparseable break is skipped,
    a reversed break never overlaps work, overlapping breaks are subtracted
    twice and a negative cap is used as is. Returns one message per problem.
    """
    problems: list[str] = []
    std = settings.standard_work_time
    if (
        parse_time_of_day(std.start, _ANCHOR) is None
        or parse_time_of_day(std.end, _ANCHOR) is None
    ):
        problems.append(
            f"standardWorkTime: invalid time range {std.start!r}-{std.end!r}"
        )
    problems.extend(_check_breaks("workdayRestTimes", settings.workday_rest_times))
    problems.extend(_check_breaks("weekendRestTimes", settings.weekend_rest_times))
    if settings.max_weekend_hours < 0:
        problems.append(
            f"maxWeekendHours is negative ({settings.max_weekend_hours})"
        )
    return problems


def validate_snapshot_document(document: object) -> list[str]:
    """Validate a whole exported snapshot. Returns list of error messages.

    Missing sections are allowed and fall back to defaults on import.
    """
    if not isinstance(document, dict):
        return ["snapshot must be a JSON object"]

    errors: list[str] = []
    if "timeEntries" in document:
        errors.extend(validate_time_entries(document["timeEntries"]))
    if "dayTypeMap" in document:
        errors.extend(validate_day_types(document["dayTypeMap"]))
    if "settings" in document:
        errors.extend(validate_settings(document["settings"]))
    if "hourFormat" in document and document["hourFormat"] not in HOUR_FORMATS:
        errors.append(
            f"hourFormat must be one of {list(HOUR_FORMATS)}, "
            f"got {document['hourFormat']!r}"
        )
    return errors
