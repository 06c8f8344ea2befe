"""Display helpers: 12h input parsing and time/hour formatting."""

from __future__ import annotations

import re

from work_timer.clock import is_hhmm, parse_time_of_day
from work_timer.types import DayType

_12H = re.compile(r"([0-9]{1,2}):([0-9]{2})([ap])m?")

DAY_TYPE_LABELS: dict[DayType, str] = {
    DayType.WORKDAY: "Workday",
    DayType.WEEKEND: "Weekend",
    DayType.HOLIDAY: "Holiday",
    DayType.RESTDAY_WORK: "Rest-day work",
}


def parse_12h_time(text: str | None) -> str | None:
    """Normalise user input to 'HH:MM'.

    Accepts a valid 24h 'HH:MM' as is, or 12h forms such as "1:30 pm",
    "01:30p" and "12:05 AM". Returns None when the input cannot be read.
    """
    if not text:
        return None

    if is_hhmm(text) and parse_time_of_day(text) is not None:
        return text

    match = _12H.fullmatch(re.sub(r"\s", "", text.lower()))
    if match is None:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    period = match.group(3)
    if hour > 12 or minute > 59:
        return None

    if period == "p" and hour != 12:
        hour += 12
    elif period == "a" and hour == 12:
        hour = 0
    return f"{hour:02d}:{minute:02d}"


def format_time(text: str | None, hour_format: str = "24h") -> str:
    """Render an 'HH:MM' value for display in 12h or 24h style.

    Empty values and well-shaped but impossible times show as '--:--'.
    Anything else (a half-typed 12h value) is returned unchanged.
    """
    if not text:
        return "--:--"

    parsed = parse_time_of_day(text)
    if parsed is None:
        return "--:--" if is_hhmm(text) else text

    if hour_format == "12h":
        return parsed.strftime("%I:%M %p")
    return parsed.strftime("%H:%M")


def format_hours(hours: float) -> str:
    """'7.50 h' style; zero and NaN show as '0 h'."""
    if hours != hours or hours == 0:
        return "0 h"
    return f"{hours:.2f} h"
