from tablesim.services.timeline.format import (
    format_advance,
    instant_to_display_string,
    minutes_to_clock_string,
)
from tablesim.services.timeline.time_utils import (
    minutes_between,
    parse_instant,
    shift_start_for,
    time_of_day_to_minutes,
)

__all__ = [
    "format_advance",
    "instant_to_display_string",
    "minutes_between",
    "minutes_to_clock_string",
    "parse_instant",
    "shift_start_for",
    "time_of_day_to_minutes",
]
