"""Presentation formatters for the playback UI. Total functions: they never raise."""
from datetime import datetime, timedelta

from tablesim.core.constants import CLOCK_PLACEHOLDER, INSTANT_PLACEHOLDER


def minutes_to_clock_string(minutes: float, shift_start: datetime | None) -> str:
    """Minutes on the shift timeline -> 24h 'HH:MM' wall clock."""
    if shift_start is None:
        return CLOCK_PLACEHOLDER
    try:
        return (shift_start + timedelta(minutes=minutes)).strftime("%H:%M")
    except (TypeError, OverflowError):
        return CLOCK_PLACEHOLDER


def instant_to_display_string(instant: datetime | None) -> str:
    """Locale date plus 'HH:MM', e.g. '06/14/24 17:00'."""
    if instant is None:
        return INSTANT_PLACEHOLDER
    return f"{instant.strftime('%x')} {instant.strftime('%H:%M')}"


def format_advance(minutes: float | None) -> str:
    """Lead time badge: '2h 5m advance' or '45m advance'."""
    total = max(0.0, minutes or 0.0)
    hours = int(total // 60)
    mins = round(total % 60)
    if mins == 60:
        hours, mins = hours + 1, 0
    if hours > 0:
        return f"{hours}h {mins}m advance"
    return f"{mins}m advance"
