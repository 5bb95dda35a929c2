"""
Shift timeline arithmetic.

Minute zero of every relative time is the shift baseline: the earliest reservation
time-of-day in the selected scope, not midnight. Instants are naive datetimes because
the exports carry no time zone; both files are assumed to use the same local zone.
"""
from datetime import datetime, timedelta

from tablesim.core.errors import InvalidTimeFormatError

_INSTANT_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M")


def time_of_day_to_minutes(value: str) -> int:
    """'19:30' -> 1170. Seconds, if present, are ignored."""
    parts = (value or "").strip().split(":")
    if len(parts) < 2:
        raise InvalidTimeFormatError(f"expected HH:MM, got {value!r}")
    hours, minutes = parts[0].strip(), parts[1].strip()
    if not (hours.isascii() and hours.isdigit() and minutes.isascii() and minutes.isdigit()):
        raise InvalidTimeFormatError(f"expected HH:MM, got {value!r}")
    return int(hours) * 60 + int(minutes)


def parse_instant(date_str: str, time_str: str) -> datetime:
    """Combine 'YYYY-MM-DD' and 'HH:MM[:SS]' into a naive datetime."""
    raw = f"{(date_str or '').strip()} {(time_str or '').strip()}"
    for fmt in _INSTANT_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    raise InvalidTimeFormatError(f"cannot parse date/time {raw!r}")


def shift_start_for(date_str: str, baseline_minutes: int) -> datetime:
    """Absolute instant of minute zero: the date at midnight plus the baseline."""
    try:
        midnight = datetime.strptime((date_str or "").strip(), "%Y-%m-%d")
    except ValueError as e:
        raise InvalidTimeFormatError(f"cannot parse date {date_str!r}") from e
    return midnight + timedelta(minutes=baseline_minutes)


def minutes_between(later: datetime, earlier: datetime) -> float:
    """Real-valued minutes from earlier to later; negative when later is actually earlier."""
    return (later - earlier).total_seconds() / 60
