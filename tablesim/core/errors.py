"""
Centralized error taxonomy for the simulation core.
Exception types plus a reusable helper so callers stay thin and new error types are easy to add.

Row-level problems (DecodeError on one map row, bad counts on one reservation) are caught
inside the engine and logged; scope-level problems (MalformedInputError, NoDataError,
InvalidTimeFormatError on the baseline, UnknownMealShiftError) propagate to the caller.
"""
from __future__ import annotations


class TableSimError(Exception):
    """Base class for every error raised by tablesim."""


class MalformedInputError(TableSimError):
    """Raw upload text is not tabular data at all (empty text)."""


class DecodeError(TableSimError):
    """A map row's embedded table list could not be decoded."""


class InvalidTimeFormatError(TableSimError, ValueError):
    """A time-of-day or date+time field could not be parsed."""


class NoDataError(TableSimError):
    """No map rows or no reservation rows match the selected date, shift and venue."""


class UnknownMealShiftError(TableSimError, ValueError):
    """The requested meal shift has no integer code in the configured mapping."""


# ---------------------------------------------------------------------------
# User-facing messages, shown by the upload/simulation UI
# ---------------------------------------------------------------------------

MSG_MALFORMED_INPUT = "The uploaded file is empty or is not a CSV export."
MSG_NO_DATA = "No data available for the selected criteria"
MSG_INVALID_TIME = "Reservation times could not be read: {detail}"
MSG_UNKNOWN_SHIFT = "Unknown meal shift: {detail}"
MSG_DECODE = "Table map could not be read: {detail}"


# List of (exception type, message template). First match wins.
ERROR_MESSAGE_RULES: list[tuple[type[Exception], str]] = [
    (MalformedInputError, MSG_MALFORMED_INPUT),
    (NoDataError, MSG_NO_DATA),
    (InvalidTimeFormatError, MSG_INVALID_TIME),
    (UnknownMealShiftError, MSG_UNKNOWN_SHIFT),
    (DecodeError, MSG_DECODE),
]


def error_to_message(exc: Exception, rules: list[tuple[type[Exception], str]] | None = None) -> str:
    """
    Map an exception from parse/derive into the message a toast or alert should show.
    Uses ERROR_MESSAGE_RULES for known error types; otherwise returns the exception message.
    """
    for exc_type, template in rules if rules is not None else ERROR_MESSAGE_RULES:
        if isinstance(exc, exc_type):
            return template.format(detail=str(exc))
    return str(exc) or exc.__class__.__name__
