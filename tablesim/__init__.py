"""Derive table occupancy timelines from a restaurant map export and a reservations export."""
from tablesim.config import Settings, settings
from tablesim.core.errors import (
    DecodeError,
    InvalidTimeFormatError,
    MalformedInputError,
    NoDataError,
    TableSimError,
    UnknownMealShiftError,
    error_to_message,
)
from tablesim.models import DerivedModel, OccupancyEntry, OccupancyGroup, Reservation, TableRecord
from tablesim.services.parsing import decode_table_list, parse_rows
from tablesim.services.simulation import SimulationOptions, derive
from tablesim.services.timeline import format_advance, instant_to_display_string, minutes_to_clock_string

__all__ = [
    "DecodeError",
    "DerivedModel",
    "InvalidTimeFormatError",
    "MalformedInputError",
    "NoDataError",
    "OccupancyEntry",
    "OccupancyGroup",
    "Reservation",
    "Settings",
    "SimulationOptions",
    "TableRecord",
    "TableSimError",
    "UnknownMealShiftError",
    "decode_table_list",
    "derive",
    "error_to_message",
    "format_advance",
    "instant_to_display_string",
    "minutes_to_clock_string",
    "parse_rows",
    "settings",
]
