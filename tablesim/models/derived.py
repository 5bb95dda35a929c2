"""Result of one derivation run, handed to the playback UI."""
from dataclasses import dataclass
from datetime import datetime

from tablesim.models.occupancy import OccupancyGroup
from tablesim.models.reservation import Reservation
from tablesim.models.table import TableRecord


@dataclass(frozen=True)
class DerivedModel:
    tables: dict[int, TableRecord]
    reservations: list[Reservation]
    occupancy_groups: list[OccupancyGroup]  # sorted ascending by creation instant
    min_time: int  # shift baseline, minutes after midnight
    end_time: int  # last point on the arrival-time axis
    shift_start: datetime
    first_creation_time: float  # earliest creation_rel (playback axis start)
    last_reservation_time: float  # latest reservation instant relative to shift_start (playback axis end)
