"""
Occupancy value types.

OccupancyEntry = one table's interval for one reservation (times in minutes from the shift baseline).
OccupancyGroup = all entries sharing (start, end, creation, reservation), i.e. one party across tables.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OccupancyEntry:
    start_time: int
    end_time: int
    creation_datetime: datetime
    reservation_datetime: datetime
    status_long: str = ""
    party_size: int = 0
    provenance: str = ""

    @property
    def merge_key(self) -> tuple[int, int, datetime, datetime]:
        """Exact-equality key; naive datetimes assume both exports share one local time zone."""
        return (self.start_time, self.end_time, self.creation_datetime, self.reservation_datetime)


@dataclass
class OccupancyGroup:
    table_ids: list[int]
    start: int
    duration: int
    creation: datetime
    reservation: datetime
    advance: float = 0.0  # minutes between creation and reservation
    creation_rel: float = 0.0  # minutes from shift start to creation; negative when booked before it
    status_long: str = ""
    party_size: int = 0
    provenance: str = ""
    total_capacity: int = 0

    @property
    def end(self) -> int:
        return self.start + self.duration

    @property
    def spare_seats(self) -> int:
        """Seats left over once the party sits; negative when the tables are too small."""
        return self.total_capacity - self.party_size
