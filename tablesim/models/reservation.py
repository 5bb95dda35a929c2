from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Reservation:
    """One confirmed booking placed on the shift timeline."""
    arrival_time: int  # minutes after the shift baseline
    table_ids: tuple[int, ...]
    party_size: int
    duration: int
    creation_datetime: datetime
    reservation_datetime: datetime
    status_long: str = ""
    provenance: str = ""

    @property
    def end_time(self) -> int:
        return self.arrival_time + self.duration
