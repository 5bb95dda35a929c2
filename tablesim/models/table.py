"""Physical seating unit built from the map export."""
from dataclasses import dataclass, field

from tablesim.models.occupancy import OccupancyEntry


@dataclass
class TableRecord:
    table_id: int
    max_capacity: int
    min_capacity: int | None = None
    # Display annotation for the playback UI; the engine always sets False and never reads it back
    occupied: bool = False
    # Insertion order = reservation processing order, not time-sorted
    occupancy_log: list[OccupancyEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.min_capacity is None:
            self.min_capacity = self.max_capacity
