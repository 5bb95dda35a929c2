from tablesim.models.derived import DerivedModel
from tablesim.models.occupancy import OccupancyEntry, OccupancyGroup
from tablesim.models.reservation import Reservation
from tablesim.models.table import TableRecord

__all__ = [
    "DerivedModel",
    "OccupancyEntry",
    "OccupancyGroup",
    "Reservation",
    "TableRecord",
]
