from tablesim.services.simulation.engine import SimulationOptions, derive
from tablesim.services.simulation.playback import (
    next_group_start,
    occupied_tables_at,
    tables_by_capacity,
    visible_groups,
)
from tablesim.services.simulation.selectors import available_dates, available_restaurants

__all__ = [
    "SimulationOptions",
    "available_dates",
    "available_restaurants",
    "derive",
    "next_group_start",
    "occupied_tables_at",
    "tables_by_capacity",
    "visible_groups",
]
