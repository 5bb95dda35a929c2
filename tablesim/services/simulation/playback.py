"""
Read-only queries the playback UI runs against a DerivedModel while scrubbing.

Two time axes: the playback axis (creation_rel, minutes from shift start to when a booking
was made) decides which reservations are visible yet; the arrival axis (start/end minutes
from the baseline) decides where they sit on a table's row.
"""
from tablesim.models import DerivedModel, OccupancyGroup, TableRecord


def visible_groups(model: DerivedModel, table_id: int, current_time: float) -> list[OccupancyGroup]:
    """Groups on this table that had been booked by current_time on the playback axis."""
    return [
        g for g in model.occupancy_groups
        if table_id in g.table_ids and g.creation_rel <= current_time
    ]


def next_group_start(model: DerivedModel, current_time: float) -> int | None:
    """Start of the first group (in creation order) beginning after current_time; None when there is none."""
    for g in model.occupancy_groups:
        if g.start > current_time:
            return g.start
    return None


def tables_by_capacity(model: DerivedModel, capacity: int | None = None) -> list[TableRecord]:
    """Tables sorted by id, optionally only those seating exactly `capacity`."""
    tables = [t for t in model.tables.values() if capacity is None or t.max_capacity == capacity]
    return sorted(tables, key=lambda t: t.table_id)


def occupied_tables_at(model: DerivedModel, minute: float) -> list[int]:
    """Ids of tables with an entry covering start_time <= minute < end_time."""
    return [
        t.table_id
        for t in tables_by_capacity(model)
        if any(e.start_time <= minute < e.end_time for e in t.occupancy_log)
    ]
