"""
Occupancy derivation: map rows + reservation rows -> DerivedModel for one venue/date/shift.

Pipeline:
1. Filter reservations (date, meal_shift, venue, confirmed status) and map rows (venue, date, meal code).
2. Build the table inventory from each map row's embedded table list (later rows win per id).
3. Baseline = earliest reservation time-of-day; minute zero of the shift timeline.
4. Build Reservation values (arrival relative to baseline, creation clamped to <= reservation).
5. Append one OccupancyEntry per (reservation, known table).
6. Merge entries with identical (start, end, creation, reservation) into OccupancyGroups.
7. advance / creation_rel per group; groups sorted by creation instant.
8. Playback bounds: first_creation_time, last_reservation_time, end_time.

Scope-level failures (no rows in scope, unparseable baseline time, unknown meal shift) raise.
Row-level failures (bad table list, bad instants, no usable table ids) are logged and skipped.
"""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError

from tablesim.config import Settings, settings as default_settings
from tablesim.core.constants import CREATION_CLAMP_SECONDS
from tablesim.core.errors import DecodeError, NoDataError, UnknownMealShiftError
from tablesim.models import DerivedModel, OccupancyEntry, OccupancyGroup, Reservation, TableRecord
from tablesim.services.parsing.embedded_list import decode_table_list
from tablesim.services.simulation.rows import (
    MapRow,
    ReservationRow,
    TableEntry,
    map_row_in_scope,
    reservation_in_scope,
)
from tablesim.services.timeline.time_utils import (
    minutes_between,
    parse_instant,
    shift_start_for,
    time_of_day_to_minutes,
)

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


@dataclass(frozen=True)
class SimulationOptions:
    """The (date, meal shift, venue) scope of one derivation."""
    date: str
    meal_shift: str
    restaurant_id: str

    @classmethod
    def coerce(cls, value: "SimulationOptions | Mapping[str, str]") -> "SimulationOptions":
        if isinstance(value, cls):
            return value
        return cls(
            date=(value.get("date") or "").strip(),
            meal_shift=(value.get("meal_shift") or value.get("mealShift") or "").strip(),
            restaurant_id=(value.get("restaurant_id") or value.get("restaurantId") or "").strip(),
        )


def build_inventory(map_rows: Iterable[Row]) -> dict[int, TableRecord]:
    """Decode every map row's table list into TableRecords keyed by id, sorted by id."""
    tables: dict[int, TableRecord] = {}
    for raw in map_rows:
        try:
            row = MapRow.model_validate(raw)
        except ValidationError as e:
            logger.warning("Skipping map row %s: %s", dict(raw), e.errors(include_url=False))
            continue
        try:
            entries = decode_table_list(row.tables)
        except DecodeError as e:
            logger.warning("Skipping map row %s %s meal=%s: %s", row.restaurant_name, row.date, row.meal, e)
            continue
        for item in entries:
            try:
                entry = TableEntry.model_validate(item)
            except ValidationError as e:
                logger.warning("Skipping table entry %r: %s", item, e.errors(include_url=False))
                continue
            tables[entry.table_id] = TableRecord(
                table_id=entry.table_id,
                max_capacity=entry.max_capacity,
                min_capacity=entry.min_capacity,
            )
    return dict(sorted(tables.items()))


def compute_baseline(reservation_rows: Iterable[Row]) -> int:
    """Earliest time-of-day in minutes. InvalidTimeFormatError propagates: the whole timeline depends on it."""
    return min(time_of_day_to_minutes(str(r.get("time") or "")) for r in reservation_rows)


def build_reservation(raw: Row, min_time: int, cfg: Settings) -> Reservation:
    """
    One validated Reservation. Raises ValueError subclasses (ValidationError,
    InvalidTimeFormatError) for rows that cannot be placed on the timeline.
    """
    row = ReservationRow.model_validate(raw)
    if not row.tables:
        raise ValueError(f"no usable table ids in {raw.get('tables')!r}")
    reservation_dt = parse_instant(row.date, row.time)
    creation_dt = parse_instant(row.date_add, row.time_add)
    if creation_dt > reservation_dt:
        creation_dt = reservation_dt - timedelta(seconds=CREATION_CLAMP_SECONDS)
    return Reservation(
        arrival_time=time_of_day_to_minutes(row.time) - min_time,
        table_ids=tuple(row.tables),
        party_size=row.party_size or cfg.default_party_size,
        duration=row.duration or cfg.default_duration_minutes,
        creation_datetime=creation_dt,
        reservation_datetime=reservation_dt,
        status_long=row.status_long,
        provenance=row.provenance,
    )


def distribute_entries(tables: dict[int, TableRecord], reservations: Iterable[Reservation]) -> int:
    """Append one OccupancyEntry per known table of each reservation. Returns count of unknown ids ignored."""
    unknown = 0
    for res in reservations:
        entry = OccupancyEntry(
            start_time=res.arrival_time,
            end_time=res.end_time,
            creation_datetime=res.creation_datetime,
            reservation_datetime=res.reservation_datetime,
            status_long=res.status_long,
            party_size=res.party_size,
            provenance=res.provenance,
        )
        for table_id in res.table_ids:
            table = tables.get(table_id)
            if table is None:
                unknown += 1
                continue
            table.occupancy_log.append(entry)
    return unknown


def merge_groups(tables: dict[int, TableRecord], shift_start: datetime) -> list[OccupancyGroup]:
    """
    One OccupancyGroup per distinct (start, end, creation, reservation), tables in processing order,
    sorted by creation instant (stable). Instants compare by exact equality.
    """
    by_key: dict[tuple, OccupancyGroup] = {}
    for table in tables.values():
        for entry in table.occupancy_log:
            group = by_key.get(entry.merge_key)
            if group is None:
                by_key[entry.merge_key] = OccupancyGroup(
                    table_ids=[table.table_id],
                    start=entry.start_time,
                    duration=entry.end_time - entry.start_time,
                    creation=entry.creation_datetime,
                    reservation=entry.reservation_datetime,
                    status_long=entry.status_long,
                    party_size=entry.party_size,
                    provenance=entry.provenance,
                    total_capacity=table.max_capacity,
                )
            elif table.table_id not in group.table_ids:
                group.table_ids.append(table.table_id)
                group.total_capacity += table.max_capacity

    groups = list(by_key.values())
    for group in groups:
        group.advance = minutes_between(group.reservation, group.creation)
        group.creation_rel = minutes_between(group.creation, shift_start)
    return sorted(groups, key=lambda g: g.creation)


def derive(
    map_rows: Iterable[Row],
    reservation_rows: Iterable[Row],
    options: SimulationOptions | Mapping[str, str],
    settings: Settings | None = None,
) -> DerivedModel:
    """
    Derive the occupancy model for one (date, meal shift, venue).
    Raises UnknownMealShiftError, NoDataError, or InvalidTimeFormatError (baseline time).
    """
    cfg = settings or default_settings
    opts = SimulationOptions.coerce(options)

    shift_code = cfg.shift_code(opts.meal_shift)
    if shift_code is None:
        raise UnknownMealShiftError(
            f"{opts.meal_shift!r} (known: {', '.join(cfg.meal_shift_codes) or 'none'})"
        )
    if opts.restaurant_id not in cfg.restaurant_ids:
        logger.warning("derive: restaurant %s is not in the known venue list", opts.restaurant_id)

    filtered_reservations = [
        r for r in reservation_rows
        if reservation_in_scope(
            r,
            date=opts.date,
            meal_shift=opts.meal_shift,
            restaurant_id=opts.restaurant_id,
            confirmed_statuses=cfg.confirmed_statuses,
        )
    ]
    filtered_map = [
        m for m in map_rows
        if map_row_in_scope(
            m,
            date=opts.date,
            restaurant_id=opts.restaurant_id,
            shift_code=shift_code,
            shift_label=opts.meal_shift,
        )
    ]
    if not filtered_reservations or not filtered_map:
        raise NoDataError(
            f"{opts.restaurant_id} {opts.date} {opts.meal_shift}: "
            f"{len(filtered_map)} map rows, {len(filtered_reservations)} reservations"
        )

    tables = build_inventory(filtered_map)
    min_time = compute_baseline(filtered_reservations)
    shift_start = shift_start_for(opts.date, min_time)

    reservations: list[Reservation] = []
    skipped = 0
    for raw in filtered_reservations:
        try:
            reservations.append(build_reservation(raw, min_time, cfg))
        except ValueError as e:
            skipped += 1
            logger.warning("Skipping reservation row time=%s tables=%s: %s", raw.get("time"), raw.get("tables"), e)
    if not reservations:
        raise NoDataError(f"all {skipped} reservations for {opts.restaurant_id} {opts.date} {opts.meal_shift} were unusable")

    unknown_tables = distribute_entries(tables, reservations)
    groups = merge_groups(tables, shift_start)

    if groups:
        first_creation_time = min(g.creation_rel for g in groups)
        last_reservation_time = max(minutes_between(g.reservation, shift_start) for g in groups)
    else:
        first_creation_time = last_reservation_time = 0.0
    end_time = max(r.end_time for r in reservations) + cfg.end_time_padding_minutes

    logger.info(
        "derive %s %s %s: tables=%s reservations=%s groups=%s skipped=%s unknown_table_refs=%s",
        opts.restaurant_id,
        opts.date,
        opts.meal_shift,
        len(tables),
        len(reservations),
        len(groups),
        skipped,
        unknown_tables,
    )
    return DerivedModel(
        tables=tables,
        reservations=reservations,
        occupancy_groups=groups,
        min_time=min_time,
        end_time=end_time,
        shift_start=shift_start,
        first_creation_time=first_creation_time,
        last_reservation_time=last_reservation_time,
    )
