#!/usr/bin/env python3
"""Print a derived shift: baseline, playback bounds, occupancy groups and per-table logs.

Run from the project root:
  python scripts/simulation_debug.py maps.csv reservations.csv --date 2024-06-14 --shift Comida \
      --restaurant restaurante-turqueta

With no --date/--restaurant, lists the dates and venues found in the reservations file.
"""
import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

project_dir = Path(__file__).resolve().parent.parent
if str(project_dir) not in sys.path:
    sys.path.insert(0, str(project_dir))

# TABLESIM_* overrides from .env before settings are built
load_dotenv(project_dir / ".env")

from tablesim import (
    SimulationOptions,
    TableSimError,
    derive,
    error_to_message,
    format_advance,
    instant_to_display_string,
    minutes_to_clock_string,
    parse_rows,
    settings,
)
from tablesim.services.simulation import available_dates, available_restaurants


def main() -> int:
    parser = argparse.ArgumentParser(description="Derive and print table occupancy for one shift")
    parser.add_argument("maps", type=Path, help="Map export CSV (restaurant_name,date,meal,tables)")
    parser.add_argument("reservations", type=Path, help="Reservations export CSV")
    parser.add_argument("--date", help="yyyy-MM-dd")
    parser.add_argument("--shift", default="Comida", help=f"One of {', '.join(settings.meal_shift_codes)}")
    parser.add_argument("--restaurant", help="Venue id as it appears in the exports")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped rows")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        map_rows = parse_rows(args.maps.read_text(encoding="utf-8"), settings.csv_quote_char)
        reservation_rows = parse_rows(args.reservations.read_text(encoding="utf-8"), settings.csv_quote_char)
    except TableSimError as e:
        print(error_to_message(e))
        return 1

    if not args.date or not args.restaurant:
        print("Dates:       " + (", ".join(available_dates(reservation_rows)) or "none"))
        print("Restaurants: " + (", ".join(available_restaurants(reservation_rows)) or "none"))
        return 0

    try:
        model = derive(map_rows, reservation_rows, SimulationOptions(args.date, args.shift, args.restaurant))
    except TableSimError as e:
        print(error_to_message(e))
        return 1

    start = model.shift_start
    print(f"Shift {args.restaurant} {args.date} {args.shift}")
    print("==================================")
    print(f"Shift start:      {instant_to_display_string(start)}")
    print(f"Arrival axis:     {minutes_to_clock_string(0, start)} - {minutes_to_clock_string(model.end_time, start)}")
    print(f"Playback axis:    {model.first_creation_time:.0f}m .. {model.last_reservation_time:.0f}m")
    print(f"Tables:           {len(model.tables)}")
    print(f"Reservations:     {len(model.reservations)}")
    print()
    print("Occupancy groups (by creation):")
    for g in model.occupancy_groups:
        tables = ",".join(str(t) for t in g.table_ids)
        print(
            f"  - {minutes_to_clock_string(g.start, start)}-{minutes_to_clock_string(g.end, start)}"
            f"  tables [{tables}]  party {g.party_size}/{g.total_capacity}"
            f"  booked {instant_to_display_string(g.creation)}  ({format_advance(g.advance)})"
        )
    print()
    print("Per table:")
    for table in model.tables.values():
        spans = " ".join(f"[{e.start_time},{e.end_time}]" for e in table.occupancy_log) or "free"
        print(f"  {table.table_id:>4} ({table.min_capacity}-{table.max_capacity}): {spans}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
