from datetime import datetime, timedelta

import pytest

from tablesim import Settings, SimulationOptions, derive
from tablesim.core.errors import InvalidTimeFormatError, NoDataError, UnknownMealShiftError
from tablesim.services.parsing import parse_rows

from tests.conftest import DATE, MAPS_CSV, VENUE, reservation_row


def _spans(table):
    return [(e.start_time, e.end_time) for e in table.occupancy_log]


def _group_for(model, table_ids):
    return next(g for g in model.occupancy_groups if g.table_ids == table_ids)


# ---------------------------------------------------------------------------
# End-to-end scenario
# ---------------------------------------------------------------------------

def test_scenario_baseline_and_inventory(model):
    assert model.min_time == 1140
    assert model.shift_start == datetime(2024, 6, 14, 19, 0)
    assert sorted(model.tables) == [5, 6]
    assert model.tables[5].max_capacity == 4
    assert model.tables[5].min_capacity == 4
    assert all(t.occupied is False for t in model.tables.values())


def test_scenario_occupancy_logs(model):
    assert _spans(model.tables[5]) == [(0, 60)]
    assert _spans(model.tables[6]) == [(0, 60), (30, 120)]


def test_scenario_groups(model):
    assert len(model.occupancy_groups) == 2
    shared = _group_for(model, [5, 6])
    assert shared.start == 0
    assert shared.duration == 60
    assert shared.advance == 120
    assert shared.creation_rel == -120
    assert shared.party_size == 4
    assert shared.total_capacity == 6
    assert shared.spare_seats == 2
    assert shared.status_long == "Confirmada"

    alone = _group_for(model, [6])
    assert alone.start == 30
    assert alone.duration == 90


def test_scenario_groups_sorted_by_creation(model):
    creations = [g.creation for g in model.occupancy_groups]
    assert creations == sorted(creations)
    # row B was booked the day before, so it comes first
    assert model.occupancy_groups[0].table_ids == [6]


def test_scenario_playback_bounds(model):
    # B booked 2024-06-13 10:00, 33h before the 19:00 shift start
    assert model.first_creation_time == -1980
    assert model.last_reservation_time == 30
    assert model.end_time == 130


def test_scenario_reservations(model):
    assert [r.arrival_time for r in model.reservations] == [0, 30]
    assert model.reservations[0].table_ids == (5, 6)
    assert model.reservations[1].duration == 90
    assert model.reservations[1].party_size == 2


def test_options_accept_mapping(map_rows, reservation_rows, test_settings):
    model = derive(
        map_rows,
        reservation_rows,
        {"date": DATE, "mealShift": "Comida", "restaurantId": VENUE},
        test_settings,
    )
    assert model.min_time == 1140


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def test_derive_is_deterministic(map_rows, reservation_rows, options, test_settings):
    first = derive(map_rows, reservation_rows, options, test_settings)
    second = derive(map_rows, reservation_rows, options, test_settings)
    assert first.occupancy_groups == second.occupancy_groups
    assert first.occupancy_groups is not second.occupancy_groups
    assert first.tables[6] is not second.tables[6]


def test_identical_tuples_merge_into_one_group(map_rows, options, test_settings):
    rows = [
        reservation_row(tables="5", time_add="11:00:00"),
        reservation_row(tables="6", time_add="11:00:00"),
    ]
    model = derive(map_rows, rows, options, test_settings)
    assert len(model.occupancy_groups) == 1
    assert model.occupancy_groups[0].table_ids == [5, 6]


@pytest.mark.parametrize(
    "override",
    [
        {"time": "19:15"},
        {"duration": "90"},
        {"time_add": "11:30:00"},
        {"date_add": "2024-06-13"},
    ],
)
def test_any_differing_field_keeps_groups_apart(map_rows, options, test_settings, override):
    rows = [
        reservation_row(tables="5", time_add="11:00:00"),
        reservation_row(tables="6", **{"time_add": "11:00:00", **override}),
    ]
    model = derive(map_rows, rows, options, test_settings)
    assert len(model.occupancy_groups) == 2


def test_same_table_in_same_tuple_listed_once(map_rows, options, test_settings):
    rows = [reservation_row(tables="5"), reservation_row(tables="5,6")]
    model = derive(map_rows, rows, options, test_settings)
    assert [g.table_ids for g in model.occupancy_groups] == [[5, 6]]
    assert model.occupancy_groups[0].total_capacity == 6
    assert len(model.tables[5].occupancy_log) == 2


def test_creation_after_reservation_is_clamped(map_rows, options, test_settings):
    rows = [reservation_row(time="19:00", date_add=DATE, time_add="20:00:00")]
    model = derive(map_rows, rows, options, test_settings)
    res = model.reservations[0]
    assert res.creation_datetime == res.reservation_datetime - timedelta(seconds=1)
    assert model.occupancy_groups[0].advance == pytest.approx(1 / 60)


def test_creation_never_after_reservation(model):
    assert all(r.creation_datetime <= r.reservation_datetime for r in model.reservations)
    assert all(g.advance >= 0 for g in model.occupancy_groups)


def test_baseline_is_minimum_time_of_day(map_rows, options, test_settings):
    rows = [reservation_row(time="20:15"), reservation_row(time="13:30"), reservation_row(time="14:00")]
    model = derive(map_rows, rows, options, test_settings)
    assert model.min_time == 13 * 60 + 30
    assert [r.arrival_time for r in model.reservations] == [405, 0, 30]


@pytest.mark.parametrize("duration", ["", "abc", "0", None])
def test_missing_or_bad_duration_defaults_to_90(map_rows, options, test_settings, duration):
    row = reservation_row()
    if duration is None:
        del row["duration"]
    else:
        row["duration"] = duration
    model = derive(map_rows, [row], options, test_settings)
    assert model.reservations[0].duration == 90
    assert _spans(model.tables[5]) == [(0, 90)]


def test_bad_party_size_uses_default(map_rows, options, test_settings):
    model = derive(map_rows, [reservation_row(**{"for": "two"})], options, test_settings)
    assert model.reservations[0].party_size == 1


def test_unknown_table_ids_are_ignored(map_rows, options, test_settings):
    model = derive(map_rows, [reservation_row(tables="99,5")], options, test_settings)
    assert 99 not in model.tables
    assert _spans(model.tables[5]) == [(0, 60)]
    assert model.occupancy_groups[0].table_ids == [5]


def test_only_unknown_tables_gives_empty_groups(map_rows, options, test_settings):
    model = derive(map_rows, [reservation_row(tables="99")], options, test_settings)
    assert model.occupancy_groups == []
    assert model.first_creation_time == 0.0
    assert model.last_reservation_time == 0.0
    assert model.end_time == 70


def test_non_numeric_table_tokens_dropped(map_rows, options, test_settings):
    model = derive(map_rows, [reservation_row(tables="5,terraza,6")], options, test_settings)
    assert model.reservations[0].table_ids == (5, 6)


def test_unusable_row_is_skipped_but_counts_for_baseline(map_rows, options, test_settings, caplog):
    rows = [reservation_row(time="18:00", tables="terraza"), reservation_row(time="19:00")]
    with caplog.at_level("WARNING"):
        model = derive(map_rows, rows, options, test_settings)
    assert model.min_time == 18 * 60
    assert len(model.reservations) == 1
    assert model.reservations[0].arrival_time == 60
    assert "Skipping reservation row" in caplog.text


def test_bad_creation_instant_skips_row(map_rows, options, test_settings):
    rows = [reservation_row(time_add="mañana"), reservation_row(tables="6")]
    model = derive(map_rows, rows, options, test_settings)
    assert len(model.reservations) == 1
    assert model.reservations[0].table_ids == (6,)


def test_all_rows_unusable_is_no_data(map_rows, options, test_settings):
    with pytest.raises(NoDataError):
        derive(map_rows, [reservation_row(tables="")], options, test_settings)


def test_rows_with_int_values_are_accepted(options, test_settings):
    map_rows = [{"restaurant_name": VENUE, "date": DATE, "meal": 1, "tables": "[{'id_table': 5, 'max': 4}]"}]
    rows = [reservation_row(**{"for": 3, "duration": 45, "tables": [5]})]
    model = derive(map_rows, rows, options, test_settings)
    assert model.reservations[0].party_size == 3
    assert _spans(model.tables[5]) == [(0, 45)]


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

def test_malformed_map_row_is_skipped(options, test_settings, caplog):
    text = MAPS_CSV + "restaurante-turqueta,2024-06-14,1,\"[{'id_table': '7', 'max': '4'}\"\n"
    with caplog.at_level("WARNING"):
        model = derive(parse_rows(text), [reservation_row()], options, test_settings)
    assert sorted(model.tables) == [5, 6]
    assert "Skipping map row" in caplog.text


def test_later_map_rows_win_on_id_collision(options, test_settings):
    text = MAPS_CSV + "restaurante-turqueta,2024-06-14,1.0,\"[{'id_table': '6', 'max': '8', 'min': '6'}]\"\n"
    model = derive(parse_rows(text), [reservation_row()], options, test_settings)
    assert model.tables[6].max_capacity == 8
    assert model.tables[6].min_capacity == 6


def test_bad_table_entry_skipped(options, test_settings):
    map_rows = [{
        "restaurant_name": VENUE,
        "date": DATE,
        "meal": "1",
        "tables": "[{'id_table': 'A1', 'max': '4'}, {'id_table': '5', 'max': '0'}, {'id_table': '6', 'max': '2', 'min': None}]",
    }]
    model = derive(map_rows, [reservation_row(tables="6")], options, test_settings)
    assert list(model.tables) == [6]
    assert model.tables[6].min_capacity == 2


def test_tables_ordered_by_id(options, test_settings):
    map_rows = [{"restaurant_name": VENUE, "date": DATE, "meal": "1", "tables": "[{'id_table': '9', 'max': '2'}, {'id_table': '3', 'max': '2'}]"}]
    model = derive(map_rows, [reservation_row(tables="9,3")], options, test_settings)
    assert list(model.tables) == [3, 9]
    assert model.occupancy_groups[0].table_ids == [3, 9]


# ---------------------------------------------------------------------------
# Scope failures
# ---------------------------------------------------------------------------

def test_no_reservations_in_scope(map_rows, reservation_rows, test_settings):
    options = SimulationOptions(date="2024-06-16", meal_shift="Comida", restaurant_id=VENUE)
    with pytest.raises(NoDataError):
        derive(map_rows, reservation_rows, options, test_settings)


def test_cancelled_reservations_excluded(map_rows, options, test_settings):
    with pytest.raises(NoDataError):
        derive(map_rows, [reservation_row(status_long="Cancelada"), reservation_row(status_long="No show")], options, test_settings)


def test_no_map_rows_for_shift(reservation_rows, test_settings):
    # reservations exist for Cena, but the venue's map only has the Comida layout
    options = SimulationOptions(date=DATE, meal_shift="Cena", restaurant_id=VENUE)
    map_rows = [m for m in parse_rows(MAPS_CSV) if m["meal"] == "1"]
    with pytest.raises(NoDataError):
        derive(map_rows, reservation_rows, options, test_settings)


def test_unknown_meal_shift_rejected(map_rows, reservation_rows, test_settings):
    options = SimulationOptions(date=DATE, meal_shift="Desayuno", restaurant_id=VENUE)
    with pytest.raises(UnknownMealShiftError):
        derive(map_rows, reservation_rows, options, test_settings)


def test_unparseable_baseline_time_is_fatal(map_rows, options, test_settings):
    with pytest.raises(InvalidTimeFormatError):
        derive(map_rows, [reservation_row(), reservation_row(time="7pm")], options, test_settings)


# ---------------------------------------------------------------------------
# Injected settings
# ---------------------------------------------------------------------------

def test_substitute_status_allow_list(map_rows, options):
    cfg = Settings(_env_file=None, confirmed_statuses=frozenset({"Cancelada"}))
    model = derive(map_rows, [reservation_row(status_long="Cancelada")], options, cfg)
    assert len(model.reservations) == 1
    with pytest.raises(NoDataError):
        derive(map_rows, [reservation_row()], options, cfg)


def test_substitute_shift_codes(options):
    cfg = Settings(_env_file=None, meal_shift_codes={"Comida": 3})
    map_rows = [{"restaurant_name": VENUE, "date": DATE, "meal": "3", "tables": "[{'id_table': '5', 'max': '4'}]"}]
    model = derive(map_rows, [reservation_row()], options, cfg)
    assert list(model.tables) == [5]


def test_duration_and_padding_from_settings(map_rows, reservation_rows, options):
    cfg = Settings(_env_file=None, default_duration_minutes=45, end_time_padding_minutes=0)
    model = derive(map_rows, reservation_rows, options, cfg)
    assert model.reservations[1].duration == 45
    assert model.end_time == 75


@pytest.mark.parametrize("duration", ["1e400", "inf", "-inf", "nan"])
def test_overflowing_duration_defaults_to_90(map_rows, options, test_settings, duration):
    rows = [reservation_row(duration=duration), reservation_row(tables="6")]
    model = derive(map_rows, rows, options, test_settings)
    assert [r.duration for r in model.reservations] == [90, 60]


@pytest.mark.parametrize("party", ["inf", "-1e400"])
def test_overflowing_party_size_uses_default(map_rows, options, test_settings, party):
    rows = [reservation_row(**{"for": party}), reservation_row(tables="6")]
    model = derive(map_rows, rows, options, test_settings)
    assert [r.party_size for r in model.reservations] == [1, 2]


def test_overflowing_min_capacity_defaults_to_max(options, test_settings):
    map_rows = [{"restaurant_name": VENUE, "date": DATE, "meal": "1", "tables": "[{'id_table': '5', 'max': '4', 'min': 'inf'}]"}]
    model = derive(map_rows, [reservation_row()], options, test_settings)
    assert model.tables[5].min_capacity == 4
