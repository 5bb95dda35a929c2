import pytest

from tablesim import Settings, SimulationOptions, derive, parse_rows

VENUE = "restaurante-turqueta"
DATE = "2024-06-14"

MAPS_CSV = """restaurant_name,date,meal,tables
restaurante-turqueta,2024-06-14,1,"[{'id_table': '5', 'max': '4'}, {'id_table': '6', 'max': '2'}]"
restaurante-turqueta,2024-06-14,2,"[{'id_table': '40', 'max': '8'}]"
restaurante-saona-ciscar,2024-06-14,1,"[{'id_table': '5', 'max': '10'}]"
"""

RESERVATION_HEADER = "date,meal_shift,restaurant,status_long,time,tables,for,duration,date_add,time_add"

RESERVATIONS_CSV = RESERVATION_HEADER + """
2024-06-14,Comida,restaurante-turqueta,Confirmada,19:00,"5,6",4,60,2024-06-14,17:00:00
2024-06-14,Comida,restaurante-turqueta,Confirmada,19:30,6,2,,2024-06-13,10:00:00
2024-06-14,Comida,restaurante-turqueta,Cancelada,18:00,5,2,60,2024-06-10,10:00:00
2024-06-14,Cena,restaurante-turqueta,Confirmada,21:00,5,2,60,2024-06-10,10:00:00
2024-06-15,Comida,restaurante-turqueta,Confirmada,13:00,5,2,60,2024-06-10,10:00:00
"""


def reservation_row(**overrides) -> dict:
    """One in-scope reservation row as parse_rows would produce it."""
    row = {
        "date": DATE,
        "meal_shift": "Comida",
        "restaurant": VENUE,
        "status_long": "Confirmada",
        "time": "19:00",
        "tables": "5",
        "for": "2",
        "duration": "60",
        "date_add": DATE,
        "time_add": "12:00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def options():
    return SimulationOptions(date=DATE, meal_shift="Comida", restaurant_id=VENUE)


@pytest.fixture
def map_rows():
    return parse_rows(MAPS_CSV)


@pytest.fixture
def reservation_rows():
    return parse_rows(RESERVATIONS_CSV)


@pytest.fixture
def test_settings():
    return Settings(_env_file=None)


@pytest.fixture
def model(map_rows, reservation_rows, options, test_settings):
    return derive(map_rows, reservation_rows, options, test_settings)
