"""
Centralized constants for the simulation core (Encapsulate What Changes).

Change venue ids, statuses or shift codes here instead of scattering literals across
the engine. Runtime overrides come from config.Settings (TABLESIM_* env vars).
"""

# Venues present in the reservation exports. Used for selectors; filtering does not require membership.
RESTAURANT_IDS: tuple[str, ...] = (
    "restaurante-saona-blasco-ibanez",
    "restaurante-turqueta",
    "restaurante-saona-ciscar",
    "restaurante-saona-santa-barbara",
    "restauerante-saonalaeliana",
    "restaurante-saonacasinodeagricultura",
    "restaurante-saona-epicentre-sagunto",
    "restaurante-saona-viveros",
)

# status_long values that will occupy a table (cancellations and no-shows are excluded)
CONFIRMED_RESERVATION_STATUSES: frozenset[str] = frozenset({
    "Sentada",
    "Cuenta solicitada",
    "Liberada",
    "Llegada",
    "Confirmada",
    "Re-Confirmada",
})

# Reservation meal_shift label -> integer code used in the map export's "meal" column
MEAL_SHIFT_CODES: dict[str, int] = {
    "Comida": 1,
    "Cena": 2,
}
MEAL_SHIFTS: tuple[str, ...] = tuple(MEAL_SHIFT_CODES)

DEFAULT_DURATION_MINUTES = 90
DEFAULT_PARTY_SIZE = 1
# Padding after the last reservation ends on the arrival-time axis
END_TIME_PADDING_MINUTES = 10
# A creation instant after the reservation instant is moved to this many seconds before it
CREATION_CLAMP_SECONDS = 1

CSV_QUOTE_CHAR = '"'

# Formatter placeholders when there is nothing to render
CLOCK_PLACEHOLDER = "00:00"
INSTANT_PLACEHOLDER = "--"
