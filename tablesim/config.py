"""
Simulation settings (Pydantic Settings).

Defaults live in core.constants; TABLESIM_* env vars or a .env at the project root override them.
List/dict fields are read from env as JSON, e.g. TABLESIM_MEAL_SHIFT_CODES='{"Comida": 1, "Cena": 2}'.
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tablesim.core.constants import (
    CONFIRMED_RESERVATION_STATUSES,
    CSV_QUOTE_CHAR,
    DEFAULT_DURATION_MINUTES,
    DEFAULT_PARTY_SIZE,
    END_TIME_PADDING_MINUTES,
    MEAL_SHIFT_CODES,
    RESTAURANT_IDS,
)

# .env next to the project root (parent of tablesim/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TABLESIM_",
        env_file=_env_path,
        extra="ignore",
        frozen=True,
    )

    default_duration_minutes: int = DEFAULT_DURATION_MINUTES
    default_party_size: int = DEFAULT_PARTY_SIZE
    end_time_padding_minutes: int = END_TIME_PADDING_MINUTES
    csv_quote_char: str = CSV_QUOTE_CHAR
    confirmed_statuses: frozenset[str] = CONFIRMED_RESERVATION_STATUSES
    meal_shift_codes: dict[str, int] = dict(MEAL_SHIFT_CODES)
    restaurant_ids: tuple[str, ...] = RESTAURANT_IDS

    @field_validator("confirmed_statuses", mode="after")
    @classmethod
    def strip_statuses(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(s.strip() for s in v if s and s.strip())

    @field_validator("default_duration_minutes", "default_party_size", mode="after")
    @classmethod
    def positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive number of minutes/guests")
        return v

    @field_validator("csv_quote_char", mode="after")
    @classmethod
    def single_char(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("csv_quote_char must be exactly one character")
        return v

    def shift_code(self, meal_shift: str) -> int | None:
        """Integer code the map export uses for this meal shift label, or None if unknown."""
        return self.meal_shift_codes.get((meal_shift or "").strip())


settings = Settings()
