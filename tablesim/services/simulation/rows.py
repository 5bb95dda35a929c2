"""
Parse-and-validate boundary for the two export row shapes.

Raw rows are header-keyed string dicts from parse_rows (or the same shape re-supplied
from local storage, where some values may already be ints). Scope filtering runs on the
raw dicts so out-of-scope rows are never validated; in-scope rows go through MapRow /
ReservationRow before the engine touches them. All "is this numeric / is this present"
checks live here.
"""
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tablesim.services.parsing.table_ids import parse_table_ids


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_positive_int(value: Any) -> int | None:
    """'60' -> 60; '', None, 'abc', '0', '-5', 'inf' -> None."""
    raw = _as_str(value)
    if not raw:
        return None
    try:
        n = int(raw)
    except ValueError:
        try:
            n = int(float(raw))
        except (ValueError, OverflowError):
            return None
    return n if n > 0 else None


def meal_matches(meal: Any, shift_code: int, shift_label: str) -> bool:
    """Loose comparison: 1, '1', '1.0' and the label itself all match code 1."""
    raw = _as_str(meal)
    if not raw:
        return False
    if raw.lower() == shift_label.strip().lower():
        return True
    try:
        return float(raw) == shift_code
    except ValueError:
        return False


def map_row_in_scope(row: Mapping[str, Any], *, date: str, restaurant_id: str, shift_code: int, shift_label: str) -> bool:
    return (
        _as_str(row.get("restaurant_name")) == restaurant_id
        and _as_str(row.get("date")) == date
        and meal_matches(row.get("meal"), shift_code, shift_label)
    )


def reservation_in_scope(
    row: Mapping[str, Any],
    *,
    date: str,
    meal_shift: str,
    restaurant_id: str,
    confirmed_statuses: frozenset[str],
) -> bool:
    return (
        _as_str(row.get("date")) == date
        and _as_str(row.get("meal_shift")) == meal_shift
        and _as_str(row.get("restaurant")) == restaurant_id
        and _as_str(row.get("status_long")) in confirmed_statuses
    )


class MapRow(BaseModel):
    """One row of the map export; `tables` is still the raw embedded-list cell."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, coerce_numbers_to_str=True)

    restaurant_name: str = ""
    date: str = ""
    meal: str = ""
    tables: str = ""


class TableEntry(BaseModel):
    """One decoded element of a map row's table list: {id_table, max, min?, ...}."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    table_id: int = Field(alias="id_table")
    max_capacity: int = Field(alias="max", gt=0)
    min_capacity: int | None = Field(default=None, alias="min")

    @field_validator("min_capacity", mode="before")
    @classmethod
    def blank_min(cls, v: Any) -> int | None:
        return _optional_positive_int(v)


class ReservationRow(BaseModel):
    """One in-scope reservation row. Count-like fields are defaulted or dropped, never fatal."""
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    date: str = ""
    time: str = ""
    meal_shift: str = ""
    restaurant: str = ""
    status_long: str = ""
    tables: list[int] = Field(default_factory=list)
    party_size: int | None = Field(default=None, alias="for")
    duration: int | None = None
    date_add: str = ""
    time_add: str = ""
    provenance: str = ""

    @field_validator("tables", mode="before")
    @classmethod
    def split_tables(cls, v: Any) -> list[int]:
        if isinstance(v, (list, tuple)):
            return parse_table_ids(",".join(_as_str(x) for x in v))
        return parse_table_ids(_as_str(v))

    @field_validator("party_size", "duration", mode="before")
    @classmethod
    def positive_or_none(cls, v: Any) -> int | None:
        return _optional_positive_int(v)
