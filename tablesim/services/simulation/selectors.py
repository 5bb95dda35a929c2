"""Distinct values offered by the date / venue pickers, taken from uploaded reservation rows."""
from collections.abc import Iterable, Mapping
from typing import Any


def _distinct(rows: Iterable[Mapping[str, Any]], key: str) -> list[str]:
    values = {str(r.get(key) or "").strip() for r in rows}
    values.discard("")
    return sorted(values)


def available_dates(rows: Iterable[Mapping[str, Any]]) -> list[str]:
    return _distinct(rows, "date")


def available_restaurants(rows: Iterable[Mapping[str, Any]]) -> list[str]:
    return _distinct(rows, "restaurant")
