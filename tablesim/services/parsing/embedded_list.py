"""
Decoder for the map export's per-row table list.

The upstream exporter writes Python-repr style literals, e.g.
    [{'id_table': '5', 'max': '4', 'min': None, 'active': True}]
We rewrite that dialect to strict JSON and parse it; the dialect stays inside this module.
"""
import json
import re
from typing import Any

from tablesim.core.errors import DecodeError

_JSON_TOKENS = {"None": "null", "True": "true", "False": "false"}
# Quoted strings are matched first and left alone so values like 'True North' survive
_TOKEN_RE = re.compile(r"'[^']*'|\"[^\"]*\"|\b(None|True|False)\b")


def to_strict_json(cell: str) -> str:
    """Rewrite bare null/bool spellings outside quoted strings, then single-quote delimiters to double quotes."""
    text = _TOKEN_RE.sub(lambda m: _JSON_TOKENS[m.group(1)] if m.group(1) else m.group(0), cell.strip())
    return text.replace("'", '"')


def decode_table_list(cell: str) -> list[dict[str, Any]]:
    """
    Decode one `tables` cell into a list of records ({id_table, max, ...}).
    Raises DecodeError on empty input, malformed brackets/quotes, or a non list-of-objects result.
    """
    if cell is None or not cell.strip():
        raise DecodeError("empty table list")
    try:
        data = json.loads(to_strict_json(cell))
    except json.JSONDecodeError as e:
        raise DecodeError(f"malformed table list: {e}") from e
    if not isinstance(data, list):
        raise DecodeError(f"table list must be a list, got {type(data).__name__}")
    if not all(isinstance(item, dict) for item in data):
        raise DecodeError("table list entries must be objects")
    return data
