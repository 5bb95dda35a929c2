"""
Tabular record parser: raw CSV text -> list of header-keyed string dicts.

No type coercion happens here; every value stays a string and is interpreted by the
row models in services.simulation.rows. Each physical line is one record. A cell that
starts and ends with the quote character may contain commas (the map export's embedded
table list needs this); a quote that never closes is not allowed to swallow later lines.
"""
import csv
import logging

from tablesim.core.constants import CSV_QUOTE_CHAR
from tablesim.core.errors import MalformedInputError

logger = logging.getLogger(__name__)


def _is_blank(cells: list[str]) -> bool:
    return not any(c.strip() for c in cells)


def split_line(line: str, quote_char: str = CSV_QUOTE_CHAR, line_num: int = 0) -> list[str]:
    """Split one line into cells; an unbalanced quote falls back to a plain comma split."""
    reader = csv.reader([line], quotechar=quote_char, skipinitialspace=True, strict=True)
    try:
        return next(reader, [])
    except csv.Error as e:
        logger.warning("parse_rows: line %s has unbalanced quoting (%s), splitting on commas", line_num, e)
        return line.split(",")


def parse_rows(text: str, quote_char: str = CSV_QUOTE_CHAR) -> list[dict[str, str]]:
    """
    Parse CSV text whose first non-blank line is the header.

    - Header names and values are whitespace-trimmed; a duplicated header keeps the last column.
    - Blank lines are skipped, short rows are padded with "", extra cells are dropped.
    - Raises MalformedInputError only for empty text; badly quoted lines are logged, never fatal.
    """
    if text is None or not text.strip():
        raise MalformedInputError("input text is empty")

    headers: list[str] | None = None
    rows: list[dict[str, str]] = []
    for line_num, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        cells = split_line(line, quote_char, line_num)
        if _is_blank(cells):
            continue
        if headers is None:
            headers = [h.strip() for h in cells]
            continue
        row: dict[str, str] = {}
        for i, header in enumerate(headers):
            row[header] = cells[i].strip() if i < len(cells) else ""
        rows.append(row)
    return rows
