from tablesim.services.parsing.csv_rows import parse_rows
from tablesim.services.parsing.embedded_list import decode_table_list
from tablesim.services.parsing.table_ids import parse_table_ids

__all__ = ["decode_table_list", "parse_rows", "parse_table_ids"]
