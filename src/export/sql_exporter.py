"""
SQL Exporter
============

Exports a dataset as a CREATE TABLE statement followed by one INSERT
statement per row.

Column types are inferred from the first row only. A column whose first
value is null is declared TEXT even if later rows hold numbers.

String literals are escaped by doubling single quotes and nothing else.
"""

import math

from .cell_values import CellKind, CellValue, cell, format_number
from .exceptions import EmptyDatasetError, ExportError


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_TABLE_NAME = "mock_data"

# CellKind -> declared column type
TYPE_MAPPING = {
    CellKind.NULL: "TEXT",
    CellKind.STRING: "TEXT",
    CellKind.NUMBER: "NUMERIC",
    CellKind.BOOLEAN: "BOOLEAN",
    CellKind.OTHER: "TEXT",
}


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_sql(
    rows: list[dict],
    fields: list[str],
    table_name: str | None = DEFAULT_TABLE_NAME
) -> bytes:
    """
    Export rows as SQL statements.

    Args:
        rows: Dataset rows (field name -> value).
        fields: Ordered field names, used as column names.
        table_name: Target table. Empty or None falls back to `mock_data`.

    Returns:
        UTF-8 encoded SQL script.

    Raises:
        EmptyDatasetError: If `rows` is empty.
        ExportError: If a number is NaN or infinite.
    """
    if not rows:
        raise EmptyDatasetError("sql")

    table_name = table_name or DEFAULT_TABLE_NAME

    lines = [
        "-- Generated data",
        f"-- Table: {table_name}",
        "",
    ]
    lines.extend(_create_table(table_name, fields, rows[0]))
    lines.append("")

    column_list = ", ".join(fields)
    for row in rows:
        values = ", ".join(format_sql_value(cell(row, name)) for name in fields)
        lines.append(f"INSERT INTO {table_name} ({column_list}) VALUES ({values});")

    return ("\n".join(lines) + "\n").encode("utf-8")


def infer_sql_type(value: CellValue) -> str:
    """Map a classified cell to a column type."""
    return TYPE_MAPPING[value.kind]


def format_sql_value(value: CellValue) -> str:
    """Render a classified cell as a SQL literal."""
    if value.kind is CellKind.NULL:
        return "NULL"
    if value.kind is CellKind.STRING:
        escaped = value.value.replace("'", "''")
        return f"'{escaped}'"
    if value.kind is CellKind.NUMBER:
        if isinstance(value.value, float) and not math.isfinite(value.value):
            raise ExportError(f"Cannot write non-finite number {value.value!r} as SQL")
        return format_number(value.value)
    if value.kind is CellKind.BOOLEAN:
        return "TRUE" if value.value else "FALSE"
    if value.kind is CellKind.OTHER:
        # Not escaped
        return f"'{value.value}'"
    raise ValueError(f"Unhandled cell kind: {value.kind}")


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _create_table(table_name: str, fields: list[str], first_row: dict) -> list[str]:
    """Build the CREATE TABLE statement lines."""
    columns = [
        f"  {name} {infer_sql_type(cell(first_row, name))}"
        for name in fields
    ]
    return [
        f"CREATE TABLE IF NOT EXISTS {table_name} (",
        ",\n".join(columns),
        ");",
    ]
