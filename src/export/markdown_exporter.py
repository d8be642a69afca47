"""
Markdown Exporter
=================

Exports a dataset as a Markdown table:

    | id | name |
    |--------|--------|
    | 1 | John |

A `|` inside a cell is written as `\\|` and line breaks as `<br>`, so every
data row stays on one table line.
"""

from .cell_values import cell, format_text_value
from .exceptions import EmptyDatasetError


# =============================================================================
# CONSTANTS
# =============================================================================

SEPARATOR_SEGMENT = "--------"


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_markdown(rows: list[dict], fields: list[str]) -> bytes:
    """
    Export rows to a Markdown table.

    Raises:
        EmptyDatasetError: If `rows` is empty.
    """
    if not rows:
        raise EmptyDatasetError("markdown")

    lines = [
        _table_row(fields),
        "|" + "".join(f"{SEPARATOR_SEGMENT}|" for _ in fields),
    ]
    for row in rows:
        lines.append(_table_row([format_text_value(cell(row, name)) for name in fields]))

    return ("\n".join(lines) + "\n").encode("utf-8")


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _table_row(cells: list[str]) -> str:
    return "| " + " | ".join(escape_cell(text) for text in cells) + " |"


def escape_cell(text: str) -> str:
    """Escape pipes and line breaks for use inside a table cell."""
    text = text.replace("|", "\\|")
    return text.replace("\r\n", "<br>").replace("\r", "<br>").replace("\n", "<br>")
