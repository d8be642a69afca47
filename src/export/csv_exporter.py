"""
CSV Exporter
============

Exports a dataset to CSV with a header row.
Quoting and escaping are left to the standard csv writer.
"""

import csv
import io

from .cell_values import cell, format_text_value
from .exceptions import EmptyDatasetError


# =============================================================================
# CONSTANTS
# =============================================================================

RECORD_DELIMITER = "\n"


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_csv(rows: list[dict], fields: list[str]) -> bytes:
    """
    Export rows to CSV, columns in `fields` order.

    Args:
        rows: Dataset rows (field name -> value).
        fields: Ordered field names; also the header row.

    Returns:
        UTF-8 encoded CSV text.

    Raises:
        EmptyDatasetError: If `rows` is empty. A header-only file is not
            produced.
    """
    if not rows:
        raise EmptyDatasetError("csv")

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=RECORD_DELIMITER)

    writer.writerow(fields)
    for row in rows:
        writer.writerow([format_text_value(cell(row, name)) for name in fields])

    return buffer.getvalue().encode("utf-8")
