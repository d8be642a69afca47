"""
JSON Exporter
=============

Serializes a dataset to a pretty-printed JSON document:

    {"count": N, "data": [...], "fields": [...]}

Deterministic output with consistent key ordering.
"""

import json
from typing import Any

from .exceptions import JsonExportError


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_json(rows: list[dict], fields: list[str]) -> bytes:
    """
    Export rows and their field list to JSON.

    An empty row list is valid and produces `count = 0`, `data = []`.

    Args:
        rows: Dataset rows (field name -> value).
        fields: Ordered field names.

    Returns:
        UTF-8 encoded JSON document.

    Raises:
        JsonExportError: If a value cannot be encoded, including NaN and
            infinite numbers.
    """
    document = {
        "fields": list(fields),
        "data": list(rows),
        "count": len(rows),
    }

    try:
        text = json.dumps(
            document,
            indent=2,
            ensure_ascii=False,
            sort_keys=True,  # Deterministic key order
            allow_nan=False,  # NaN/Infinity are not valid JSON
            default=_json_serializer,
        )
    except (TypeError, ValueError) as e:
        raise JsonExportError(f"Failed to encode dataset as JSON: {e}") from e

    return text.encode("utf-8")


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _json_serializer(obj: Any) -> Any:
    """Custom JSON serializer for types not natively supported."""
    # Handle datetime objects
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
