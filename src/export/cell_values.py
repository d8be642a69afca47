"""
Cell Values
===========

Classifies loosely-typed cell values coming out of stored datasets into a
closed set of kinds, and renders them for the text-based export formats.

Every raw value maps to exactly one CellKind. Renderers switch over the kind
instead of probing Python types themselves.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


# =============================================================================
# DATA STRUCTURES
# =============================================================================

class CellKind(Enum):
    """Closed set of cell kinds understood by the exporters."""
    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OTHER = "other"


@dataclass(frozen=True)
class CellValue:
    """
    A classified cell.

    `value` holds the native value for STRING, NUMBER and BOOLEAN, None for
    NULL, and the pre-rendered fallback text for OTHER.
    """
    kind: CellKind
    value: Any = None


# =============================================================================
# CLASSIFICATION
# =============================================================================

def classify(value: Any) -> CellValue:
    """Classify a raw cell value into a CellValue."""
    if value is None:
        return CellValue(CellKind.NULL)
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return CellValue(CellKind.BOOLEAN, value)
    if isinstance(value, (int, float)):
        return CellValue(CellKind.NUMBER, value)
    if isinstance(value, str):
        return CellValue(CellKind.STRING, value)
    return CellValue(CellKind.OTHER, _render_other(value))


def cell(row: dict, field_name: str) -> CellValue:
    """Look up and classify a field; a missing key counts as null."""
    return classify(row.get(field_name))


def _render_other(value: Any) -> str:
    """Render nested lists/dicts as compact JSON, anything else via str()."""
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return str(value)


# =============================================================================
# FORMATTING
# =============================================================================

def format_number(number: int | float) -> str:
    """
    Render a number without a trailing `.0` when it is mathematically integral.

    42.0 -> "42", 3.5 -> "3.5". Non-finite floats keep their default form.
    """
    if isinstance(number, int):
        return str(number)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def format_text_value(value: CellValue) -> str:
    """Render a classified cell for CSV and Markdown output."""
    if value.kind is CellKind.NULL:
        return ""
    if value.kind is CellKind.STRING:
        return value.value
    if value.kind is CellKind.NUMBER:
        return format_number(value.value)
    if value.kind is CellKind.BOOLEAN:
        return "true" if value.value else "false"
    if value.kind is CellKind.OTHER:
        return value.value
    raise ValueError(f"Unhandled cell kind: {value.kind}")
