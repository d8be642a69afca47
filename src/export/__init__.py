"""
Export Module
=============

Renders a stored dataset (rows + ordered field list) to JSON, CSV,
Markdown and SQL.

This is a deterministic, side-effect-free export layer. It never touches
the database or the LLM.
"""

from .json_exporter import export_to_json

from .csv_exporter import export_to_csv

from .markdown_exporter import export_to_markdown

from .sql_exporter import (
    export_to_sql,
    format_sql_value,
    infer_sql_type,
    DEFAULT_TABLE_NAME,
    TYPE_MAPPING,
)

from .cell_values import (
    CellKind,
    CellValue,
    classify,
    format_number,
    format_text_value,
)

from .formats import available_formats, SUPPORTED_FORMATS

from .exceptions import (
    ExportError,
    EmptyDatasetError,
    JsonExportError,
)

__all__ = [
    # Renderers
    "export_to_json",
    "export_to_csv",
    "export_to_markdown",
    "export_to_sql",

    # Formats
    "available_formats",
    "SUPPORTED_FORMATS",

    # Cell values
    "CellKind",
    "CellValue",
    "classify",
    "format_number",
    "format_text_value",
    "format_sql_value",
    "infer_sql_type",
    "DEFAULT_TABLE_NAME",
    "TYPE_MAPPING",

    # Exceptions
    "ExportError",
    "EmptyDatasetError",
    "JsonExportError",
]
