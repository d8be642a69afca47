"""
Export Exceptions
=================

Failures raised by the exporters. Callers translate them into responses.
"""


class ExportError(Exception):
    """Base exception for export failures."""
    pass


class EmptyDatasetError(ExportError):
    """Raised when a format that needs rows is asked to export none."""

    def __init__(self, format_name: str):
        self.format_name = format_name
        super().__init__(f"no data to export as {format_name}")


class JsonExportError(ExportError):
    """Raised when JSON encoding fails."""
    pass
