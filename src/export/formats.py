"""
Export Formats
==============

Names of the supported export formats.
"""

SUPPORTED_FORMATS = frozenset({"json", "csv", "markdown", "sql"})


def available_formats() -> list[str]:
    """Return the supported format identifiers, sorted."""
    return sorted(SUPPORTED_FORMATS)
