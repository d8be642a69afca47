"""
Application Exceptions
======================

Maps internal exceptions to HTTP status codes.
"""

import logging

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


# =============================================================================
# API-LEVEL EXCEPTIONS
# =============================================================================

class UnsupportedFormatError(Exception):
    """Raised when an export format string is not recognized."""

    def __init__(self, format_name: str, supported: list[str]):
        self.format_name = format_name
        super().__init__(
            f"Format '{format_name}' is not supported. Use: {', '.join(supported)}"
        )


class DataNotReadyError(Exception):
    """Raised when a dataset is requested for a request that has not completed."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(
            f"Request status is '{status}', data is only available for completed requests"
        )


# =============================================================================
# EXCEPTION MAPPING
# =============================================================================

# Maps exception class names to (status_code, user_message)
EXCEPTION_MAP = {
    # Generation
    "LLMUnavailableError": (502, "Failed to generate data."),
    "GenerationOutputError": (502, "The model returned unusable data."),
    "GenerationError": (502, "Failed to generate data."),

    # Storage
    "RequestNotFoundError": (404, "Request not found."),
    "DatasetNotFoundError": (404, "Dataset not found."),
    "StorageError": (500, "Database error."),

    # API
    "DataNotReadyError": (400, "Data not available."),
    "UnsupportedFormatError": (400, "Invalid format."),

    # Export
    "EmptyDatasetError": (422, "Dataset has no rows to export."),
    "JsonExportError": (500, "Failed to export JSON."),
    "ExportError": (500, "Export failed."),
}


def _lookup(exc: Exception) -> tuple[int, str]:
    """Find the mapping for an exception, walking up its base classes."""
    for cls in type(exc).__mro__:
        if cls.__name__ in EXCEPTION_MAP:
            return EXCEPTION_MAP[cls.__name__]
    return 500, "Internal system error."


def get_http_exception(exc: Exception) -> HTTPException:
    """
    Convert an internal exception to an HTTPException.

    Args:
        exc: The caught exception.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    status_code, user_message = _lookup(exc)
    if status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc)
    return HTTPException(
        status_code=status_code,
        detail={
            "status": "error",
            "message": user_message,
            "detail": str(exc)
        }
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches all unhandled exceptions and returns structured error response.
    """
    status_code, user_message = _lookup(exc)
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "message": user_message,
            "detail": str(exc)
        }
    )
