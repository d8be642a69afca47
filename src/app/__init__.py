"""
App Module
==========

FastAPI application configuration, logging and error mapping.
"""

from .config import VERSION, APP_NAME, DB_PATH, get_db_path
from .exceptions import (
    get_http_exception,
    global_exception_handler,
    UnsupportedFormatError,
    DataNotReadyError,
)
from .logging_config import configure_logging, log_requests

__all__ = [
    "VERSION",
    "APP_NAME",
    "DB_PATH",
    "get_db_path",
    "get_http_exception",
    "global_exception_handler",
    "UnsupportedFormatError",
    "DataNotReadyError",
    "configure_logging",
    "log_requests",
]
