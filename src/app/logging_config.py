"""
Logging Configuration
=====================

Root logger setup and the HTTP request-logging middleware.
"""

import logging
import time

from fastapi import Request


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("src.app.requests")


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once. Later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)


async def log_requests(request: Request, call_next):
    """Log method, path, client, status code and duration of each request."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    client = request.client.host if request.client else "-"
    logger.info(
        "[%s] %s %s - %d - %.1fms",
        request.method,
        request.url.path,
        client,
        response.status_code,
        duration_ms,
    )
    return response
