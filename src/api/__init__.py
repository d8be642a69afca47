"""
API Module
==========

API routes and schemas.
"""

from .schemas import (
    GenerateRequest,
    GenerateResponse,
    GenerationRequestResponse,
    RequestListResponse,
    DataResponse,
    FormatsResponse,
    HealthResponse,
    VersionResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "GenerateRequest",
    "GenerateResponse",
    "GenerationRequestResponse",
    "RequestListResponse",
    "DataResponse",
    "FormatsResponse",
    "HealthResponse",
    "VersionResponse",
    "ErrorDetail",
    "ErrorResponse",
]
