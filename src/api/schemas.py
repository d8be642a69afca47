"""
API Request/Response Schemas
============================

Pydantic models for API request and response validation.
"""

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from src.app.config import MIN_ROW_COUNT, MAX_ROW_COUNT, APP_NAME, SERVICE_NAME


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class GenerateRequest(BaseModel):
    """Request body for POST /api/generate endpoint."""

    scenario: str = Field(
        ...,
        description="Natural-language description of the data to generate"
    )
    row_count: int = Field(
        ...,
        description=f"Number of rows to generate ({MIN_ROW_COUNT}-{MAX_ROW_COUNT})"
    )

    @field_validator("scenario")
    @classmethod
    def _scenario_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("scenario description is required")
        return value

    @field_validator("row_count")
    @classmethod
    def _row_count_in_range(cls, value: int) -> int:
        if value < MIN_ROW_COUNT or value > MAX_ROW_COUNT:
            raise ValueError(
                f"row count must be between {MIN_ROW_COUNT} and {MAX_ROW_COUNT}"
            )
        return value


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class GenerateResponse(BaseModel):
    """Response for POST /api/generate."""

    id: int
    status: Literal["completed"] = "completed"
    message: str
    created_at: str


class GenerationRequestResponse(BaseModel):
    """A stored generation request."""

    id: int
    scenario: str
    row_count: int
    status: Literal["pending", "processing", "completed", "failed"]
    generated_at: Optional[str] = None
    created_at: str
    updated_at: str


class RequestListResponse(BaseModel):
    """Response for GET /api/requests."""

    requests: list[GenerationRequestResponse] = Field(default_factory=list)
    count: int = 0


class DataResponse(BaseModel):
    """Response for GET /api/data/{id}."""

    id: int
    request_id: int
    scenario: str
    data: list[dict[str, Any]]
    field_names: list[str]
    row_count: int
    created_at: str


class FormatsResponse(BaseModel):
    """Response for GET /api/formats."""

    formats: list[str]


class HealthResponse(BaseModel):
    """Response for GET /api/health endpoint."""

    status: str = "ok"
    service: str = SERVICE_NAME
    time: str


class VersionResponse(BaseModel):
    """Response for GET /api/version endpoint."""

    version: str
    name: str = APP_NAME


class ErrorDetail(BaseModel):
    """Structured error body built by get_http_exception."""

    status: str = "error"
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response of a failed endpoint call."""

    detail: ErrorDetail
