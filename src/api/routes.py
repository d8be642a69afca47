"""
API Routes
==========

Endpoint definitions for the Mock Data Generator API:
  - POST /api/generate             - Generate and store a dataset
  - GET  /api/requests             - List recent generation requests
  - GET  /api/requests/{id}        - Get one generation request
  - GET  /api/data/{id}            - Get the dataset of a completed request
  - GET  /api/data/{id}/export     - Download the dataset as json/csv/markdown/sql

This module orchestrates generation, storage and export without adding
business logic.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, NamedTuple

from fastapi import APIRouter, Query, Response

from .schemas import (
    GenerateRequest,
    GenerateResponse,
    GenerationRequestResponse,
    RequestListResponse,
    DataResponse,
    FormatsResponse,
    HealthResponse,
    VersionResponse,
    ErrorResponse,
)

from src.generation import generate_mock_data
from src.export import (
    export_to_json,
    export_to_csv,
    export_to_markdown,
    export_to_sql,
    available_formats,
)
from src.storage import database

# Import config and utilities
from src.app import config as app_config
from src.app import exceptions as app_exceptions


logger = logging.getLogger(__name__)


# =============================================================================
# ROUTER
# =============================================================================

router = APIRouter(prefix="/api")

# Error bodies are {"detail": {"status", "message", "detail"}}
ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


# =============================================================================
# EXPORT FORMAT RESOLUTION
# =============================================================================

class ExportTarget(NamedTuple):
    render: Callable[..., bytes]
    content_type: str
    extension: str


EXPORT_TARGETS: dict[str, ExportTarget] = {
    "json": ExportTarget(export_to_json, "application/json", "json"),
    "csv": ExportTarget(export_to_csv, "text/csv", "csv"),
    "markdown": ExportTarget(export_to_markdown, "text/markdown", "md"),
    "sql": ExportTarget(export_to_sql, "application/sql", "sql"),
}

FORMAT_ALIASES = {
    "md": "markdown",
}


def resolve_format(format_name: str) -> str:
    """
    Map a user-supplied format string to a supported format.

    Raises:
        UnsupportedFormatError: If the format is unknown.
    """
    normalized = format_name.strip().lower()
    normalized = FORMAT_ALIASES.get(normalized, normalized)
    if normalized not in EXPORT_TARGETS:
        raise app_exceptions.UnsupportedFormatError(format_name, available_formats())
    return normalized


def _mark_failed(request_id: int) -> None:
    """Set a request to 'failed' without masking the error that caused it."""
    try:
        database.update_request_status(request_id, database.STATUS_FAILED)
    except Exception:
        logger.exception("Could not mark generation request %d as failed", request_id)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/generate",
    response_model=GenerateResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
)
def generate_data(request: GenerateRequest) -> GenerateResponse:
    """
    Generate mock data for a scenario and store it.

    The request moves pending -> processing -> completed, or to failed if
    generating or storing the dataset fails.
    """
    logger.info("New generation request: %s (%d rows)", request.scenario, request.row_count)

    try:
        record = database.create_request(request.scenario, request.row_count)
    except Exception as e:
        raise app_exceptions.get_http_exception(e)

    try:
        database.update_request_status(record.id, database.STATUS_PROCESSING)
        rows, fields = generate_mock_data(request.scenario, request.row_count)
        database.save_dataset(record.id, rows, fields)
        database.mark_completed(record.id)
    except Exception as e:
        _mark_failed(record.id)
        raise app_exceptions.get_http_exception(e)

    logger.info("Generation request %d completed successfully", record.id)

    return GenerateResponse(
        id=record.id,
        status="completed",
        message=f"Successfully generated {request.row_count} rows of mock data",
        created_at=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/requests", response_model=RequestListResponse, responses=ERROR_RESPONSES)
def list_generation_requests() -> RequestListResponse:
    """List the most recent generation requests, newest first."""
    try:
        records = database.list_requests()
    except Exception as e:
        raise app_exceptions.get_http_exception(e)

    return RequestListResponse(
        requests=[GenerationRequestResponse(**r.to_dict()) for r in records],
        count=len(records),
    )


@router.get(
    "/requests/{request_id}",
    response_model=GenerationRequestResponse,
    responses=ERROR_RESPONSES,
)
def get_generation_request(request_id: int) -> GenerationRequestResponse:
    """Get a single generation request."""
    try:
        record = database.get_request(request_id)
    except Exception as e:
        raise app_exceptions.get_http_exception(e)

    return GenerationRequestResponse(**record.to_dict())


@router.get("/data/{request_id}", response_model=DataResponse, responses=ERROR_RESPONSES)
def get_mock_data(request_id: int) -> DataResponse:
    """Get the generated dataset of a completed request."""
    try:
        record = database.get_request(request_id)
        if record.status != database.STATUS_COMPLETED:
            raise app_exceptions.DataNotReadyError(record.status)
        dataset = database.get_dataset_by_request(request_id)
    except Exception as e:
        raise app_exceptions.get_http_exception(e)

    return DataResponse(
        id=dataset.id,
        request_id=request_id,
        scenario=record.scenario,
        data=dataset.data,
        field_names=dataset.field_names,
        row_count=len(dataset.data),
        created_at=dataset.created_at,
    )


@router.get(
    "/data/{request_id}/export",
    responses={**ERROR_RESPONSES, 422: {"model": ErrorResponse}},
)
def export_mock_data(
    request_id: int,
    format: str = Query("json", description="json, csv, markdown (md) or sql"),
    table: str = Query(app_config.DEFAULT_TABLE_NAME, description="Table name for SQL export"),
) -> Response:
    """Download the dataset of a request in the requested format."""
    try:
        format_name = resolve_format(format)
        target = EXPORT_TARGETS[format_name]
        dataset = database.get_dataset_by_request(request_id)

        if format_name == "sql":
            body = target.render(dataset.data, dataset.field_names, table)
        else:
            body = target.render(dataset.data, dataset.field_names)
    except Exception as e:
        raise app_exceptions.get_http_exception(e)

    filename = f"mockdata-{request_id}.{target.extension}"
    return Response(
        content=body,
        media_type=target.content_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/formats", response_model=FormatsResponse)
def list_formats() -> FormatsResponse:
    """List supported export formats."""
    return FormatsResponse(formats=available_formats())


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        service=app_config.SERVICE_NAME,
        time=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/version", response_model=VersionResponse)
def get_version() -> VersionResponse:
    """Get API version."""
    return VersionResponse(version=app_config.VERSION, name=app_config.APP_NAME)
