"""
Storage Module
==============

SQLite persistence for generation requests and datasets.
"""

from .database import (
    init_db,
    get_connection,
    create_request,
    update_request_status,
    mark_completed,
    get_request,
    list_requests,
    save_dataset,
    get_dataset_by_request,

    # Data structures
    GenerationRequestRecord,
    DatasetRecord,
    STATUS_PENDING,
    STATUS_PROCESSING,
    STATUS_COMPLETED,
    STATUS_FAILED,

    # Exceptions
    StorageError,
    RequestNotFoundError,
    DatasetNotFoundError,
)

__all__ = [
    "init_db",
    "get_connection",
    "create_request",
    "update_request_status",
    "mark_completed",
    "get_request",
    "list_requests",
    "save_dataset",
    "get_dataset_by_request",
    "GenerationRequestRecord",
    "DatasetRecord",
    "STATUS_PENDING",
    "STATUS_PROCESSING",
    "STATUS_COMPLETED",
    "STATUS_FAILED",
    "StorageError",
    "RequestNotFoundError",
    "DatasetNotFoundError",
]
