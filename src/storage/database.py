"""
Dataset Storage
===============

SQLite persistence for generation requests and the datasets they produce.

Tables:
  - generation_requests: one row per POST /api/generate
  - mock_datasets: generated rows (JSON text) and field names (JSON text)

Every public function opens its own connection and closes it before
returning.
"""

import json
import logging
import sqlite3
from contextlib import closing, contextmanager
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Iterator

from src.app import config as app_config


logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class StorageError(Exception):
    """Base exception for storage failures."""
    pass


class RequestNotFoundError(StorageError):
    """Raised when a generation request does not exist."""

    def __init__(self, request_id: int):
        self.request_id = request_id
        super().__init__(f"No generation request found with ID {request_id}")


class DatasetNotFoundError(StorageError):
    """Raised when a request has no stored dataset."""

    def __init__(self, request_id: int):
        self.request_id = request_id
        super().__init__(f"No dataset found for request ID {request_id}")


# =============================================================================
# DATA STRUCTURES
# =============================================================================

STATUS_PENDING = "pending"
STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

VALID_STATUSES = frozenset({
    STATUS_PENDING, STATUS_PROCESSING, STATUS_COMPLETED, STATUS_FAILED
})


@dataclass
class GenerationRequestRecord:
    id: int
    scenario: str
    row_count: int
    status: str
    generated_at: str | None
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class DatasetRecord:
    id: int
    request_id: int
    data: list[dict]
    field_names: list[str]
    created_at: str


# =============================================================================
# SCHEMA
# =============================================================================

_SCHEMA = """
CREATE TABLE IF NOT EXISTS generation_requests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    scenario TEXT NOT NULL,
    row_count INTEGER NOT NULL,
    status TEXT NOT NULL DEFAULT 'pending',
    generated_at TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS mock_datasets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    request_id INTEGER NOT NULL REFERENCES generation_requests(id) ON DELETE CASCADE,
    data TEXT NOT NULL,
    field_names TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_mock_datasets_request_id
    ON mock_datasets(request_id);

CREATE TRIGGER IF NOT EXISTS update_generation_requests_updated_at
AFTER UPDATE OF scenario, row_count, status, generated_at ON generation_requests
FOR EACH ROW
BEGIN
    UPDATE generation_requests
    SET updated_at = strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now')
    WHERE id = NEW.id;
END;
"""


# =============================================================================
# CONNECTION
# =============================================================================

@contextmanager
def get_connection() -> Iterator[sqlite3.Connection]:
    """
    Open a connection to the configured database file.

    Commits on success, rolls back on error, always closes.
    """
    conn = sqlite3.connect(app_config.get_db_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        with conn:
            yield conn
    except sqlite3.Error as e:
        raise StorageError(f"Database error: {e}") from e
    finally:
        conn.close()


def init_db() -> None:
    """Create tables, index and trigger. Safe to run multiple times."""
    logger.info("Running database migrations on %s", app_config.get_db_path())
    with get_connection() as conn:
        conn.executescript(_SCHEMA)
    logger.info("Database migrations completed")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# GENERATION REQUESTS
# =============================================================================

def create_request(scenario: str, row_count: int) -> GenerationRequestRecord:
    """Insert a new request in status 'pending'."""
    now = _now()
    with get_connection() as conn:
        cursor = conn.execute(
            """INSERT INTO generation_requests (scenario, row_count, status, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (scenario, row_count, STATUS_PENDING, now, now),
        )
        request_id = cursor.lastrowid
    return get_request(request_id)


def update_request_status(
    request_id: int,
    status: str,
    generated_at: str | None = None
) -> None:
    """
    Move a request to a new status.

    Raises:
        ValueError: If `status` is not a known status.
        RequestNotFoundError: If the request does not exist.
    """
    if status not in VALID_STATUSES:
        raise ValueError(f"Unknown status '{status}'. Allowed: {sorted(VALID_STATUSES)}")

    with get_connection() as conn:
        if generated_at is not None:
            cursor = conn.execute(
                "UPDATE generation_requests SET status = ?, generated_at = ? WHERE id = ?",
                (status, generated_at, request_id),
            )
        else:
            cursor = conn.execute(
                "UPDATE generation_requests SET status = ? WHERE id = ?",
                (status, request_id),
            )
        if cursor.rowcount == 0:
            raise RequestNotFoundError(request_id)


def mark_completed(request_id: int) -> None:
    """Set status 'completed' and stamp generated_at."""
    update_request_status(request_id, STATUS_COMPLETED, generated_at=_now())


def get_request(request_id: int) -> GenerationRequestRecord:
    """
    Fetch one request.

    Raises:
        RequestNotFoundError: If the request does not exist.
    """
    with get_connection() as conn:
        row = conn.execute(
            """SELECT id, scenario, row_count, status, generated_at, created_at, updated_at
               FROM generation_requests
               WHERE id = ?""",
            (request_id,),
        ).fetchone()

    if row is None:
        raise RequestNotFoundError(request_id)
    return GenerationRequestRecord(**dict(row))


def list_requests(limit: int = app_config.LIST_REQUESTS_LIMIT) -> list[GenerationRequestRecord]:
    """Return the most recent requests, newest first."""
    with get_connection() as conn:
        rows = conn.execute(
            """SELECT id, scenario, row_count, status, generated_at, created_at, updated_at
               FROM generation_requests
               ORDER BY created_at DESC, id DESC
               LIMIT ?""",
            (limit,),
        ).fetchall()
    return [GenerationRequestRecord(**dict(row)) for row in rows]


# =============================================================================
# DATASETS
# =============================================================================

def save_dataset(request_id: int, data: list[dict], field_names: list[str]) -> int:
    """
    Store the generated rows for a request.

    Returns:
        ID of the new dataset row.
    """
    with get_connection() as conn:
        cursor = conn.execute(
            """INSERT INTO mock_datasets (request_id, data, field_names, created_at)
               VALUES (?, ?, ?, ?)""",
            (request_id, json.dumps(data), json.dumps(field_names), _now()),
        )
        return cursor.lastrowid


def get_dataset_by_request(request_id: int) -> DatasetRecord:
    """
    Load and decode the dataset of a request.

    Raises:
        DatasetNotFoundError: If nothing is stored for the request.
        StorageError: If the stored JSON cannot be decoded.
    """
    with get_connection() as conn:
        row = conn.execute(
            """SELECT id, request_id, data, field_names, created_at
               FROM mock_datasets
               WHERE request_id = ?
               ORDER BY id DESC
               LIMIT 1""",
            (request_id,),
        ).fetchone()

    if row is None:
        raise DatasetNotFoundError(request_id)

    try:
        data = json.loads(row["data"])
        field_names = json.loads(row["field_names"])
    except json.JSONDecodeError as e:
        raise StorageError(f"Failed to parse stored dataset {row['id']}: {e}") from e

    return DatasetRecord(
        id=row["id"],
        request_id=row["request_id"],
        data=data,
        field_names=field_names,
        created_at=row["created_at"],
    )
