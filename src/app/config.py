"""
Application Configuration
=========================

Central configuration for the API.
Values come from the environment (a `.env` file is loaded by the entry point).
"""

import os
from pathlib import Path


# =============================================================================
# VERSION
# =============================================================================

VERSION = "1.0.0"
APP_NAME = "Mock Data Generator"
SERVICE_NAME = "mock-data-generator"


# =============================================================================
# LLM
# =============================================================================

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
MODEL_NAME = os.environ.get("MOCKDATA_MODEL", "gemini-2.0-flash")
TEMPERATURE = float(os.environ.get("MOCKDATA_TEMPERATURE", "0.7"))
MAX_OUTPUT_TOKENS = int(os.environ.get("MOCKDATA_MAX_TOKENS", "4000"))


# =============================================================================
# GENERATION LIMITS
# =============================================================================

MIN_ROW_COUNT = 1
MAX_ROW_COUNT = 1000
DEFAULT_TABLE_NAME = "mock_data"
LIST_REQUESTS_LIMIT = 100


# =============================================================================
# DATABASE
# =============================================================================

# Default database file (can be overridden via environment variable)
DB_PATH = os.environ.get(
    "MOCKDATA_DB_PATH",
    str(Path(__file__).parent.parent.parent / "mockdata.db")
)


# =============================================================================
# HTTP / LOGGING
# =============================================================================

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def get_api_key() -> str:
    """Return the Gemini API key, re-reading the environment if unset at import."""
    return GEMINI_API_KEY or os.environ.get("GEMINI_API_KEY", "")


def get_db_path() -> str:
    """
    Get the database file path, creating its parent directory if needed.

    Returns:
        Path to the SQLite database file.
    """
    db_path = Path(DB_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return str(db_path)
