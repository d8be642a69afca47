"""
FastAPI Application Entry Point
================================

Main application initialization and wiring.
Run with: uvicorn src.app.main:app --reload
"""

# Load environment variables FIRST, before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import router
from src.app.config import VERSION, APP_NAME, CORS_ORIGINS, LOG_LEVEL
from src.app.exceptions import global_exception_handler
from src.app.logging_config import configure_logging, log_requests
from src.storage import database


logger = logging.getLogger(__name__)


# =============================================================================
# LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(LOG_LEVEL)
    logger.info("Starting %s v%s", APP_NAME, VERSION)
    database.init_db()
    yield
    logger.info("Server stopped")


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title=APP_NAME,
    description="AI-Driven Mock Data Generator API",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
    expose_headers=["Content-Length", "Content-Type", "Content-Disposition"],
    max_age=86400,
)

app.middleware("http")(log_requests)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

app.add_exception_handler(Exception, global_exception_handler)


# =============================================================================
# ROUTES
# =============================================================================

app.include_router(router, tags=["Mock Data"])


# =============================================================================
# ROOT
# =============================================================================

@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": APP_NAME,
        "version": VERSION,
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "generate": "POST /api/generate",
            "requests": "GET /api/requests",
            "request": "GET /api/requests/{id}",
            "data": "GET /api/data/{id}",
            "export": "GET /api/data/{id}/export?format=json|csv|markdown|sql&table=mock_data",
            "formats": "GET /api/formats",
        }
    }
