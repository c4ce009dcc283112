# app/main.py
"""
FastAPI application entry point.
"""

import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger, setup_logging
from app.core.request_logging import RequestLoggingMiddleware
from app.core.sentry_config import capture_exception, init_sentry
from app.core.storage import StorageError
from app.database.database import create_tables, get_db
from app.routes.export import router as export_router
from app.routes.months import router as months_router

APP_VERSION = "0.1.0"

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

# Initialize Sentry for error tracking (production only)
sentry_enabled = init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={"extra_fields": {"production": os.getenv("PRODUCTION", "false").lower() == "true"}},
    )

    try:
        create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)
        raise

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="ChamCong",
    description="Personal work-shift timesheet: monthly shift records, totals and spreadsheet export",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS Configuration
IS_PRODUCTION = os.getenv("PRODUCTION", "false").lower() == "true"
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]

if IS_PRODUCTION:
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if you need to allow specific origins."
        )
    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST", "PUT", "DELETE"]
    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    allowed_origins = ["*"]
    allowed_methods = ["*"]
    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "Content-Disposition"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(months_router)
app.include_router(export_router)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    """Corrupt stored data: report it instead of overwriting it."""
    logger.error(f"Storage error on {request.url.path}: {exc}")
    if sentry_enabled:
        capture_exception(exc, {"request": {"path": request.url.path}})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns 200 OK if the database answers, 503 otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
        return JSONResponse(
            status_code=200,
            content={
                "status": "healthy",
                "service": "chamcong",
                "version": APP_VERSION,
                "database": "connected",
            },
        )
    except Exception as e:
        logger.error(f"Health check failed - database connection error: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "service": "chamcong",
                "database": "disconnected",
                "error": "Database connection failed",
            },
        ) from e
