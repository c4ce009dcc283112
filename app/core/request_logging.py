# app/core/request_logging.py
"""
Request logging middleware for tracking all HTTP requests.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.logging_config import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs all HTTP requests with timing and status codes.

    Adds a unique request ID to each request for tracing.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        try:
            response = await call_next(request)
            status_code = response.status_code
            error = None
        except Exception as e:
            status_code = 500
            error = str(e)
            raise
        finally:
            duration_ms = (time.time() - start_time) * 1000

            log_data = {
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration": duration_ms,
            }
            extra = {"extra_fields": log_data}

            # Log level based on status code
            if error:
                logger.error(
                    f"{request.method} {request.url.path} - {status_code} "
                    f"({duration_ms:.2f}ms) - ERROR: {error}",
                    extra=extra,
                    exc_info=True,
                )
            elif status_code >= 500:
                logger.error(
                    f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)",
                    extra=extra,
                )
            elif status_code >= 400:
                logger.warning(
                    f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)",
                    extra=extra,
                )
            elif request.url.path == "/health":
                # Health checks only at DEBUG
                logger.debug(
                    f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)",
                    extra=extra,
                )
            else:
                logger.info(
                    f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)",
                    extra=extra,
                )

        response.headers["X-Request-ID"] = request_id

        return response
