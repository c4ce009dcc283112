# app/core/sentry_config.py
"""
Sentry configuration for error tracking in production.

Sentry captures exceptions and error logs from production environments for
monitoring and debugging.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

logger = logging.getLogger(__name__)


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized successfully, False otherwise.
    """
    # Only initialize in production
    is_production = os.getenv("PRODUCTION", "false").lower() == "true"
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not is_production:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning(
            "SENTRY_DSN not set. Error tracking disabled. "
            "Set SENTRY_DSN environment variable to enable Sentry in production."
        )
        return False

    try:
        # Logging integration - send error logs to Sentry
        logging_integration = LoggingIntegration(
            level=logging.INFO,  # Breadcrumbs from INFO and above
            event_level=logging.ERROR,  # Send errors and above as events
        )

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
                logging_integration,
            ],
            traces_sample_rate=0.1,  # 10% of requests tracked for performance
            sample_rate=1.0,
            release=os.getenv("RELEASE_VERSION", "chamcong@0.1.0"),
            environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
            send_default_pii=False,
            attach_stacktrace=True,
            before_send=before_send_hook,
        )

        env = os.getenv("SENTRY_ENVIRONMENT", "production")
        logger.info(f"Sentry initialized successfully (environment: {env})")
        return True

    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}", exc_info=True)
        return False


def before_send_hook(event, hint):
    """
    Filter data before sending to Sentry.

    Shift notes and backup payloads are personal, so request bodies are never
    forwarded.

    Args:
        event: Sentry event data
        hint: Additional context

    Returns:
        Modified event or None to drop the event
    """
    request = event.get("request")
    if request:
        headers = request.get("headers") or {}
        for header in ("cookie", "authorization", "x-api-key"):
            if header in headers:
                headers[header] = "[Filtered]"
        if "data" in request:
            request["data"] = "[Filtered]"

    return event


def capture_exception(error: Exception, context: dict | None = None):
    """
    Manually capture an exception to Sentry with additional context.

    Args:
        error: Exception to capture
        context: Additional context to send with the error
    """
    if context:
        with sentry_sdk.new_scope() as scope:
            for key, value in context.items():
                scope.set_context(key, value)
            sentry_sdk.capture_exception(error)
    else:
        sentry_sdk.capture_exception(error)
