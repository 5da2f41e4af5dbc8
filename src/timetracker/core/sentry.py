"""Sentry error tracking configuration and initialization."""

import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.utils import BadDsn

from timetracker.core.config import get_environment
from timetracker.core.logging import get_logger

logger = get_logger(__name__)

# Guard against multiple initializations
_sentry_initialized = False


def init_sentry() -> bool:
    """
    Initialize Sentry SDK for error tracking.

    Only initializes if SENTRY_DSN is set and looks like a URL, so local
    development and CI run without Sentry. Safe to call more than once.
    Returns whether Sentry is active.

    - Performance monitoring disabled
    - No PII or SQL in payloads
    - Logging integration disabled to avoid duplicating structlog output
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    sentry_dsn = (os.getenv("SENTRY_DSN") or "").strip()
    if not sentry_dsn:
        logger.info("sentry.disabled", message="Sentry DSN not found, error tracking disabled")
        return False

    # Catches placeholder values like "xxx"
    if not sentry_dsn.startswith(("https://", "http://")):
        logger.info(
            "sentry.disabled",
            message="Sentry DSN appears to be invalid or placeholder, error tracking disabled",
        )
        return False

    environment = get_environment()

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=environment,
            traces_sample_rate=0.0,
            send_default_pii=False,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(level=None, event_level=None),
            ],
            before_send=filter_sensitive_data,
        )
    except BadDsn as exc:
        logger.warning(
            "sentry.init_failed",
            message="Failed to initialize Sentry due to invalid DSN, error tracking disabled",
            error=str(exc),
        )
        return False

    _sentry_initialized = True
    logger.info("sentry.initialized", environment=environment)
    return True


def filter_sensitive_data(event: dict, hint: dict) -> dict:
    """Drop SQL-bearing extras and breadcrumbs, and any Authorization header."""
    extra = event.get("extra")
    if isinstance(extra, dict):
        event["extra"] = {
            key: value
            for key, value in extra.items()
            if "sql" not in str(key).lower() and "sql" not in str(value).lower()
        }

    breadcrumbs = event.get("breadcrumbs")
    if isinstance(breadcrumbs, dict):
        # SDK 2.x wraps the list as {"values": [...]}
        values = breadcrumbs.get("values")
        if isinstance(values, list):
            breadcrumbs["values"] = [b for b in values if not _is_sql_breadcrumb(b)]
    elif isinstance(breadcrumbs, list):
        event["breadcrumbs"] = [b for b in breadcrumbs if not _is_sql_breadcrumb(b)]

    headers = event.get("request", {}).get("headers")
    if isinstance(headers, dict):
        for name in list(headers):
            if name.lower() == "authorization":
                headers[name] = "[Filtered]"

    return event


def _is_sql_breadcrumb(breadcrumb) -> bool:
    if isinstance(breadcrumb, dict):
        message = breadcrumb.get("message", "")
        category = breadcrumb.get("category", "")
        return "sql" in str(message).lower() or "sql" in str(category).lower()
    return "sql" in str(breadcrumb).lower()
