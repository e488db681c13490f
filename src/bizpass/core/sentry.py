"""Sentry error tracking configuration and initialization."""

import os
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.utils import BadDsn

from bizpass.core.logging import get_logger

logger = get_logger(__name__)

_sentry_initialized = False


def init_sentry() -> bool:
    """
    Initialize the Sentry SDK once, when SENTRY_DSN holds a usable DSN.

    No DSN, a placeholder value or a DSN the SDK rejects all leave error
    tracking disabled. Performance tracing and PII are off; the logging
    integration is disabled so structlog output is not duplicated.

    Returns True when Sentry is active after the call.
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    sentry_dsn = (os.getenv("SENTRY_DSN") or "").strip()
    if not sentry_dsn:
        logger.info("sentry.disabled", reason="no_dsn")
        return False

    if not sentry_dsn.startswith(("https://", "http://")):
        logger.info("sentry.disabled", reason="invalid_dsn", dsn_preview=sentry_dsn[:20])
        return False

    environment = os.getenv("ENVIRONMENT", "development")

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=environment,
            traces_sample_rate=0.0,
            send_default_pii=False,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(level=None, event_level=None),
                # No SqlalchemyIntegration: queries must not reach error payloads
            ],
            before_send=filter_sensitive_data,
        )
    except BadDsn as exc:
        logger.warning("sentry.init_failed", error=str(exc))
        return False

    _sentry_initialized = True
    logger.info("sentry.initialized", environment=environment)
    return True


def _mentions_sql(value: Any) -> bool:
    return "sql" in str(value).lower()


def filter_sensitive_data(event: dict, hint: dict) -> dict:
    """Strip extras and breadcrumbs that carry SQL before the event leaves the process."""
    extra = event.get("extra")
    if isinstance(extra, dict):
        event["extra"] = {
            key: value
            for key, value in extra.items()
            if not _mentions_sql(key) and not _mentions_sql(value)
        }

    breadcrumbs = event.get("breadcrumbs")
    if isinstance(breadcrumbs, dict):
        # SDK 2.x wraps the list as {"values": [...]}
        values = breadcrumbs.get("values")
        if isinstance(values, list):
            breadcrumbs["values"] = [b for b in values if not _is_sql_breadcrumb(b)]
    elif isinstance(breadcrumbs, list):
        event["breadcrumbs"] = [b for b in breadcrumbs if not _is_sql_breadcrumb(b)]

    return event


def _is_sql_breadcrumb(breadcrumb: Any) -> bool:
    if isinstance(breadcrumb, dict):
        return _mentions_sql(breadcrumb.get("message", "")) or breadcrumb.get("category") == "query"
    return _mentions_sql(breadcrumb)
