"""Utility for logging upstream API requests when GO_LOG_REQUESTS is enabled."""

import logging
import os
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

SENSITIVE_QUERY_PARAMS = frozenset({"key", "apikey", "api_key", "token"})


def should_log_requests() -> bool:
    """Check if request logging is enabled via the GO_LOG_REQUESTS environment variable."""
    return os.getenv("GO_LOG_REQUESTS", "").lower() == "true"


def redact_url(url: str) -> str:
    """Replace credential query parameters in a URL with a placeholder."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (k, "***REDACTED***" if k.lower() in SENSITIVE_QUERY_PARAMS else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))


def log_api_request(method: str, url: str, status: int | None = None) -> None:
    """Log an upstream request (and its status, if known) with credentials redacted.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Full request URL including the query string.
        status: HTTP status of the response, when already received.
    """
    if not should_log_requests():
        return

    line = f"{method} {redact_url(url)}"
    if status is not None:
        line += f" -> {status}"
    logger.info(f"API Request: {line}")
