"""Error-to-HTTP mapping registry.

Provides a single mapping from exception types to HTTP responses so the API
layer and the CLI render the error taxonomy the same way.

Usage:
    from reader_api.core.errors.base import error_to_status

    try:
        result = await pipeline.process(url=url)
    except Exception as e:
        status, body = error_to_status(e)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from reader_api.core.errors.reader import (
    ConfigurationError,
    CredentialsExhaustedError,
    InputError,
    ReaderError,
)
from reader_api.core.redaction import redact_secrets

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_to_status(exc: Exception) -> Tuple[int, Dict[str, Any]]:
    """Convert an exception to ``(status_code, json_body)``.

    Input errors become 400, configuration errors and total extraction
    failure become 500. Anything outside the reader taxonomy is logged with a
    traceback and reported as a generic 500.
    """
    if isinstance(exc, InputError):
        return exc.status_code, {"error": exc.message}
    if isinstance(exc, ConfigurationError):
        return exc.status_code, {"error": exc.message}
    if isinstance(exc, CredentialsExhaustedError):
        return exc.status_code, {
            "error": f"Failed to fetch content from {exc.provider}",
            "details": redact_secrets(exc.last_error_message),
        }
    if isinstance(exc, ReaderError):
        return exc.status_code, {"error": exc.message}

    logger.exception("Unhandled error while processing request")
    return 500, {"error": INTERNAL_ERROR_MESSAGE}
