"""Shared HTTP utilities for provider calls.

Every provider call goes through ``send_request`` so that timeouts, transport
failures and error statuses are turned into the same ``ProviderError``
family no matter which provider or role made the call.

Utilities:
    Pure parsing helpers:
        - parse_retry_after(response) -> Optional[float]
        - extract_error_message(response) -> str

    Request pattern:
        - raise_for_provider_status(response, provider_name)
        - send_request(provider_name, method, url, timeout=..., **kwargs) -> httpx.Response

SECURITY: error text is run through ``redact_secrets`` before it is stored on
an exception, so keys never reach logs or response bodies.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from reader_api.core.errors.provider import (
    AuthenticationError,
    ProviderError,
    RateLimitError,
)
from reader_api.core.redaction import redact_headers, redact_secrets

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Pure parsing helpers
# ---------------------------------------------------------------------------


def parse_retry_after(response: httpx.Response) -> Optional[float]:
    """Parse a numeric ``Retry-After`` header.

    RFC 7231 date values are not supported and return ``None``.
    """
    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            pass
    return None


def extract_error_message(response: httpx.Response) -> str:
    """Extract and redact an error message from an HTTP error response.

    Tries the JSON body first (``{"error": {"message": ...}}``,
    ``{"error": "..."}`` or ``{"message": "..."}``), then falls back to the
    first 200 characters of the raw body.
    """
    try:
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("error body is not an object")

        error_field = data.get("error")
        if isinstance(error_field, dict):
            msg = error_field.get("message", str(error_field))
        elif isinstance(error_field, str):
            msg = error_field
        else:
            msg = data.get("message", response.text[:200])

        return redact_secrets(str(msg))
    except Exception:
        text = response.text[:200] if response.text else "Unknown error"
        return redact_secrets(text)


# ---------------------------------------------------------------------------
# Request pattern
# ---------------------------------------------------------------------------


def raise_for_provider_status(response: httpx.Response, provider_name: str) -> None:
    """Raise the matching ``ProviderError`` for a non-2xx response.

    - 401/403: AuthenticationError
    - 429: RateLimitError (with Retry-After when present)
    - any other status >= 300: ProviderError, retryable for 5xx
    """
    status = response.status_code
    if 200 <= status < 300:
        return
    if status in (401, 403):
        raise AuthenticationError(
            provider_name,
            f"Invalid API key ({status}): {extract_error_message(response)}",
            status_code=status,
        )
    if status == 429:
        raise RateLimitError(provider=provider_name, retry_after=parse_retry_after(response))
    raise ProviderError(
        provider=provider_name,
        message=f"API error {status}: {extract_error_message(response)}",
        retryable=status >= 500,
        status_code=status,
    )


async def send_request(
    provider_name: str,
    method: str,
    url: str,
    *,
    timeout: float,
    **kwargs: Any,
) -> httpx.Response:
    """Send one HTTP request to a provider and return the 2xx response.

    Args:
        provider_name: Provider identifier used in error messages.
        method: HTTP method.
        url: Full endpoint URL.
        timeout: Per-call timeout in seconds.
        **kwargs: Passed through to ``httpx.AsyncClient.request``
            (``headers``, ``params``, ``json``).

    Raises:
        ProviderError: On timeout, transport failure or non-2xx status.
    """
    logger.debug(
        "%s %s %s headers=%s",
        provider_name,
        method,
        redact_secrets(url),
        redact_headers(kwargs.get("headers") or {}),
    )
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        raise ProviderError(
            provider=provider_name,
            message=f"Request timed out after {timeout}s",
            retryable=True,
        ) from e
    except httpx.HTTPError as e:
        raise ProviderError(
            provider=provider_name,
            message=f"Request failed: {redact_secrets(str(e)) or type(e).__name__}",
            retryable=True,
        ) from e

    raise_for_provider_status(response, provider_name)
    return response
