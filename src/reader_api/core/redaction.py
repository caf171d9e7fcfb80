"""Secret redaction for provider error text and request headers.

Provider errors can echo the request back (ScrapingBee puts the key in the
query string, httpx includes the URL in its messages), so every error string
that reaches a log line or a response body goes through ``redact_secrets``.
"""

from __future__ import annotations

import re
from typing import Mapping

REDACTED = "****"

# key=value / key: value / "Bearer xyz" forms
_SECRET_PATTERN = re.compile(
    r"(?i)"
    r"(?:"
    r"(?:api[_-]?key|token|bearer|authorization|secret|password|credential)"
    r"[\s:=]+"
    r")"
    r"['\"]?([^\s'\"&]{8,})['\"]?",
)

# Bare keys in the shapes the supported providers issue
_KEY_SHAPES = re.compile(r"\b(?:gsk_|jina_|sk-)[A-Za-z0-9_\-]{8,}")

_SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "x-api-key",
        "api-key",
        "apikey",
        "cookie",
        "set-cookie",
        "proxy-authorization",
    }
)


def redact_secrets(text: str) -> str:
    """Remove API keys and bearer tokens from a text string.

    Args:
        text: Input text that may contain secrets.

    Returns:
        Text with secrets replaced by ``"****"``.
    """
    if not text:
        return text

    def _replace(match: re.Match[str]) -> str:
        return match.group(0).replace(match.group(1), REDACTED)

    text = _SECRET_PATTERN.sub(_replace, text)
    return _KEY_SHAPES.sub(REDACTED, text)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of *headers* with sensitive values redacted."""
    return {
        key: REDACTED if key.lower() in _SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }
