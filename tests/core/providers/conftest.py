"""Shared test fixtures for provider tests.

Provides mock response builders and a patched ``httpx.AsyncClient`` used
across the extraction, summarization and shared-helper test files.
"""

from contextlib import contextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

# ---------------------------------------------------------------------------
# Mock response builder
# ---------------------------------------------------------------------------


def make_mock_response(
    *,
    status_code: int = 200,
    headers: dict | None = None,
    json_data: dict | None = None,
    text: str = "",
    raise_json: bool = False,
) -> MagicMock:
    """Build a mock httpx.Response for provider tests.

    Args:
        status_code: HTTP status code.
        headers: Response headers dict.
        json_data: JSON body (returned by response.json()).
        text: Plain text body.
        raise_json: If True, response.json() raises ValueError.

    Returns:
        MagicMock configured as an httpx.Response.
    """
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.headers = headers or {}
    response.text = text

    if raise_json:
        response.json.side_effect = ValueError("No JSON")
    elif json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.return_value = {}

    return response


# ---------------------------------------------------------------------------
# Patched client
# ---------------------------------------------------------------------------


@contextmanager
def patched_client(response=None, *, side_effect=None):
    """Patch ``httpx.AsyncClient`` so ``client.request`` returns *response*.

    Yields ``(mock_client_class, mock_client)`` for call assertions.
    """
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        if side_effect is not None:
            mock_client.request = AsyncMock(side_effect=side_effect)
        else:
            mock_client.request = AsyncMock(return_value=response)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=None)
        mock_client_class.return_value = mock_client
        yield mock_client_class, mock_client
