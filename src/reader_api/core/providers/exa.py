"""Exa contents extraction provider.

Exa returns page text as JSON: ``POST https://api.exa.ai/contents`` with
``{"urls": [url], "text": true}`` and the key in ``x-api-key``. The text of
the first result is the page content.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from reader_api.core.errors.provider import EmptyContentError, ProviderError
from reader_api.core.providers.base import (
    DEFAULT_EXTRACTION_TIMEOUT,
    ExtractionProvider,
    ExtractionProviderName,
)
from reader_api.core.providers.shared import send_request

logger = logging.getLogger(__name__)

EXA_API_BASE_URL = "https://api.exa.ai"
EXA_CONTENTS_ENDPOINT = "/contents"


class ExaContentsProvider(ExtractionProvider):
    """Extraction through the Exa contents API."""

    def __init__(
        self,
        timeout: float = DEFAULT_EXTRACTION_TIMEOUT,
        base_url: Optional[str] = None,
    ):
        super().__init__(timeout=timeout, base_url=base_url or EXA_API_BASE_URL)

    def get_provider_name(self) -> str:
        return ExtractionProviderName.EXA.value

    async def extract(self, url: str, api_key: str) -> str:
        response = await send_request(
            self.get_provider_name(),
            "POST",
            f"{self._base_url.rstrip('/')}{EXA_CONTENTS_ENDPOINT}",
            timeout=self._timeout,
            headers={"x-api-key": api_key, "Content-Type": "application/json"},
            json={"urls": [url], "text": True},
        )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                provider=self.get_provider_name(),
                message="Response was not valid JSON",
            ) from e

        text = self._first_result_text(data)
        if not text:
            raise EmptyContentError(self.get_provider_name())
        logger.debug("Exa returned %d characters for %s", len(text), url)
        return text

    @staticmethod
    def _first_result_text(data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        results = data.get("results")
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            return ""
        text = results[0].get("text")
        if not isinstance(text, str) or not text.strip():
            return ""
        return text
