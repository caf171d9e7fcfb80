"""Jina Reader extraction provider.

Jina Reader renders a page and returns it as markdown: ``GET
https://r.jina.ai/<url>`` with the key as a bearer token.

Example usage:
    provider = JinaReaderProvider()
    text = await provider.extract("https://example.com/article", api_key="jina_...")
"""

from __future__ import annotations

import logging
from typing import Optional

from reader_api.core.errors.provider import EmptyContentError
from reader_api.core.providers.base import (
    DEFAULT_EXTRACTION_TIMEOUT,
    ExtractionProvider,
    ExtractionProviderName,
)
from reader_api.core.providers.shared import send_request

logger = logging.getLogger(__name__)

JINA_READER_BASE_URL = "https://r.jina.ai"


class JinaReaderProvider(ExtractionProvider):
    """Extraction through the Jina Reader API."""

    def __init__(
        self,
        timeout: float = DEFAULT_EXTRACTION_TIMEOUT,
        base_url: Optional[str] = None,
        with_links_summary: bool = True,
    ):
        super().__init__(timeout=timeout, base_url=base_url or JINA_READER_BASE_URL)
        self._with_links_summary = with_links_summary

    def get_provider_name(self) -> str:
        return ExtractionProviderName.JINA.value

    async def extract(self, url: str, api_key: str) -> str:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Accept": "text/plain",
        }
        if self._with_links_summary:
            headers["X-With-Links-Summary"] = "true"

        response = await send_request(
            self.get_provider_name(),
            "GET",
            f"{self._base_url.rstrip('/')}/{url}",
            timeout=self._timeout,
            headers=headers,
        )

        text = response.text
        if not text or not text.strip():
            raise EmptyContentError(self.get_provider_name())
        logger.debug("Jina returned %d characters for %s", len(text), url)
        return text
