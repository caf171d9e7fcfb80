"""ScrapingBee extraction provider.

``GET https://app.scrapingbee.com/api/v1/`` with the key and target URL as
query parameters. ``return_page_text`` asks for the visible text instead of
raw HTML.
"""

from __future__ import annotations

from typing import Optional

from reader_api.core.errors.provider import EmptyContentError
from reader_api.core.providers.base import (
    DEFAULT_EXTRACTION_TIMEOUT,
    ExtractionProvider,
    ExtractionProviderName,
)
from reader_api.core.providers.shared import send_request

SCRAPINGBEE_API_URL = "https://app.scrapingbee.com/api/v1/"


class ScrapingBeeProvider(ExtractionProvider):
    """Extraction through the ScrapingBee HTML API."""

    def __init__(
        self,
        timeout: float = DEFAULT_EXTRACTION_TIMEOUT,
        base_url: Optional[str] = None,
        render_js: bool = False,
    ):
        super().__init__(timeout=timeout, base_url=base_url or SCRAPINGBEE_API_URL)
        self._render_js = render_js

    def get_provider_name(self) -> str:
        return ExtractionProviderName.SCRAPINGBEE.value

    async def extract(self, url: str, api_key: str) -> str:
        response = await send_request(
            self.get_provider_name(),
            "GET",
            self._base_url,
            timeout=self._timeout,
            params={
                "api_key": api_key,
                "url": url,
                "return_page_text": "true",
                "render_js": "true" if self._render_js else "false",
            },
        )

        text = response.text
        if not text or not text.strip():
            raise EmptyContentError(self.get_provider_name())
        return text
