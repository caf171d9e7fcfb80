"""Abstract base classes for extraction and summarization providers.

Each provider performs exactly one call with exactly one credential. Trying
the next key on failure is the job of ``reader_api.core.credentials``, so a
provider only has to raise a ``ProviderError`` when its call fails.

Example usage:
    class JinaReaderProvider(ExtractionProvider):
        def get_provider_name(self) -> str:
            return "jina"

        async def extract(self, url: str, api_key: str) -> str:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

DEFAULT_EXTRACTION_TIMEOUT = 15.0
DEFAULT_SUMMARY_TIMEOUT = 30.0


class ExtractionProviderName(str, Enum):
    """Supported content extraction providers."""

    JINA = "jina"
    EXA = "exa"
    SCRAPINGBEE = "scrapingbee"

    @property
    def env_key(self) -> str:
        """Environment variable holding this provider's key list."""
        return f"{self.name}_API_KEY"


class SummaryProviderName(str, Enum):
    """Supported chat-completions providers for summarization."""

    GROQ = "groq"
    OPENAI = "openai"

    @property
    def env_key(self) -> str:
        return f"{self.name}_API_KEY"

    @property
    def default_base_url(self) -> str:
        return _SUMMARY_BASE_URLS[self]

    @property
    def default_model(self) -> str:
        return _SUMMARY_MODELS[self]


_SUMMARY_BASE_URLS = {
    SummaryProviderName.GROQ: "https://api.groq.com/openai/v1",
    SummaryProviderName.OPENAI: "https://api.openai.com/v1",
}

_SUMMARY_MODELS = {
    SummaryProviderName.GROQ: "llama-3.3-70b-versatile",
    SummaryProviderName.OPENAI: "gpt-4o-mini",
}


class ExtractionProvider(ABC):
    """Fetches a web page as readable text with one API key.

    Implementations must raise ``ProviderError`` (or a subclass) for any
    failed call, including a 2xx response with no usable text.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_EXTRACTION_TIMEOUT,
        base_url: Optional[str] = None,
    ):
        self._timeout = timeout
        self._base_url = base_url

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier (e.g. "jina")."""

    @abstractmethod
    async def extract(self, url: str, api_key: str) -> str:
        """Return the readable text of *url*.

        Args:
            url: Absolute http(s) URL of the page to read.
            api_key: The single credential to use for this call.

        Raises:
            ProviderError: If the call fails or returns no content.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(timeout={self._timeout})"


class SummaryProvider(ABC):
    """Produces a summary of supplied content with one API key."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier (e.g. "groq")."""

    @abstractmethod
    async def summarize(self, content: str, api_key: str, *, system_prompt: str) -> str:
        """Return the model's summary of *content*.

        Raises:
            ProviderError: If the call fails or the completion is empty.
        """
