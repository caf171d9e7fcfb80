"""Provider construction from configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reader_api.core.providers.base import (
    ExtractionProvider,
    ExtractionProviderName,
    SummaryProvider,
)
from reader_api.core.providers.chat_completions import ChatCompletionsSummarizer
from reader_api.core.providers.exa import ExaContentsProvider
from reader_api.core.providers.jina import JinaReaderProvider
from reader_api.core.providers.scrapingbee import ScrapingBeeProvider

if TYPE_CHECKING:
    from reader_api.config import ReaderConfig

_EXTRACTION_PROVIDERS: dict[ExtractionProviderName, type[ExtractionProvider]] = {
    ExtractionProviderName.JINA: JinaReaderProvider,
    ExtractionProviderName.EXA: ExaContentsProvider,
    ExtractionProviderName.SCRAPINGBEE: ScrapingBeeProvider,
}


def create_extraction_provider(config: "ReaderConfig") -> ExtractionProvider:
    """Build the extraction provider selected by ``config.extraction_provider``."""
    provider_cls = _EXTRACTION_PROVIDERS[ExtractionProviderName(config.extraction_provider)]
    return provider_cls(timeout=config.extraction_timeout)


def create_summary_provider(config: "ReaderConfig") -> SummaryProvider:
    """Build the chat-completions summarizer described by *config*."""
    return ChatCompletionsSummarizer(
        config.summary_provider,
        base_url=config.summary_base_url,
        model=config.summary_model,
        temperature=config.summary_temperature,
        max_tokens=config.summary_max_tokens,
        timeout=config.summary_timeout,
    )
