"""Extraction and summarization providers.

Supported extraction providers:
- JinaReaderProvider: page-to-markdown via Jina Reader
- ExaContentsProvider: page text via the Exa contents API
- ScrapingBeeProvider: page text via ScrapingBee

Summarization:
- ChatCompletionsSummarizer: Groq or OpenAI chat completions
"""

from reader_api.core.providers.base import (
    ExtractionProvider,
    ExtractionProviderName,
    SummaryProvider,
    SummaryProviderName,
)
from reader_api.core.providers.chat_completions import ChatCompletionsSummarizer
from reader_api.core.providers.exa import ExaContentsProvider
from reader_api.core.providers.jina import JinaReaderProvider
from reader_api.core.providers.registry import (
    create_extraction_provider,
    create_summary_provider,
)
from reader_api.core.providers.scrapingbee import ScrapingBeeProvider

__all__ = [
    # Abstract base
    "ExtractionProvider",
    "SummaryProvider",
    "ExtractionProviderName",
    "SummaryProviderName",
    # Concrete providers
    "JinaReaderProvider",
    "ExaContentsProvider",
    "ScrapingBeeProvider",
    "ChatCompletionsSummarizer",
    # Construction
    "create_extraction_provider",
    "create_summary_provider",
]
