"""Fetch-then-summarize pipeline.

``ReaderPipeline.process`` runs one reader request:

1. Check both credential pools (an empty pool fails before any network call).
2. Extract the page with the configured extraction provider, rotating
   through shuffled extraction keys. Total failure is fatal.
3. Truncate a copy of the content for the summarizer.
4. Summarize with rotation through shuffled summarization keys. Total
   failure is not fatal: the summary becomes a visible placeholder.
5. Prefix the summary with a citation line in URL mode.

In text mode step 2 is skipped and the supplied text is the content.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from reader_api.config import ReaderConfig
from reader_api.core.credentials import try_each_credential
from reader_api.core.errors import CredentialsExhaustedError, InputError
from reader_api.core.prompts.summary import SummaryStyle, get_system_prompt
from reader_api.core.providers import (
    ExtractionProvider,
    SummaryProvider,
    create_extraction_provider,
    create_summary_provider,
)
from reader_api.core.redaction import redact_secrets
from reader_api.core.url_cleaner import resolve_target_url

logger = logging.getLogger(__name__)

MAX_SUMMARY_INPUT_CHARS = 30_000
TRUNCATION_MARKER = "\n\n[...content truncated...]"
MISSING_INPUT_MESSAGE = "URL is required"


def truncate_content(content: str, limit: int = MAX_SUMMARY_INPUT_CHARS) -> str:
    """Cap *content* at *limit* characters, appending a marker when cut."""
    if len(content) <= limit:
        return content
    return content[:limit] + TRUNCATION_MARKER


def format_citation(url: str, summary: str) -> str:
    return f"**URL:** {url}\n\n{summary}"


def summary_placeholder(error: CredentialsExhaustedError) -> str:
    """Visible summary text used when every summarization key failed."""
    return (
        f"Summary unavailable: all {error.attempts} summarization credential(s) "
        f"for {error.provider} failed. Last error: {redact_secrets(error.last_error_message)}"
    )


@dataclass(frozen=True)
class ReaderResult:
    """Outcome of one pipeline run.

    Attributes:
        summary: Model summary (or failure placeholder), with a citation line in URL mode
        content: Full, untruncated extracted text
        url: Target URL in URL mode, None in text mode
        summary_ok: False when the summary is a failure placeholder
        truncated: Whether the summarizer received a truncated copy
        elapsed_ms: Wall-clock duration of the run
    """

    summary: str
    content: str
    url: Optional[str] = None
    summary_ok: bool = True
    truncated: bool = False
    elapsed_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Public response body: ``{"summary", "content"}``."""
        return {"summary": self.summary, "content": self.content}


class ReaderPipeline:
    """Orchestrates extraction and summarization for one request at a time.

    The pipeline holds no per-request state, so one instance can serve
    concurrent requests. Providers are built from *config* unless injected.
    """

    def __init__(
        self,
        config: ReaderConfig,
        extractor: Optional[ExtractionProvider] = None,
        summarizer: Optional[SummaryProvider] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.extractor = extractor or create_extraction_provider(config)
        self.summarizer = summarizer or create_summary_provider(config)
        self._rng = rng
        self._system_prompt = get_system_prompt(SummaryStyle(config.summary_style))

    async def process(self, url: Optional[str] = None, text: Optional[str] = None) -> ReaderResult:
        """Run the pipeline for *url* or, when no url is given, for *text*.

        Raises:
            InputError: If neither a usable url nor text is given.
            ConfigurationError: If a required credential pool is empty.
            CredentialsExhaustedError: If every extraction key failed.
        """
        if url is not None and url.strip():
            target = resolve_target_url(url)
            if not target:
                raise InputError(MISSING_INPUT_MESSAGE)
            return await self.read_url(target)
        if text is not None and text.strip():
            return await self.summarize_text(text)
        raise InputError(MISSING_INPUT_MESSAGE)

    async def read_url(self, url: str) -> ReaderResult:
        """Extract *url*, summarize it and prefix the citation line."""
        started = time.perf_counter()
        extraction_pool = self.config.extraction_pool().require()
        self.config.summary_pool().require()

        logger.info(
            "Reading %s via %s (%d extraction key(s))",
            url,
            extraction_pool.provider,
            len(extraction_pool),
        )
        content = await try_each_credential(
            extraction_pool,
            lambda key: self.extractor.extract(url, key),
            rng=self._rng,
        )

        summary, summary_ok, truncated = await self._summarize(content)
        return ReaderResult(
            summary=format_citation(url, summary),
            content=content,
            url=url,
            summary_ok=summary_ok,
            truncated=truncated,
            elapsed_ms=(time.perf_counter() - started) * 1000,
        )

    async def summarize_text(self, text: str) -> ReaderResult:
        """Summarize caller-supplied *text*; no extraction and no citation line."""
        started = time.perf_counter()
        self.config.summary_pool().require()

        summary, summary_ok, truncated = await self._summarize(text)
        return ReaderResult(
            summary=summary,
            content=text,
            summary_ok=summary_ok,
            truncated=truncated,
            elapsed_ms=(time.perf_counter() - started) * 1000,
        )

    async def _summarize(self, content: str) -> tuple[str, bool, bool]:
        """Return ``(summary, summary_ok, truncated)``; never raises on provider failure."""
        bounded = truncate_content(content)
        truncated = len(content) > MAX_SUMMARY_INPUT_CHARS
        if truncated:
            logger.info(
                "Content truncated from %d to %d characters for summarization",
                len(content),
                MAX_SUMMARY_INPUT_CHARS,
            )

        try:
            summary = await try_each_credential(
                self.config.summary_pool(),
                lambda key: self.summarizer.summarize(
                    bounded, key, system_prompt=self._system_prompt
                ),
                rng=self._rng,
            )
        except CredentialsExhaustedError as e:
            logger.error("Summarization failed, returning content only: %s", redact_secrets(str(e)))
            return summary_placeholder(e), False, truncated
        return summary, True, truncated
