"""ReaderConfig dataclass and global configuration state.

This module defines the ``ReaderConfig`` class (field declarations and simple
accessor methods) and the global ``get_config`` / ``set_config`` helpers.
Loading logic lives in the ``_ReaderConfigLoader`` mixin (``loader.py``).

The config is frozen: it is read once at startup and handed to the pipeline
as an immutable snapshot.
"""

import logging
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_package_version
from typing import Optional, Tuple

from reader_api.config.loader import _ReaderConfigLoader
from reader_api.core.context import RequestIdFilter
from reader_api.core.credentials import CredentialPool
from reader_api.core.prompts.summary import SummaryStyle
from reader_api.core.providers.base import (
    DEFAULT_EXTRACTION_TIMEOUT,
    DEFAULT_SUMMARY_TIMEOUT,
    ExtractionProviderName,
    SummaryProviderName,
)
from reader_api.core.providers.chat_completions import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
)


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("reader-api")
    except PackageNotFoundError:
        return "0.3.0"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()

_PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
_STRUCTURED_FORMAT = (
    '{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s",'
    '"request_id":"%(request_id)s","message":"%(message)s"}'
)


@dataclass(frozen=True)
class ReaderConfig(_ReaderConfigLoader):
    """Reader configuration with support for env vars and TOML overrides."""

    # Extraction
    extraction_provider: str = ExtractionProviderName.JINA.value
    jina_api_keys: Tuple[str, ...] = ()
    exa_api_keys: Tuple[str, ...] = ()
    scrapingbee_api_keys: Tuple[str, ...] = ()
    extraction_timeout: float = DEFAULT_EXTRACTION_TIMEOUT

    # Summarization
    summary_provider: str = SummaryProviderName.GROQ.value
    summary_api_keys: Tuple[str, ...] = ()
    summary_base_url: Optional[str] = None
    summary_model: Optional[str] = None
    summary_style: str = SummaryStyle.PARAGRAPH.value
    summary_temperature: float = DEFAULT_TEMPERATURE
    summary_max_tokens: int = DEFAULT_MAX_TOKENS
    summary_timeout: float = DEFAULT_SUMMARY_TIMEOUT

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = False

    # Server configuration
    host: str = "127.0.0.1"
    port: int = 8000
    server_version: str = _PACKAGE_VERSION

    def __repr__(self) -> str:
        # Pool sizes only; keys never appear in repr or logs
        return (
            f"ReaderConfig(extraction_provider={self.extraction_provider!r}, "
            f"extraction_keys={len(self.extraction_keys())}, "
            f"summary_provider={self.summary_provider!r}, "
            f"summary_keys={len(self.summary_api_keys)}, "
            f"summary_model={self.resolved_summary_model!r})"
        )

    def extraction_keys(self) -> Tuple[str, ...]:
        """Keys configured for the selected extraction provider."""
        return {
            ExtractionProviderName.JINA.value: self.jina_api_keys,
            ExtractionProviderName.EXA.value: self.exa_api_keys,
            ExtractionProviderName.SCRAPINGBEE.value: self.scrapingbee_api_keys,
        }[self.extraction_provider]

    def extraction_pool(self) -> CredentialPool:
        return CredentialPool("extraction", self.extraction_provider, self.extraction_keys())

    def summary_pool(self) -> CredentialPool:
        return CredentialPool("summarization", self.summary_provider, self.summary_api_keys)

    @property
    def resolved_summary_model(self) -> str:
        return self.summary_model or SummaryProviderName(self.summary_provider).default_model

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.structured_logging:
            # JSON-style structured logging
            formatter = logging.Formatter(_STRUCTURED_FORMAT)
        else:
            formatter = logging.Formatter(_PLAIN_FORMAT)

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        handler.addFilter(RequestIdFilter())

        root_logger = logging.getLogger("reader_api")
        for existing in list(root_logger.handlers):
            root_logger.removeHandler(existing)
        root_logger.setLevel(level)
        root_logger.addHandler(handler)


# Global configuration instance
_config: Optional[ReaderConfig] = None


def get_config() -> ReaderConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ReaderConfig.from_env()
    return _config


def set_config(config: Optional[ReaderConfig]) -> None:
    """Set the global configuration instance (``None`` forces a reload)."""
    global _config
    _config = config
