"""Shared fixtures: fake providers and test configuration.

The fakes record every call so tests can assert which keys were tried
without depending on the shuffle order.
"""

import logging

import pytest

from reader_api.config import ReaderConfig, set_config
from reader_api.core.errors import AuthenticationError, ProviderError
from reader_api.core.providers import ExtractionProvider, SummaryProvider


class FakeExtractor(ExtractionProvider):
    """Extraction provider that succeeds only for keys in *good_keys*."""

    def __init__(self, content="Extracted page content", good_keys=None):
        super().__init__()
        self.content = content
        self.good_keys = set(good_keys or [])
        self.calls = []

    def get_provider_name(self):
        return "jina"

    async def extract(self, url, api_key):
        self.calls.append((url, api_key))
        if api_key not in self.good_keys:
            raise AuthenticationError(provider="jina", message=f"Invalid API key for {api_key[:2]}")
        return self.content


class FakeSummarizer(SummaryProvider):
    """Summary provider that succeeds only for keys in *good_keys*."""

    def __init__(self, summary="A concise summary.", good_keys=None):
        self.summary = summary
        self.good_keys = set(good_keys or [])
        self.calls = []

    def get_provider_name(self):
        return "groq"

    async def summarize(self, content, api_key, *, system_prompt):
        self.calls.append((content, api_key, system_prompt))
        if api_key not in self.good_keys:
            raise ProviderError(provider="groq", message="API error 503: overloaded", retryable=True)
        return self.summary


@pytest.fixture(autouse=True)
def reset_global_config():
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def config():
    return ReaderConfig(
        jina_api_keys=("j1", "j2", "j3"),
        summary_api_keys=("s1", "s2"),
    )


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Drop handlers installed by ``setup_logging`` so they never outlive a test."""
    yield
    package_logger = logging.getLogger("reader_api")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
