"""Tests for the fetch-then-summarize pipeline."""

import dataclasses

import pytest

from reader_api.core.errors import (
    ConfigurationError,
    CredentialsExhaustedError,
    InputError,
)
from reader_api.core.prompts.summary import SummaryStyle, get_system_prompt
from reader_api.core.reader import (
    MAX_SUMMARY_INPUT_CHARS,
    TRUNCATION_MARKER,
    ReaderPipeline,
    format_citation,
    truncate_content,
)
from tests.conftest import FakeExtractor, FakeSummarizer


def make_pipeline(config, extractor=None, summarizer=None):
    return ReaderPipeline(
        config,
        extractor=extractor or FakeExtractor(good_keys={"j1", "j2", "j3"}),
        summarizer=summarizer or FakeSummarizer(good_keys={"s1", "s2"}),
    )


# ===================================================================
# Helpers
# ===================================================================


class TestTruncateContent:
    def test_short_content_untouched(self):
        assert truncate_content("abc") == "abc"

    def test_exact_limit_untouched(self):
        content = "x" * MAX_SUMMARY_INPUT_CHARS
        assert truncate_content(content) == content

    def test_long_content_cut_with_marker(self):
        content = "x" * (MAX_SUMMARY_INPUT_CHARS + 500)
        bounded = truncate_content(content)
        assert bounded == "x" * MAX_SUMMARY_INPUT_CHARS + TRUNCATION_MARKER

    def test_citation_format(self):
        assert format_citation("https://a.com", "Sum") == "**URL:** https://a.com\n\nSum"


# ===================================================================
# URL mode
# ===================================================================


class TestReadUrl:
    @pytest.mark.asyncio
    async def test_success(self, config):
        pipeline = make_pipeline(config)

        result = await pipeline.process(url="https://example.com/a")

        assert result.content == "Extracted page content"
        assert result.summary == "**URL:** https://example.com/a\n\nA concise summary."
        assert result.summary_ok is True
        assert result.to_dict() == {"summary": result.summary, "content": result.content}

    @pytest.mark.asyncio
    async def test_raw_input_is_normalized_before_fetch(self, config):
        extractor = FakeExtractor(good_keys={"j1", "j2", "j3"})
        pipeline = make_pipeline(config, extractor=extractor)

        result = await pipeline.process(url="URL: example.com/path\n?utm_source=x")

        assert extractor.calls[0][0] == "https://example.com/path?utm_source=x"
        assert result.summary.startswith("**URL:** https://example.com/path?utm_source=x\n\n")

    @pytest.mark.asyncio
    async def test_n_minus_one_failures_then_success(self, config):
        extractor = FakeExtractor(good_keys={"j3"})
        pipeline = make_pipeline(config, extractor=extractor)

        result = await pipeline.process(url="https://example.com")

        tried = [key for _, key in extractor.calls]
        assert result.content == "Extracted page content"
        assert tried[-1] == "j3"
        assert 1 <= len(tried) <= 3
        assert len(tried) == len(set(tried))

    @pytest.mark.asyncio
    async def test_all_extraction_keys_fail(self, config):
        extractor = FakeExtractor(good_keys=set())
        summarizer = FakeSummarizer(good_keys={"s1", "s2"})
        pipeline = make_pipeline(config, extractor=extractor, summarizer=summarizer)

        with pytest.raises(CredentialsExhaustedError) as exc_info:
            await pipeline.process(url="https://example.com")

        assert sorted(key for _, key in extractor.calls) == ["j1", "j2", "j3"]
        assert summarizer.calls == []
        assert exc_info.value.role == "extraction"
        assert "Invalid API key" in exc_info.value.last_error_message

    @pytest.mark.asyncio
    async def test_all_summary_keys_fail_keeps_content(self, config):
        summarizer = FakeSummarizer(good_keys=set())
        pipeline = make_pipeline(config, summarizer=summarizer)

        result = await pipeline.process(url="https://example.com")

        assert result.content == "Extracted page content"
        assert result.summary_ok is False
        assert "Summary unavailable" in result.summary
        assert "overloaded" in result.summary
        assert result.summary.startswith("**URL:** https://example.com\n\n")
        assert sorted(key for _, key, _ in summarizer.calls) == ["s1", "s2"]

    @pytest.mark.asyncio
    async def test_long_content_truncated_for_summary_only(self, config):
        long_content = "a" * (MAX_SUMMARY_INPUT_CHARS + 1000)
        extractor = FakeExtractor(content=long_content, good_keys={"j1", "j2", "j3"})
        summarizer = FakeSummarizer(good_keys={"s1", "s2"})
        pipeline = make_pipeline(config, extractor=extractor, summarizer=summarizer)

        result = await pipeline.process(url="https://example.com")

        sent = summarizer.calls[0][0]
        assert len(sent) == MAX_SUMMARY_INPUT_CHARS + len(TRUNCATION_MARKER)
        assert sent.endswith(TRUNCATION_MARKER)
        assert result.content == long_content
        assert result.truncated is True

    @pytest.mark.asyncio
    async def test_system_prompt_follows_style(self, config):
        structured = dataclasses.replace(config, summary_style="structured")
        summarizer = FakeSummarizer(good_keys={"s1", "s2"})
        pipeline = make_pipeline(structured, summarizer=summarizer)

        await pipeline.process(url="https://example.com")

        assert summarizer.calls[0][2] == get_system_prompt(SummaryStyle.STRUCTURED)


# ===================================================================
# Configuration and input errors
# ===================================================================


class TestPreconditions:
    @pytest.mark.asyncio
    async def test_empty_extraction_pool_makes_no_call(self, config):
        extractor = FakeExtractor(good_keys={"j1"})
        pipeline = make_pipeline(dataclasses.replace(config, jina_api_keys=()), extractor=extractor)

        with pytest.raises(ConfigurationError):
            await pipeline.process(url="https://example.com")
        assert extractor.calls == []

    @pytest.mark.asyncio
    async def test_empty_summary_pool_fails_before_extraction(self, config):
        extractor = FakeExtractor(good_keys={"j1", "j2", "j3"})
        pipeline = make_pipeline(dataclasses.replace(config, summary_api_keys=()), extractor=extractor)

        with pytest.raises(ConfigurationError):
            await pipeline.process(url="https://example.com")
        assert extractor.calls == []

    @pytest.mark.asyncio
    async def test_pool_follows_selected_provider(self, config):
        pipeline = make_pipeline(dataclasses.replace(config, extraction_provider="exa"))

        with pytest.raises(ConfigurationError, match="exa"):
            await pipeline.process(url="https://example.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kwargs", [{}, {"url": ""}, {"url": "   "}, {"text": "\n"}])
    async def test_missing_input(self, config, kwargs):
        pipeline = make_pipeline(config)
        with pytest.raises(InputError, match="URL is required"):
            await pipeline.process(**kwargs)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["localhost", "not a url\nalso not"])
    async def test_unparseable_url_is_input_error(self, config, raw):
        extractor = FakeExtractor(good_keys={"j1", "j2", "j3"})
        pipeline = make_pipeline(config, extractor=extractor)

        with pytest.raises(InputError, match="URL is required"):
            await pipeline.process(url=raw)
        assert extractor.calls == []

    @pytest.mark.asyncio
    async def test_unparseable_url_does_not_fall_back_to_text(self, config):
        pipeline = make_pipeline(config)
        with pytest.raises(InputError):
            await pipeline.process(url="no url here", text="some text")


# ===================================================================
# Text mode
# ===================================================================


class TestSummarizeText:
    @pytest.mark.asyncio
    async def test_text_mode_skips_extraction_and_citation(self, config):
        extractor = FakeExtractor(good_keys={"j1"})
        summarizer = FakeSummarizer(good_keys={"s1", "s2"})
        pipeline = make_pipeline(config, extractor=extractor, summarizer=summarizer)

        result = await pipeline.process(text="Some pasted article text.")

        assert extractor.calls == []
        assert result.summary == "A concise summary."
        assert result.content == "Some pasted article text."
        assert summarizer.calls[0][0] == "Some pasted article text."

    @pytest.mark.asyncio
    async def test_text_mode_needs_no_extraction_keys(self, config):
        pipeline = make_pipeline(dataclasses.replace(config, jina_api_keys=()))
        result = await pipeline.process(text="hello")
        assert result.summary == "A concise summary."

    @pytest.mark.asyncio
    async def test_url_wins_over_text(self, config):
        extractor = FakeExtractor(good_keys={"j1", "j2", "j3"})
        pipeline = make_pipeline(config, extractor=extractor)

        result = await pipeline.process(url="https://example.com", text="ignored")

        assert len(extractor.calls) == 1
        assert result.content == "Extracted page content"
