"""Tests for the chat-completions summarizer."""

import pytest

from reader_api.core.errors import EmptyContentError, ProviderError, RateLimitError
from reader_api.core.providers import ChatCompletionsSummarizer, SummaryProviderName
from tests.core.providers.conftest import make_mock_response, patched_client


def completion(content):
    return {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"prompt_tokens": 120, "completion_tokens": 40},
    }


class TestDefaults:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs, provider, url, model",
        [
            (
                {"provider": SummaryProviderName.GROQ},
                "groq",
                "https://api.groq.com/openai/v1/chat/completions",
                "llama-3.3-70b-versatile",
            ),
            (
                {"provider": "openai"},
                "openai",
                "https://api.openai.com/v1/chat/completions",
                "gpt-4o-mini",
            ),
            (
                {"model": "llama-3.1-8b-instant"},
                "groq",
                "https://api.groq.com/openai/v1/chat/completions",
                "llama-3.1-8b-instant",
            ),
        ],
    )
    async def test_provider_endpoint_and_model(self, kwargs, provider, url, model):
        summarizer = ChatCompletionsSummarizer(**kwargs)
        response = make_mock_response(json_data=completion("ok"))

        with patched_client(response) as (_, mock_client):
            await summarizer.summarize("page text", "key", system_prompt="SYS")

        assert summarizer.get_provider_name() == provider
        call = mock_client.request.call_args
        assert call.args == ("POST", url)
        assert call.kwargs["json"]["model"] == model


class TestSummarize:
    @pytest.mark.asyncio
    async def test_request_shape(self):
        summarizer = ChatCompletionsSummarizer(temperature=0.2, max_tokens=256)
        response = make_mock_response(json_data=completion("A short summary."))

        with patched_client(response) as (_, mock_client):
            summary = await summarizer.summarize("page text", "gsk_key", system_prompt="SYS")

        assert summary == "A short summary."
        call = mock_client.request.call_args
        assert call.args == ("POST", "https://api.groq.com/openai/v1/chat/completions")
        assert call.kwargs["headers"]["Authorization"] == "Bearer gsk_key"
        payload = call.kwargs["json"]
        assert payload["model"] == "llama-3.3-70b-versatile"
        assert payload["messages"] == [
            {"role": "system", "content": "SYS"},
            {"role": "user", "content": "page text"},
        ]
        assert payload["temperature"] == 0.2
        assert payload["max_tokens"] == 256

    @pytest.mark.asyncio
    async def test_base_url_override(self):
        summarizer = ChatCompletionsSummarizer(base_url="http://localhost:11434/v1/")
        response = make_mock_response(json_data=completion("ok"))

        with patched_client(response) as (_, mock_client):
            await summarizer.summarize("x", "k", system_prompt="SYS")

        assert mock_client.request.call_args.args[1] == "http://localhost:11434/v1/chat/completions"

    @pytest.mark.asyncio
    async def test_summary_is_stripped(self):
        summarizer = ChatCompletionsSummarizer()
        with patched_client(make_mock_response(json_data=completion("  padded \n"))):
            assert await summarizer.summarize("x", "k", system_prompt="SYS") == "padded"

    @pytest.mark.asyncio
    async def test_empty_completion(self):
        summarizer = ChatCompletionsSummarizer()
        with patched_client(make_mock_response(json_data=completion(""))):
            with pytest.raises(EmptyContentError):
                await summarizer.summarize("x", "k", system_prompt="SYS")

    @pytest.mark.asyncio
    async def test_missing_choices(self):
        summarizer = ChatCompletionsSummarizer()
        with patched_client(make_mock_response(json_data={"id": "cmpl-1"})):
            with pytest.raises(EmptyContentError):
                await summarizer.summarize("x", "k", system_prompt="SYS")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        summarizer = ChatCompletionsSummarizer()
        with patched_client(make_mock_response(text="oops", raise_json=True)):
            with pytest.raises(ProviderError, match="not valid JSON"):
                await summarizer.summarize("x", "k", system_prompt="SYS")

    @pytest.mark.asyncio
    async def test_rate_limit(self):
        summarizer = ChatCompletionsSummarizer()
        with patched_client(make_mock_response(status_code=429)):
            with pytest.raises(RateLimitError):
                await summarizer.summarize("x", "k", system_prompt="SYS")
