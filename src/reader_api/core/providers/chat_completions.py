"""OpenAI-compatible chat-completions summarizer.

Groq and OpenAI share the same request and response shape, so one class
serves both; only the base URL and default model differ.

Request:
    POST {base_url}/chat/completions
    {"model": ..., "messages": [system, user], "temperature": ..., "max_tokens": ...}

The summary is ``choices[0].message.content``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from reader_api.core.errors.provider import EmptyContentError, ProviderError
from reader_api.core.providers.base import (
    DEFAULT_SUMMARY_TIMEOUT,
    SummaryProvider,
    SummaryProviderName,
)
from reader_api.core.providers.shared import send_request

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 1024


class ChatCompletionsSummarizer(SummaryProvider):
    """Summarization through an OpenAI-compatible chat-completions endpoint."""

    def __init__(
        self,
        provider: SummaryProviderName = SummaryProviderName.GROQ,
        *,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: float = DEFAULT_SUMMARY_TIMEOUT,
    ):
        self._provider = SummaryProviderName(provider)
        self._base_url = (base_url or self._provider.default_base_url).rstrip("/")
        self._model = model or self._provider.default_model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout

    def get_provider_name(self) -> str:
        return self._provider.value

    async def summarize(self, content: str, api_key: str, *, system_prompt: str) -> str:
        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": content},
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        response = await send_request(
            self.get_provider_name(),
            "POST",
            f"{self._base_url}/chat/completions",
            timeout=self._timeout,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
        )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                provider=self.get_provider_name(),
                message="Response was not valid JSON",
            ) from e

        summary = self._completion_text(data)
        if not summary:
            raise EmptyContentError(
                self.get_provider_name(), message="Model returned an empty completion"
            )

        usage = data.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        logger.debug(
            "%s summary with %s: %s prompt / %s completion tokens",
            self.get_provider_name(),
            self._model,
            usage.get("prompt_tokens", "?"),
            usage.get("completion_tokens", "?"),
        )
        return summary

    @staticmethod
    def _completion_text(data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        choices = data.get("choices") or []
        if not choices or not isinstance(choices[0], dict):
            return ""
        message = choices[0].get("message") or {}
        content = message.get("content") if isinstance(message, dict) else None
        return content.strip() if isinstance(content, str) else ""
