"""Failures of a single provider call.

Each error describes one call made with one key. The credential rotation
catches all of them, logs how the key failed, and moves on to the next key.
"""

from typing import Optional


class ProviderError(Exception):
    """A provider call did not return usable output.

    Attributes:
        provider: Provider that was called
        message: What went wrong, already free of secrets
        retryable: False when the key or request was refused outright,
            True when the same key could work on a later request
        status_code: The provider's HTTP status, when it answered at all
    """

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        retryable: bool = False,
        status_code: Optional[int] = None,
    ):
        self.provider = provider
        self.message = message
        self.retryable = retryable
        self.status_code = status_code
        super().__init__(f"[{provider}] {message}")


class AuthenticationError(ProviderError):
    """The provider refused the key (401 or 403)."""

    def __init__(self, provider: str, message: str = "Invalid API key", *, status_code: int = 401):
        super().__init__(provider, message, retryable=False, status_code=status_code)


class RateLimitError(ProviderError):
    """The key is over its rate limit or quota (429).

    ``retry_after`` holds the provider's Retry-After hint in seconds, if sent.
    """

    def __init__(self, provider: str, retry_after: Optional[float] = None):
        self.retry_after = retry_after
        message = "Rate limited"
        if retry_after:
            message += f" (retry after {retry_after:g}s)"
        super().__init__(provider, message, retryable=True, status_code=429)


class EmptyContentError(ProviderError):
    """A 2xx response with no usable text in it."""

    def __init__(self, provider: str, message: str = "Provider returned no content"):
        super().__init__(provider, message, retryable=True)
