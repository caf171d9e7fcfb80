"""Credential pools and rotate-and-retry.

A ``CredentialPool`` is the immutable list of interchangeable API keys for
one provider role. Each request takes a fresh uniform shuffle of the pool and
walks it one key at a time through ``try_each_credential``; the first success
wins and the remaining keys are never touched.

Example:
    pool = CredentialPool("extraction", "jina", parse_credentials("k1, k2"))
    content = await try_each_credential(
        pool, lambda key: provider.extract(url, key)
    )
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional, TypeVar, Union

import httpx

from reader_api.core.errors import (
    ConfigurationError,
    CredentialsExhaustedError,
    ProviderError,
    RateLimitError,
)
from reader_api.core.redaction import redact_secrets

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors that advance the rotation to the next key
TRANSIENT_ERRORS = (ProviderError, httpx.HTTPError)


def parse_credentials(value: Union[str, Iterable[str], None]) -> tuple[str, ...]:
    """Split a comma-separated key list, trimming entries and dropping blanks.

    Lists (from TOML) are accepted too; each element is trimmed the same way.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(v) for v in value]
    return tuple(k.strip() for k in items if k.strip())


@dataclass(frozen=True)
class CredentialPool:
    """The keys configured for one provider role.

    Attributes:
        role: "extraction" or "summarization"
        provider: Provider the keys belong to
        keys: Keys in configuration order
    """

    role: str
    provider: str
    keys: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.keys)

    def __bool__(self) -> bool:
        return bool(self.keys)

    def __repr__(self) -> str:
        return f"CredentialPool(role={self.role!r}, provider={self.provider!r}, size={len(self.keys)})"

    def require(self) -> "CredentialPool":
        """Return self, or raise ``ConfigurationError`` if the pool is empty."""
        if not self.keys:
            raise ConfigurationError(f"No {self.role} credentials configured for {self.provider}")
        return self

    def shuffled(self, rng: Optional[random.Random] = None) -> list[str]:
        """Return a uniformly random permutation of the keys.

        The pool itself is never reordered.
        """
        order = list(self.keys)
        (rng or _system_random).shuffle(order)
        return order


_system_random = random.SystemRandom()


def describe_failure(error: Exception) -> str:
    """Classify a failed attempt for the rotation log.

    Reports the HTTP status when the provider answered, whether the same key
    could work later, and the Retry-After hint of a rate limit.
    """
    if isinstance(error, RateLimitError):
        if error.retry_after:
            return f"rate limited, retry after {error.retry_after:g}s"
        return "rate limited"
    if isinstance(error, ProviderError):
        kind = "retryable" if error.retryable else "not retryable"
        if error.status_code is not None:
            return f"HTTP {error.status_code}, {kind}"
        return kind
    return "transport error"


async def try_each_credential(
    pool: CredentialPool,
    attempt: Callable[[str], Awaitable[T]],
    *,
    rng: Optional[random.Random] = None,
) -> T:
    """Call *attempt* with each key of a shuffled *pool* until one succeeds.

    Attempts run strictly one after another. A ``ProviderError`` or
    ``httpx.HTTPError`` moves on to the next key; anything else propagates
    unchanged.

    Args:
        pool: The credential pool for this role.
        attempt: Coroutine function performing one call with one key.
        rng: Random source for the shuffle (tests inject a seeded one).

    Returns:
        The result of the first successful attempt.

    Raises:
        ConfigurationError: If the pool is empty. No attempt is made.
        CredentialsExhaustedError: If every key failed.
    """
    pool.require()
    order = pool.shuffled(rng)
    total = len(order)
    last_error: Optional[Exception] = None

    for position, key in enumerate(order, start=1):
        try:
            result = await attempt(key)
        except TRANSIENT_ERRORS as e:
            last_error = e
            logger.warning(
                "%s attempt %d/%d with %s failed (%s): %s",
                pool.role,
                position,
                total,
                pool.provider,
                describe_failure(e),
                redact_secrets(str(e)),
            )
            continue
        if position > 1:
            logger.info(
                "%s succeeded with %s on attempt %d/%d",
                pool.role,
                pool.provider,
                position,
                total,
            )
        else:
            logger.debug("%s succeeded with %s on attempt 1/%d", pool.role, pool.provider, total)
        return result

    raise CredentialsExhaustedError(
        role=pool.role,
        provider=pool.provider,
        attempts=total,
        last_error=last_error,
    )
