"""Request-scoped correlation id.

Each request gets a ULID that every log line of that request carries, so the
credential attempts of one request can be told apart from another's.

Example:
    with request_context() as rid:
        await pipeline.process(url=url)
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from ulid import ULID

# Context variables for request-scoped state
request_id: ContextVar[str] = ContextVar("request_id", default="")

# Client-supplied ids must be short and log-safe
_CLIENT_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,64}")


def new_request_id() -> str:
    """Generate a new correlation id."""
    return f"req_{ULID()}"


def accept_request_id(candidate: Optional[str]) -> str:
    """Return *candidate* if it is a usable correlation id, else a new one.

    Up to 64 letters, digits, dots, underscores, colons or hyphens are
    accepted. Anything else is replaced rather than echoed into logs and
    response headers.
    """
    if candidate and _CLIENT_REQUEST_ID.fullmatch(candidate):
        return candidate
    return new_request_id()


def get_request_id() -> str:
    return request_id.get()


@contextmanager
def request_context(rid: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block."""
    rid = rid or new_request_id()
    token = request_id.set(rid)
    try:
        yield rid
    finally:
        request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamp ``record.request_id`` with the current correlation id ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id.get() or "-"
        return True


__all__ = [
    "request_id",
    "new_request_id",
    "accept_request_id",
    "get_request_id",
    "request_context",
    "RequestIdFilter",
]
