"""Unified error hierarchy for reader-api.

Usage:
    from reader_api.core.errors import ProviderError, CredentialsExhaustedError
    from reader_api.core.errors import error_to_status
"""

from reader_api.core.errors.base import error_to_status
from reader_api.core.errors.provider import (
    AuthenticationError,
    EmptyContentError,
    ProviderError,
    RateLimitError,
)
from reader_api.core.errors.reader import (
    ConfigurationError,
    CredentialsExhaustedError,
    InputError,
    ReaderError,
)

__all__ = [
    "error_to_status",
    # Provider errors
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "EmptyContentError",
    # Request-level errors
    "ReaderError",
    "InputError",
    "ConfigurationError",
    "CredentialsExhaustedError",
]
