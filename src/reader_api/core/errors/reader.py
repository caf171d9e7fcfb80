"""Request-level error classes for the reader pipeline."""

from __future__ import annotations

from typing import Optional


class ReaderError(Exception):
    """Base exception for errors surfaced to the caller.

    Attributes:
        message: Human-readable error description
        status_code: HTTP status analog used by the API layer
        error_code: Stable machine-readable code
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InputError(ReaderError):
    """Missing or malformed client input. Never retried."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class ConfigurationError(ReaderError):
    """A required credential pool is empty. No network call is attempted."""

    status_code = 500
    error_code = "CONFIGURATION_ERROR"


class CredentialsExhaustedError(ReaderError):
    """Every credential in a pool failed.

    Attributes:
        role: "extraction" or "summarization"
        provider: Provider the pool belongs to
        attempts: Number of credentials tried
        last_error: The error raised by the final attempt
    """

    status_code = 500
    error_code = "PROVIDER_EXHAUSTED"

    def __init__(
        self,
        role: str,
        provider: str,
        attempts: int,
        last_error: Optional[Exception] = None,
    ):
        self.role = role
        self.provider = provider
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"All {attempts} {role} credential(s) for {provider} failed"
            + (f": {last_error}" if last_error else "")
        )

    @property
    def last_error_message(self) -> str:
        """Text of the final attempt's error, or a generic note when absent."""
        if self.last_error is None:
            return "no attempt was made"
        return str(self.last_error)
