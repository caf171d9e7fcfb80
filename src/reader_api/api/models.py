"""Request and response bodies for the reader endpoint."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from reader_api.core.errors import InputError
from reader_api.core.reader import MISSING_INPUT_MESSAGE


class ReaderRequest(BaseModel):
    """Body of ``POST /api/reader``. ``url`` wins when both fields are set."""

    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = Field(default=None, description="Page to read; may be raw pasted text")
    text: Optional[str] = Field(default=None, description="Text to summarize directly")

    @classmethod
    def from_body(cls, body: Any) -> "ReaderRequest":
        """Validate a decoded JSON body, raising ``InputError`` when unusable."""
        if not isinstance(body, dict):
            raise InputError(MISSING_INPUT_MESSAGE)
        try:
            request = cls.model_validate(body)
        except ValidationError as e:
            raise InputError(MISSING_INPUT_MESSAGE) from e
        if not (request.url and request.url.strip()) and not (request.text and request.text.strip()):
            raise InputError(MISSING_INPUT_MESSAGE)
        return request


class ReaderResponse(BaseModel):
    summary: str = Field(..., description="Summary, prefixed with a citation line in URL mode")
    content: str = Field(..., description="Full extracted text, never truncated")


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
