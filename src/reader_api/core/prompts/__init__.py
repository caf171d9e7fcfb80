"""Prompt templates for the summarization step."""

from reader_api.core.prompts.summary import (
    SummaryStyle,
    get_system_prompt,
)

__all__ = ["SummaryStyle", "get_system_prompt"]
