"""
Summarization system prompts.

Every style shares the same ground rules: answer only from the supplied
content and always respond in English. Styles differ only in the output
format they ask for:

- ``paragraph``: one concise paragraph
- ``structured``: Markdown with a short heading and bullet points
"""

from __future__ import annotations

from enum import Enum


class SummaryStyle(str, Enum):
    """Output format requested from the summarization model."""

    PARAGRAPH = "paragraph"
    STRUCTURED = "structured"


# =============================================================================
# System Prompts
# =============================================================================

_GROUND_RULES = """You summarize web pages and documents for a reader.

Rules:
- Use ONLY the content supplied by the user. Do not add facts, context or opinions that are not in it.
- Always respond in English, whatever the language of the content.
- If the content is empty, an error page, or has no substantive text, say so in one sentence."""

_FORMATS = {
    SummaryStyle.PARAGRAPH: """
Format:
Write exactly one concise paragraph that captures the main point and the most important supporting details. No headings, no lists.""",
    SummaryStyle.STRUCTURED: """
Format:
Respond in Markdown:
- A one-line **bold** title describing the content
- 3 to 7 bullet points with the key facts, in the order they appear
- A final line starting with **Takeaway:** summarizing the main point""",
}


def get_system_prompt(style: SummaryStyle = SummaryStyle.PARAGRAPH) -> str:
    """Return the system prompt for *style*."""
    return _GROUND_RULES + "\n" + _FORMATS[SummaryStyle(style)]
