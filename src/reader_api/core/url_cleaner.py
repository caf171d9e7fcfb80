"""Normalization of pasted URL text.

Pasted URLs arrive wrapped across lines, with spaces injected by the copy,
with a leading ``URL:`` label, or with their tracking parameters on a line of
their own. ``normalize`` repairs those into one clean URL per line.

This is a line heuristic, not a URL parser: any line containing ``=`` is
treated as a continuation of the previous URL.
"""

from __future__ import annotations

import re

_LABEL_PREFIX = re.compile(r"^URL:\s*", re.IGNORECASE)
_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_TRAILING_GARBAGE = re.compile(r"[#•*]+$")

FRAGMENT_START_CHARS = frozenset("/?&=#_%")
TRACKING_PREFIXES = ("utm", "gad", "gclid", "wbraid")


def _strip_whitespace(text: str) -> str:
    return _WHITESPACE.sub("", text)


def is_continuation_fragment(line: str) -> bool:
    """Whether *line* continues the previous URL rather than starting one."""
    if not line:
        return False
    return (
        line[0] in FRAGMENT_START_CHARS
        or line.lower().startswith(TRACKING_PREFIXES)
        or "=" in line
    )


def _polish(candidate: str) -> str:
    candidate = _TRAILING_GARBAGE.sub("", candidate)
    if not _SCHEME.match(candidate):
        candidate = "https://" + candidate
    return candidate


def normalize(raw: str) -> str:
    """Turn raw pasted text into newline-separated clean URLs.

    Returns an empty string when no line looks like a URL.

    >>> normalize("URL: example.com")
    'https://example.com'
    >>> normalize("example.com\\n?utm_source=foo")
    'https://example.com?utm_source=foo'
    """
    if not raw:
        return ""

    accepted: list[str] = []
    for line in raw.splitlines():
        line = line.strip()
        if not line:
            continue

        line = _LABEL_PREFIX.sub("", line).strip()
        if _SCHEME.match(line):
            line = _strip_whitespace(line)

        if is_continuation_fragment(line):
            line = _strip_whitespace(line)
            if accepted:
                accepted[-1] += line
                continue

        if line and "." in line and not _WHITESPACE.search(line):
            accepted.append(line)

    return "\n".join(_polish(candidate) for candidate in accepted)


def resolve_target_url(raw: str) -> str:
    """Pick the URL to fetch for *raw* request input.

    Only the first normalized URL is ever fetched. Input with no URL-shaped
    line gives an empty string, which callers reject as missing input.
    """
    cleaned = normalize(raw)
    return cleaned.split("\n", 1)[0] if cleaned else ""
