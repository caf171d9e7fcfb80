"""Parsing and normalization helpers for configuration values.

Provides boolean parsing, numeric parsing that tolerates bad input, and
choice normalization with a logged fallback.
"""

import logging
from typing import Any, Iterable, Optional

logger = logging.getLogger(__name__)


def _normalize_choice(value: Any, valid: Iterable[str], default: str, label: str) -> str:
    """Lower-case *value* and check it against *valid*, falling back to *default*."""
    valid = set(valid)
    normalized = str(value).strip().lower()
    if normalized not in valid:
        logger.warning(
            "Invalid %s '%s'. Falling back to '%s'. Valid options: %s",
            label,
            value,
            default,
            ", ".join(sorted(valid)),
        )
        return default
    return normalized


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _parse_float(value: Any, label: str) -> Optional[float]:
    """Parse a positive-or-zero float, or warn and return None."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s value: %r", label, value)
        return None
    if parsed < 0:
        logger.warning("Ignoring negative %s value: %r", label, value)
        return None
    return parsed


def _parse_int(value: Any, label: str) -> Optional[int]:
    """Parse a positive int, or warn and return None."""
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s value: %r", label, value)
        return None
    if parsed <= 0:
        logger.warning("Ignoring non-positive %s value: %r", label, value)
        return None
    return parsed
