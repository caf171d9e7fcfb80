"""JSON output helpers for CLI commands.

Every command that returns data prints one JSON envelope on stdout:
``{"success": true, "data": {...}, "error": null, "meta": {...}}``.
Errors use the same shape with ``success: false`` and exit with status 1.
"""

import json
import sys
from typing import Any, Mapping, NoReturn, Optional

import click

from reader_api.config import _PACKAGE_VERSION
from reader_api.core.context import get_request_id


def _meta() -> dict:
    meta = {"version": _PACKAGE_VERSION}
    if rid := get_request_id():
        meta["request_id"] = rid
    return meta


def emit_success(data: Mapping[str, Any]) -> None:
    """Print a success envelope."""
    click.echo(
        json.dumps(
            {"success": True, "data": dict(data), "error": None, "meta": _meta()},
            ensure_ascii=False,
        )
    )


def emit_error(
    message: str,
    *,
    code: str,
    details: Optional[Mapping[str, Any]] = None,
) -> NoReturn:
    """Print an error envelope and exit with status 1."""
    data: dict = {"error_code": code}
    if details:
        data["details"] = dict(details)
    click.echo(
        json.dumps(
            {"success": False, "data": data, "error": message, "meta": _meta()},
            ensure_ascii=False,
        )
    )
    sys.exit(1)
