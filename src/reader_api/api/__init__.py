"""HTTP surface for reader-api."""

from reader_api.api.app import create_app

__all__ = ["create_app"]
