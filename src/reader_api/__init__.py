"""reader-api: fetch a web page through a reader service and summarize it."""

from reader_api.config import _PACKAGE_VERSION as __version__

__all__ = ["__version__"]
