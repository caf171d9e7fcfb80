"""Configuration package for reader-api.

Sub-modules:
    parsing – boolean, numeric and choice parsing helpers
    loader  – ReaderConfig loading mixin (_ReaderConfigLoader)
    server  – ReaderConfig dataclass, get_config/set_config globals
"""

from reader_api.config.server import (  # noqa: F401
    _PACKAGE_VERSION,
    ReaderConfig,
    get_config,
    set_config,
)

__all__ = ["ReaderConfig", "get_config", "set_config"]
