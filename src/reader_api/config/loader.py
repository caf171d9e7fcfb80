"""ReaderConfig loading logic.

Provides ``_ReaderConfigLoader``, a mixin whose classmethods build a
``ReaderConfig`` (defined in ``server.py``). Values are gathered into a plain
dict, layer by layer, and the frozen config is constructed once at the end.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from reader_api.config.parsing import (
    _normalize_choice,
    _parse_bool,
    _parse_float,
    _parse_int,
)
from reader_api.core.credentials import parse_credentials
from reader_api.core.prompts.summary import SummaryStyle
from reader_api.core.providers.base import ExtractionProviderName, SummaryProviderName

if TYPE_CHECKING:
    from reader_api.config.server import ReaderConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV_VAR = "READER_CONFIG_FILE"
LOG_LEVEL_ENV_VAR = "READER_LOG_LEVEL"
DEFAULT_CONFIG_FILE = "reader.toml"
GENERIC_SUMMARY_KEY_ENV_VAR = "API_KEY"

_EXTRACTION_CHOICES = [p.value for p in ExtractionProviderName]
_SUMMARY_CHOICES = [p.value for p in SummaryProviderName]
_STYLE_CHOICES = [s.value for s in SummaryStyle]

# Extraction provider -> ReaderConfig field holding its pool
_POOL_FIELDS = {
    ExtractionProviderName.JINA: "jina_api_keys",
    ExtractionProviderName.EXA: "exa_api_keys",
    ExtractionProviderName.SCRAPINGBEE: "scrapingbee_api_keys",
}


class _ReaderConfigLoader:
    """Mixin providing config-loading classmethods for ``ReaderConfig``."""

    @classmethod
    def from_env(
        cls,
        config_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ReaderConfig":
        """
        Create configuration from environment variables and an optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config ($READER_CONFIG_FILE, else ./reader.toml)
        3. Default values
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        toml_path = config_file or env.get(CONFIG_FILE_ENV_VAR)
        if toml_path:
            cls._load_toml(Path(toml_path), values)
        else:
            project_config = Path(DEFAULT_CONFIG_FILE)
            if project_config.exists():
                cls._load_toml(project_config, values)
                logger.debug("Loaded project config from %s", project_config)

        cls._load_env(env, values)
        return cls(**values)  # type: ignore[call-arg]

    @staticmethod
    def _load_toml(path: Path, values: Dict[str, Any]) -> None:
        """Load configuration from a TOML file into *values*."""
        if not path.exists():
            logger.warning("Config file not found: %s", path)
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Error loading config file %s: %s", path, e)
            return

        # Extraction settings
        if "extraction" in data:
            ext = data["extraction"]
            if "provider" in ext:
                values["extraction_provider"] = _normalize_choice(
                    ext["provider"], _EXTRACTION_CHOICES, "jina", "extraction provider"
                )
            if "timeout" in ext and (timeout := _parse_float(ext["timeout"], "extraction.timeout")) is not None:
                values["extraction_timeout"] = timeout

        # Credential pools
        if "credentials" in data:
            creds = data["credentials"]
            for provider, field_name in _POOL_FIELDS.items():
                if provider.value in creds:
                    values[field_name] = parse_credentials(creds[provider.value])
            if "summary" in creds:
                values["summary_api_keys"] = parse_credentials(creds["summary"])

        # Summarization settings
        if "summary" in data:
            summ = data["summary"]
            if "provider" in summ:
                values["summary_provider"] = _normalize_choice(
                    summ["provider"], _SUMMARY_CHOICES, "groq", "summary provider"
                )
            if "base_url" in summ:
                values["summary_base_url"] = str(summ["base_url"])
            if "model" in summ:
                values["summary_model"] = str(summ["model"])
            if "style" in summ:
                values["summary_style"] = _normalize_choice(
                    summ["style"], _STYLE_CHOICES, "paragraph", "summary style"
                )
            if "temperature" in summ and (temp := _parse_float(summ["temperature"], "summary.temperature")) is not None:
                values["summary_temperature"] = temp
            if "max_tokens" in summ and (tokens := _parse_int(summ["max_tokens"], "summary.max_tokens")) is not None:
                values["summary_max_tokens"] = tokens
            if "timeout" in summ and (timeout := _parse_float(summ["timeout"], "summary.timeout")) is not None:
                values["summary_timeout"] = timeout

        # Logging settings
        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                values["log_level"] = str(log["level"]).upper()
            if "structured" in log:
                values["structured_logging"] = _parse_bool(log["structured"])

        # Server settings
        if "server" in data:
            srv = data["server"]
            if "host" in srv:
                values["host"] = str(srv["host"])
            if "port" in srv and (port := _parse_int(srv["port"], "server.port")) is not None:
                values["port"] = port

    @staticmethod
    def _load_env(env: Mapping[str, str], values: Dict[str, Any]) -> None:
        """Load configuration from environment variables into *values*."""
        # Extraction provider and pools
        if provider := env.get("PROVIDER"):
            values["extraction_provider"] = _normalize_choice(
                provider, _EXTRACTION_CHOICES, "jina", "PROVIDER"
            )
        for name, field_name in _POOL_FIELDS.items():
            if keys := env.get(name.env_key):
                values[field_name] = parse_credentials(keys)
        if timeout := env.get("EXTRACTION_TIMEOUT"):
            if (parsed := _parse_float(timeout, "EXTRACTION_TIMEOUT")) is not None:
                values["extraction_timeout"] = parsed

        # Summarization provider and pool
        if summary_provider := env.get("SUMMARY_PROVIDER"):
            values["summary_provider"] = _normalize_choice(
                summary_provider, _SUMMARY_CHOICES, "groq", "SUMMARY_PROVIDER"
            )
        summary_name = SummaryProviderName(values.get("summary_provider", "groq"))
        if keys := env.get(summary_name.env_key):
            values["summary_api_keys"] = parse_credentials(keys)
        elif keys := env.get(GENERIC_SUMMARY_KEY_ENV_VAR):
            values["summary_api_keys"] = parse_credentials(keys)

        if base_url := env.get("SUMMARY_BASE_URL"):
            values["summary_base_url"] = base_url.strip()
        if model := env.get("SUMMARY_MODEL"):
            values["summary_model"] = model.strip()
        if style := env.get("SUMMARY_STYLE"):
            values["summary_style"] = _normalize_choice(
                style, _STYLE_CHOICES, "paragraph", "SUMMARY_STYLE"
            )
        if temperature := env.get("SUMMARY_TEMPERATURE"):
            if (parsed := _parse_float(temperature, "SUMMARY_TEMPERATURE")) is not None:
                values["summary_temperature"] = parsed
        if max_tokens := env.get("SUMMARY_MAX_TOKENS"):
            if (parsed_int := _parse_int(max_tokens, "SUMMARY_MAX_TOKENS")) is not None:
                values["summary_max_tokens"] = parsed_int
        if timeout := env.get("SUMMARY_TIMEOUT"):
            if (parsed := _parse_float(timeout, "SUMMARY_TIMEOUT")) is not None:
                values["summary_timeout"] = parsed

        # Logging
        if level := env.get(LOG_LEVEL_ENV_VAR):
            values["log_level"] = level.strip().upper()
        if structured := env.get("READER_STRUCTURED_LOGGING"):
            values["structured_logging"] = _parse_bool(structured)

        # Server
        if host := env.get("READER_HOST"):
            values["host"] = host.strip()
        if port := env.get("READER_PORT"):
            if (parsed_port := _parse_int(port, "READER_PORT")) is not None:
                values["port"] = parsed_port
