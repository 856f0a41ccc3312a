"""Settings loader for process-validator.

Settings are read from a JSON or YAML file. Recognised keys:

- ``collectAllErrors`` (bool, default true): report every violation, or stop
  at the first one.
- ``schema`` (string, optional): path or URL of the schema used when the
  caller does not name one.
- ``logLevel`` (string, default ``INFO``): level for the command-line tool.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError, DocumentSourceError
from .sources import load_document
from .validator import ValidatorOptions

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path("process-validator.json")
SETTINGS_PATH_ENV_VAR = "PROCESS_VALIDATOR_SETTINGS"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    collect_all_errors: bool = True
    schema: str | None = None
    log_level: str = "INFO"

    def validator_options(self) -> ValidatorOptions:
        return ValidatorOptions(collect_all_errors=self.collect_all_errors)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating field types."""
        collect_all_errors = data.get("collectAllErrors", True)
        if not isinstance(collect_all_errors, bool):
            raise ConfigurationError("Invalid 'collectAllErrors' setting (must be boolean)")

        schema = data.get("schema")
        if schema is not None and (not isinstance(schema, str) or not schema):
            raise ConfigurationError("Invalid 'schema' setting (must be a non-empty string)")

        log_level = data.get("logLevel", "INFO")
        if not isinstance(log_level, str) or log_level.upper() not in _LOG_LEVELS:
            known = ", ".join(sorted(_LOG_LEVELS))
            raise ConfigurationError(f"Invalid 'logLevel' setting {log_level!r}. Known levels: {known}")

        return cls(
            collect_all_errors=collect_all_errors,
            schema=schema,
            log_level=log_level.upper(),
        )


def _resolve_settings_path(path: Path | str | None = None) -> tuple[Path, bool]:
    """Resolve the settings file path and whether it was asked for explicitly.

    Priority:
    1. Explicit path argument
    2. PROCESS_VALIDATOR_SETTINGS environment variable
    3. Default path (process-validator.json in the working directory)
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(SETTINGS_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return DEFAULT_SETTINGS_PATH, False


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Raises:
        ConfigurationError: If an explicitly requested file is missing, cannot
            be parsed, or contains invalid values.
    """
    settings_path, explicit = _resolve_settings_path(path)

    if not settings_path.exists():
        if explicit:
            raise ConfigurationError(f"Settings file not found: {settings_path}")
        logger.debug("No settings file at %s; using defaults", settings_path)
        return Settings()

    try:
        data = load_document(settings_path)
    except DocumentSourceError as exc:
        raise ConfigurationError(f"Failed to load settings: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Settings must be a JSON object")

    settings = Settings.from_dict(data)
    logger.debug("Loaded settings from %s", settings_path)
    return settings
