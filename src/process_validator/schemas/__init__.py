"""Built-in schemas."""

from __future__ import annotations

from .process_config import PROCESS_CONFIG_SCHEMA, process_config_schema

__all__ = [
    "PROCESS_CONFIG_SCHEMA",
    "process_config_schema",
]
