"""Schema describing a process configuration entry."""

from __future__ import annotations

import copy
from types import MappingProxyType
from typing import Any

_PROCESS_CONFIG_SCHEMA: dict[str, Any] = {
    "$id": "https://example.com/schemas/process-config",
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Process Configuration",
    "description": "Defines the shape of a process configuration object managed by the registry.",
    "type": "object",
    "required": ["name", "port", "retries"],
    "additionalProperties": False,
    "properties": {
        "name": {
            "type": "string",
            "minLength": 3,
            "maxLength": 50,
            "description": "Human-friendly process identifier.",
        },
        "port": {
            "type": "number",
            "minimum": 1024,
            "maximum": 65535,
            "description": "TCP port exposed by the process.",
        },
        "retries": {
            "type": "integer",
            "minimum": 0,
            "maximum": 10,
            "description": "Number of restart attempts before failing the process.",
        },
        "tags": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "uniqueItems": True,
            "minItems": 1,
            "description": "Optional labels that describe the process.",
        },
        "healthCheck": {
            "type": "object",
            "required": ["interval", "timeout"],
            "additionalProperties": False,
            "properties": {
                "interval": {
                    "type": "integer",
                    "minimum": 5,
                    "maximum": 300,
                    "description": "Seconds between health checks.",
                },
                "timeout": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 60,
                    "description": "Seconds before a health check is considered failed.",
                },
                "strategy": {
                    "type": "string",
                    "enum": ["http", "tcp", "custom"],
                    "description": "Mechanism for probing the service health.",
                },
            },
            "description": "Optional health check configuration.",
        },
    },
}

# Read-only view; nested containers are shared, so hand out copies to callers
# that want to modify the schema.
PROCESS_CONFIG_SCHEMA = MappingProxyType(_PROCESS_CONFIG_SCHEMA)


def process_config_schema() -> dict[str, Any]:
    """Return a fresh, mutable copy of the process configuration schema."""
    return copy.deepcopy(_PROCESS_CONFIG_SCHEMA)
