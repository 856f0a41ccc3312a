"""Data models for schema validation."""

from __future__ import annotations

from .result import ValidationResult
from .schema_node import TYPE_NAMES, SchemaNode, parse_schema
from .violation import KEYWORDS, SchemaViolation

__all__ = [
    "KEYWORDS",
    "SchemaNode",
    "SchemaViolation",
    "TYPE_NAMES",
    "ValidationResult",
    "parse_schema",
]
