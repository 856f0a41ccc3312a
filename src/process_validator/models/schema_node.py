"""Parsed, immutable form of a schema document.

A raw schema is a nested mapping in the JSON Schema style. ``parse_schema``
turns it into a tree of ``SchemaNode`` objects once, at Validator
construction, so the validation walk only has to look at which optional
fields are set. Keys outside the supported keyword set (``$id``, ``title``,
``description``, ...) are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..exceptions import ConfigurationError

TYPE_NAMES = ("object", "string", "number", "integer", "array", "boolean", "null")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number(raw: Mapping[str, Any], key: str) -> int | float | None:
    value = raw.get(key)
    return value if _is_number(value) else None


def _types(value: Any, location: str) -> tuple[str, ...] | None:
    if isinstance(value, str):
        names = (value,) if value else ()
    elif isinstance(value, (list, tuple)):
        names = tuple(dict.fromkeys(name for name in value if isinstance(name, str) and name))
    else:
        return None

    unknown = [name for name in names if name not in TYPE_NAMES]
    if unknown:
        raise ConfigurationError(
            f"Unknown type {', '.join(unknown)} at {location or 'schema root'}."
            f" Known types: {', '.join(TYPE_NAMES)}"
        )
    return names or None


def _compile(pattern: Any, location: str) -> re.Pattern[str] | None:
    if not isinstance(pattern, str) or not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigurationError(
            f"Invalid pattern {pattern!r} at {location or 'schema root'}: {exc}"
        ) from exc


@dataclass(frozen=True)
class SchemaNode:
    """One level of a schema; every keyword is optional."""

    types: tuple[str, ...] | None = None
    enum: tuple[Any, ...] | None = None
    required: tuple[str, ...] = ()
    properties: Mapping[str, SchemaNode | None] | None = None
    additional_properties: bool = True
    items: SchemaNode | None = None
    min_length: int | float | None = None
    max_length: int | float | None = None
    pattern: re.Pattern[str] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: int | float | None = None
    exclusive_maximum: int | float | None = None
    min_items: int | float | None = None
    max_items: int | float | None = None
    unique_items: bool = False

    @property
    def accepts_integer_only(self) -> bool:
        return self.types is not None and "integer" in self.types

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], location: str = "") -> SchemaNode:
        """Build a node from a raw schema mapping, recursing into children."""
        enum = raw.get("enum")
        required = raw.get("required")

        properties: Mapping[str, SchemaNode | None] | None = None
        raw_properties = raw.get("properties")
        if isinstance(raw_properties, Mapping):
            properties = MappingProxyType(
                {
                    str(key): parse_schema(child, f"{location}/properties/{key}")
                    for key, child in raw_properties.items()
                }
            )

        return cls(
            types=_types(raw.get("type"), location),
            enum=tuple(enum) if isinstance(enum, (list, tuple)) else None,
            required=tuple(str(name) for name in required) if isinstance(required, (list, tuple)) else (),
            properties=properties,
            additional_properties=raw.get("additionalProperties") is not False,
            items=parse_schema(raw.get("items"), f"{location}/items"),
            min_length=_number(raw, "minLength"),
            max_length=_number(raw, "maxLength"),
            pattern=_compile(raw.get("pattern"), location),
            minimum=_number(raw, "minimum"),
            maximum=_number(raw, "maximum"),
            exclusive_minimum=_number(raw, "exclusiveMinimum"),
            exclusive_maximum=_number(raw, "exclusiveMaximum"),
            min_items=_number(raw, "minItems"),
            max_items=_number(raw, "maxItems"),
            unique_items=bool(raw.get("uniqueItems")),
        )


def parse_schema(raw: Any, location: str = "") -> SchemaNode | None:
    """Return the parsed node, or None when ``raw`` imposes no constraint."""
    if not isinstance(raw, Mapping):
        return None
    return SchemaNode.from_dict(raw, location)
