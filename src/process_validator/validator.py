"""Structural validator for JSON-Schema-like documents.

Supports the subset of draft-07 keywords used to describe configuration
objects: ``type``, ``enum``, ``required``, ``properties``,
``additionalProperties``, ``items``, the string keywords ``minLength``,
``maxLength`` and ``pattern``, the numeric bounds ``minimum``, ``maximum``,
``exclusiveMinimum`` and ``exclusiveMaximum``, and the array keywords
``minItems``, ``maxItems`` and ``uniqueItems``.

Every violation is reported with a path into the data (``tags[1]``,
``healthCheck.timeout``) and a human-friendly message. Validation never raises
for non-conforming data.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any

from .exceptions import ConfigurationError
from .models import SchemaNode, SchemaViolation, ValidationResult, parse_schema

logger = logging.getLogger(__name__)


class Flow(enum.Enum):
    """Outcome of a check site that can end a first-failure walk.

    ``STOP`` tells the caller to abandon its own loop and return ``STOP`` in
    turn. Keyword checks that never short-circuit (enum, string, number)
    return nothing.
    """

    CONTINUE = "continue"
    STOP = "stop"


@dataclass(frozen=True)
class ValidatorOptions:
    """Collection policy for a Validator.

    With ``collect_all_errors`` off, the walk stops at the first failing check
    and only the errors gathered up to that point are returned.
    """

    collect_all_errors: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ValidatorOptions:
        """Accept both ``collect_all_errors`` and the camelCase ``collectAllErrors``."""
        value = data.get("collect_all_errors", data.get("collectAllErrors", True))
        return cls(collect_all_errors=value is not False)


def kind_of(value: Any) -> str:
    """Return the JSON kind of ``value`` (``object``, ``array``, ``number``, ...)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def is_integral(value: Any) -> bool:
    if kind_of(value) != "number":
        return False
    return isinstance(value, int) or value.is_integer()


def matches_type(expected: str, value: Any) -> bool:
    if expected == "integer":
        return is_integral(value)
    return kind_of(value) == expected


def canonical(value: Any) -> Any:
    """Hashable structural form: equal JSON values map to equal keys."""
    kind = kind_of(value)
    if kind == "object":
        pairs = ((str(key), canonical(item)) for key, item in value.items())
        return (kind, tuple(sorted(pairs, key=lambda pair: pair[0])))
    if kind == "array":
        return (kind, tuple(canonical(item) for item in value))
    if kind == "number":
        # 1 and 1.0 are the same JSON number
        return (kind, int(value) if is_integral(value) else value)
    if kind in {"string", "boolean", "null"}:
        return (kind, value)
    return (kind, repr(value))


def _literal(value: Any) -> str:
    return json.dumps(value, default=str)


def _bound(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _child_path(base: str, key: str | int) -> str:
    if isinstance(key, int):
        return f"{base}[{key}]"
    return f"{base}.{key}" if base else str(key)


class Validator:
    """Validate data values against one schema.

    The schema is parsed once; each ``validate`` call works on its own error
    list, so an instance can be reused (and shared between threads) freely.
    """

    def __init__(
        self,
        schema: Mapping[str, Any] | None,
        options: ValidatorOptions | Mapping[str, Any] | None = None,
    ) -> None:
        if not isinstance(schema, Mapping):
            raise ConfigurationError("A JSON schema object is required")

        if options is None:
            options = ValidatorOptions()
        elif isinstance(options, Mapping):
            options = ValidatorOptions.from_mapping(options)

        self.schema = schema
        self.options = options
        self.root: SchemaNode | None = parse_schema(schema)

    @property
    def collect_all_errors(self) -> bool:
        return self.options.collect_all_errors

    def validate(self, data: Any) -> ValidationResult:
        errors: list[SchemaViolation] = []
        flow = self._check(self.root, data, "", errors)
        if flow is Flow.STOP:
            logger.debug("Validation stopped at the first failure (%d error(s))", len(errors))
        else:
            logger.debug("Validation finished with %d error(s)", len(errors))
        return ValidationResult.from_errors(errors)

    def _halt(self, errors: list[SchemaViolation]) -> bool:
        return not self.collect_all_errors and bool(errors)

    def _check(
        self,
        node: SchemaNode | None,
        value: Any,
        path: str,
        errors: list[SchemaViolation],
    ) -> Flow:
        if node is None:
            return Flow.CONTINUE

        if node.types is not None and not any(matches_type(name, value) for name in node.types):
            errors.append(
                SchemaViolation(
                    path,
                    "type",
                    f"Expected type {' or '.join(node.types)}, but received {kind_of(value)}",
                )
            )
            if not self.collect_all_errors:
                return Flow.STOP

        if node.enum is not None:
            self._check_enum(node.enum, value, path, errors)

        kind = self._effective_kind(node, value)
        if kind == "object":
            return self._check_object(node, value, path, errors)
        if kind == "string":
            self._check_string(node, value, path, errors)
        elif kind in {"number", "integer"}:
            self._check_number(node, value, path, errors)
        elif kind == "array":
            return self._check_array(node, value, path, errors)
        return Flow.CONTINUE

    def _effective_kind(self, node: SchemaNode, value: Any) -> str:
        if node.types is None:
            return kind_of(value)
        for name in node.types:
            if matches_type(name, value):
                return name
        # Fall back to the declared shape so its keyword checks still apply.
        return node.types[0]

    def _check_enum(
        self,
        members: tuple[Any, ...],
        value: Any,
        path: str,
        errors: list[SchemaViolation],
    ) -> None:
        key = canonical(value)
        if any(canonical(member) == key for member in members):
            return
        errors.append(
            SchemaViolation(
                path,
                "enum",
                f"Value must be one of: {', '.join(_literal(member) for member in members)}",
            )
        )

    def _check_object(
        self,
        node: SchemaNode,
        value: Any,
        path: str,
        errors: list[SchemaViolation],
    ) -> Flow:
        if kind_of(value) != "object":
            return Flow.CONTINUE

        for name in node.required:
            if name not in value:
                errors.append(
                    SchemaViolation(
                        _child_path(path, name),
                        "required",
                        f"Missing required property '{name}'",
                    )
                )
                if not self.collect_all_errors:
                    return Flow.STOP

        if node.properties is not None:
            for name, child in node.properties.items():
                if name not in value:
                    continue
                flow = self._check(child, value[name], _child_path(path, name), errors)
                if flow is Flow.STOP or self._halt(errors):
                    return Flow.STOP

        if not node.additional_properties and node.properties is not None:
            for key in value:
                if str(key) in node.properties:
                    continue
                errors.append(
                    SchemaViolation(
                        _child_path(path, str(key)),
                        "additionalProperties",
                        f"Unexpected property '{key}' is not allowed",
                    )
                )
                if not self.collect_all_errors:
                    return Flow.STOP

        return Flow.CONTINUE

    def _check_string(
        self,
        node: SchemaNode,
        value: Any,
        path: str,
        errors: list[SchemaViolation],
    ) -> None:
        if not isinstance(value, str):
            return

        if node.min_length is not None and len(value) < node.min_length:
            errors.append(
                SchemaViolation(
                    path,
                    "minLength",
                    f"String is too short. Minimum length is {_bound(node.min_length)}",
                )
            )
        if node.max_length is not None and len(value) > node.max_length:
            errors.append(
                SchemaViolation(
                    path,
                    "maxLength",
                    f"String is too long. Maximum length is {_bound(node.max_length)}",
                )
            )
        if node.pattern is not None and node.pattern.search(value) is None:
            errors.append(
                SchemaViolation(
                    path,
                    "pattern",
                    f"String does not match required pattern {node.pattern.pattern}",
                )
            )

    def _check_number(
        self,
        node: SchemaNode,
        value: Any,
        path: str,
        errors: list[SchemaViolation],
    ) -> None:
        if kind_of(value) != "number":
            return

        if node.accepts_integer_only and not is_integral(value):
            errors.append(SchemaViolation(path, "type", "Value must be an integer"))

        if node.minimum is not None and value < node.minimum:
            errors.append(
                SchemaViolation(
                    path,
                    "minimum",
                    f"Value must be greater than or equal to {_bound(node.minimum)}",
                )
            )
        if node.maximum is not None and value > node.maximum:
            errors.append(
                SchemaViolation(
                    path,
                    "maximum",
                    f"Value must be less than or equal to {_bound(node.maximum)}",
                )
            )
        if node.exclusive_minimum is not None and value <= node.exclusive_minimum:
            errors.append(
                SchemaViolation(
                    path,
                    "exclusiveMinimum",
                    f"Value must be greater than {_bound(node.exclusive_minimum)}",
                )
            )
        if node.exclusive_maximum is not None and value >= node.exclusive_maximum:
            errors.append(
                SchemaViolation(
                    path,
                    "exclusiveMaximum",
                    f"Value must be less than {_bound(node.exclusive_maximum)}",
                )
            )

    def _check_array(
        self,
        node: SchemaNode,
        value: Any,
        path: str,
        errors: list[SchemaViolation],
    ) -> Flow:
        if kind_of(value) != "array":
            return Flow.CONTINUE

        if node.min_items is not None and len(value) < node.min_items:
            errors.append(
                SchemaViolation(
                    path,
                    "minItems",
                    f"Array must contain at least {_bound(node.min_items)} item(s)",
                )
            )
        if node.max_items is not None and len(value) > node.max_items:
            errors.append(
                SchemaViolation(
                    path,
                    "maxItems",
                    f"Array must contain no more than {_bound(node.max_items)} item(s)",
                )
            )

        if node.unique_items:
            seen: set[Any] = set()
            for index, item in enumerate(value):
                key = canonical(item)
                if key in seen:
                    errors.append(
                        SchemaViolation(
                            _child_path(path, index),
                            "uniqueItems",
                            "Array items must be unique",
                        )
                    )
                    if not self.collect_all_errors:
                        return Flow.STOP
                else:
                    seen.add(key)

        flow = Flow.CONTINUE
        if node.items is not None:
            # Every element is checked under either policy; a stop inside one
            # is still reported to the parent.
            for index, item in enumerate(value):
                if self._check(node.items, item, _child_path(path, index), errors) is Flow.STOP:
                    flow = Flow.STOP

        return flow


def validate_against_schema(
    schema: Mapping[str, Any],
    data: Any,
    options: ValidatorOptions | Mapping[str, Any] | None = None,
) -> ValidationResult:
    """One-shot helper: build a Validator for ``schema`` and validate ``data``."""
    return Validator(schema, options).validate(data)
