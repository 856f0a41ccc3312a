"""Name-keyed store of validated process configurations.

Every register/update runs the candidate through the schema validator first;
the registry then applies its own rules (unique names, updates only for known
names, names fixed for the life of an entry). Stored entries are deep copies
so callers can never mutate registry state through a returned value.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from collections.abc import Iterator, Mapping
from typing import Any

from .models import ValidationResult
from .schemas import PROCESS_CONFIG_SCHEMA
from .validator import Validator, ValidatorOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryResult:
    """Outcome of a register/update call."""

    ok: bool
    config: dict[str, Any] | None = None
    errors: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.ok and self.errors:
            raise ValueError("A successful result carries no errors")
        if not self.ok and not self.errors:
            raise ValueError("A rejected result must explain why")

    def to_dict(self) -> dict[str, object]:
        if self.ok:
            return {"ok": True, "config": self.config}
        return {"ok": False, "errors": list(self.errors)}

    @classmethod
    def rejected(cls, *errors: str) -> RegistryResult:
        return cls(ok=False, errors=tuple(errors))


def _rejection_reasons(result: ValidationResult) -> tuple[str, ...]:
    if result.error_summary:
        return result.error_summary
    return tuple(error.format() for error in result.errors)


class ProcessRegistry:
    """In-memory registry; not safe for concurrent mutation."""

    def __init__(
        self,
        schema: Mapping[str, Any] = PROCESS_CONFIG_SCHEMA,
        validator_options: ValidatorOptions | Mapping[str, Any] | None = None,
    ) -> None:
        self.schema = schema
        self.validator = Validator(schema, validator_options)
        self._entries: dict[str, dict[str, Any]] = {}

    def register(self, config: Mapping[str, Any]) -> RegistryResult:
        validation = self.validator.validate(config)
        if not validation.valid:
            logger.warning("Rejected process configuration: %d validation error(s)", len(validation.errors))
            return RegistryResult.rejected(*_rejection_reasons(validation))

        name = config.get("name") if isinstance(config, Mapping) else None
        if not isinstance(name, str) or not name:
            logger.warning("Rejected process configuration without a name")
            return RegistryResult.rejected("Process configuration must include a name")

        if name in self._entries:
            logger.warning("Rejected duplicate process '%s'", name)
            return RegistryResult.rejected(f"Process '{name}' is already registered")

        self._entries[name] = copy.deepcopy(dict(config))
        logger.info("Registered process '%s'", name)
        return RegistryResult(ok=True, config=self.get(name))

    def update(self, name: str, updates: Mapping[str, Any]) -> RegistryResult:
        if name not in self._entries:
            logger.warning("Cannot update unknown process '%s'", name)
            return RegistryResult.rejected(f"Process '{name}' is not registered")

        updated = {**self._entries[name], **copy.deepcopy(dict(updates))}
        if updated.get("name") != name:
            logger.warning("Rejected rename of process '%s'", name)
            return RegistryResult.rejected("Process name cannot be changed during update")

        validation = self.validator.validate(updated)
        if not validation.valid:
            logger.warning(
                "Rejected update of process '%s': %d validation error(s)", name, len(validation.errors)
            )
            return RegistryResult.rejected(*_rejection_reasons(validation))

        self._entries[name] = copy.deepcopy(updated)
        logger.info("Updated process '%s'", name)
        return RegistryResult(ok=True, config=self.get(name))

    def unregister(self, name: str) -> bool:
        removed = self._entries.pop(name, None) is not None
        if removed:
            logger.info("Unregistered process '%s'", name)
        return removed

    def has(self, name: str) -> bool:
        return name in self._entries

    def get(self, name: str) -> dict[str, Any] | None:
        config = self._entries.get(name)
        return copy.deepcopy(config) if config is not None else None

    def list(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(entry) for entry in self._entries.values()]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
