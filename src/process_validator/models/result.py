"""Outcome of validating one data value."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable

from .violation import SchemaViolation


@dataclass(frozen=True)
class ValidationResult:
    """Aggregate verdict for a single ``Validator.validate`` call."""

    valid: bool
    errors: tuple[SchemaViolation, ...]
    error_summary: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.valid != (not self.errors):
            raise ValueError("valid must be True exactly when there are no errors")
        if self.valid and self.error_summary is not None:
            raise ValueError("A valid result carries no error summary")
        if not self.valid and self.error_summary is None:
            raise ValueError("An invalid result requires an error summary")

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "errors": [error.to_dict() for error in self.errors],
            "errorSummary": list(self.error_summary) if self.error_summary is not None else None,
        }

    @classmethod
    def from_errors(cls, errors: Iterable[SchemaViolation]) -> ValidationResult:
        collected = tuple(errors)
        if not collected:
            return cls(valid=True, errors=())
        return cls(
            valid=False,
            errors=collected,
            error_summary=tuple(error.format() for error in collected),
        )
