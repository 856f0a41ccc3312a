"""Error record emitted for a single schema violation."""

from __future__ import annotations

from dataclasses import dataclass

KEYWORDS = frozenset(
    {
        "type",
        "enum",
        "required",
        "additionalProperties",
        "minLength",
        "maxLength",
        "pattern",
        "minimum",
        "maximum",
        "exclusiveMinimum",
        "exclusiveMaximum",
        "minItems",
        "maxItems",
        "uniqueItems",
    }
)


@dataclass(frozen=True)
class SchemaViolation:
    """A keyword that failed at a location in the validated data.

    ``path`` uses dot-separated property names and bracketed indices
    (``healthCheck.timeout``, ``tags[2]``); the root is the empty string.
    """

    path: str
    keyword: str
    message: str

    def __post_init__(self) -> None:
        if self.keyword not in KEYWORDS:
            raise ValueError(f"Unknown keyword: {self.keyword}")
        if not self.message:
            raise ValueError("Violation message must be non-empty")

    @property
    def location(self) -> str:
        return f"at {self.path}" if self.path else "at root"

    def format(self) -> str:
        return f"{self.location}: {self.message}"

    def to_dict(self) -> dict[str, str]:
        return {
            "path": self.path,
            "keyword": self.keyword,
            "message": self.message,
        }
