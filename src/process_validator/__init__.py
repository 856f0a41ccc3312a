"""process-validator core package.

Structural validation of configuration values against a JSON-Schema-like
subset, plus a registry of validated process configurations built on top of
it.
"""

from .exceptions import ConfigurationError, DocumentSourceError, ProcessValidatorError
from .models import SchemaNode, SchemaViolation, ValidationResult
from .registry import ProcessRegistry, RegistryResult
from .validator import Validator, ValidatorOptions, validate_against_schema

__all__ = [
    "ConfigurationError",
    "DocumentSourceError",
    "ProcessRegistry",
    "ProcessValidatorError",
    "RegistryResult",
    "SchemaNode",
    "SchemaViolation",
    "ValidationResult",
    "Validator",
    "ValidatorOptions",
    "validate_against_schema",
]
