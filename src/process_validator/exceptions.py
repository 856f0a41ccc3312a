"""Exceptions raised by process-validator.

Data that does not conform to a schema is never an exception; it is reported
through ``ValidationResult``. These classes cover programmer and environment
errors only.
"""

from __future__ import annotations


class ProcessValidatorError(Exception):
    """Base exception for process-validator errors."""


class ConfigurationError(ProcessValidatorError):
    """Raised for an unusable schema or invalid settings."""


class DocumentSourceError(ConfigurationError):
    """Raised when a schema or data document cannot be loaded."""
