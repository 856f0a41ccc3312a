"""Batch validation entrypoint.

This module MUST NOT depend on the command-line layer so it can be driven by
the CLI, by tests, and by other tools alike.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .report import aggregate
from .schemas import PROCESS_CONFIG_SCHEMA
from .settings import Settings, load_settings
from .sources import load_document, load_schema
from .validator import Validator, ValidatorOptions

logger = logging.getLogger(__name__)


def resolve_schema(
    schema_source: str | Path | None,
    settings: Settings,
) -> Mapping[str, Any]:
    """Pick the schema: explicit source, then settings, then the built-in one."""
    source = schema_source if schema_source is not None else settings.schema
    if source is None:
        logger.debug("Using built-in process configuration schema")
        return PROCESS_CONFIG_SCHEMA
    return load_schema(source)


def validate_documents(
    sources: Iterable[str | Path],
    schema_source: str | Path | None = None,
    collect_all_errors: bool | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Validate every document in ``sources`` against one schema.

    Params:
        sources: paths or URLs of JSON/YAML documents
        schema_source: optional path or URL of the schema; when None, the
            settings' schema or the built-in process configuration schema
        collect_all_errors: overrides the settings' collection policy
        settings: pre-loaded settings; loaded from the environment when None

    Returns: aggregated report (see ``report.aggregate``)

    Raises:
        ConfigurationError: when the schema, settings or a document cannot be
            loaded.
    """
    if settings is None:
        settings = load_settings()

    options = settings.validator_options()
    if collect_all_errors is not None:
        options = ValidatorOptions(collect_all_errors=collect_all_errors)

    validator = Validator(resolve_schema(schema_source, settings), options)

    documents: list[dict[str, Any]] = []
    for source in sources:
        data = load_document(source)
        result = validator.validate(data)
        if result.valid:
            logger.info("%s is valid", source)
        else:
            logger.info("%s has %d validation error(s)", source, len(result.errors))
        documents.append({"source": str(source), **result.to_dict()})

    return aggregate(documents)
