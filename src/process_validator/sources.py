"""Loading schemas and data documents from files or URLs.

A source is either an ``http://``/``https://`` URL or a filesystem path.
Documents ending in ``.yaml``/``.yml`` are read as YAML, everything else as
JSON. Schema documents additionally go through the jsonschema meta-schema for
their declared draft so that typos such as ``"minimum": "3"`` are caught when
the schema is loaded rather than silently ignored during validation.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlparse

import requests
import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .exceptions import DocumentSourceError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
USER_AGENT = "process-validator/0.1 (+https://pypi.org/project/process-validator/)"


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _suffix(source: str | Path) -> str:
    if is_url(source):
        return PurePosixPath(urlparse(str(source)).path).suffix.lower()
    return Path(source).suffix.lower()


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=30)


def fetch_document(url: str) -> str:
    """Return the body of ``url`` as text."""

    logger.debug("Fetching %s", url)
    try:
        response = _http_get(url)
    except requests.RequestException as exc:  # pragma: no cover - network failure path
        raise DocumentSourceError(f"Failed to fetch {url}: {exc}") from exc

    if response.status_code != 200:
        raise DocumentSourceError(f"Unexpected status code {response.status_code} fetching {url}")

    return response.text


def read_document(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentSourceError(f"Document not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise DocumentSourceError(f"{path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise DocumentSourceError(f"Failed to read {path}: {exc}") from exc


def parse_document(text: str, source: str | Path) -> Any:
    """Parse ``text`` as YAML or JSON depending on the suffix of ``source``."""
    if _suffix(source) in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DocumentSourceError(f"Invalid YAML in {source}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentSourceError(f"Invalid JSON in {source}: {exc}") from exc


def load_document(source: str | Path) -> Any:
    """Load and parse a document from a URL or a path."""
    text = fetch_document(str(source)) if is_url(source) else read_document(source)
    return parse_document(text, source)


def check_schema(schema: Mapping[str, Any], source: str | Path = "<schema>") -> None:
    """Raise DocumentSourceError when ``schema`` violates its draft's meta-schema."""
    validator_cls = validator_for(schema, default=Draft7Validator)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as exc:
        pointer = "/".join(str(p) for p in exc.path)
        raise DocumentSourceError(
            f"Schema {source} is not a valid JSON schema at {pointer or '<root>'}: {exc.message}"
        ) from exc


def load_schema(source: str | Path, check: bool = True) -> dict[str, Any]:
    """Load a schema document; it must be a JSON object."""
    schema = load_document(source)
    if not isinstance(schema, dict):
        raise DocumentSourceError(f"Schema {source} must be a JSON object")
    if check:
        check_schema(schema, source)
    logger.info("Loaded schema from %s", source)
    return schema
