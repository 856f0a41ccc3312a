"""Validate JSON or YAML documents against a schema from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from .core import validate_documents
from .exceptions import ConfigurationError
from .settings import load_settings
from .summary import render_summary

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="process-validator", description=__doc__)
    parser.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Path or URL of a document to validate",
    )
    parser.add_argument(
        "--schema",
        default=None,
        help="Path or URL of the JSON schema (default: built-in process configuration schema)",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Path to a settings file (default: $PROCESS_VALIDATOR_SETTINGS or process-validator.json)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first violation instead of reporting all of them",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json", "markdown"),
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        default=None,
        help="Override the configured log level",
    )
    return parser.parse_args(argv)


def _render_text(report: dict[str, Any]) -> str:
    lines = []
    for doc in report.get("documents", []):
        if doc.get("valid"):
            lines.append(f"{doc['source']}: valid")
            continue
        lines.append(f"{doc['source']}: invalid")
        for line in doc.get("errorSummary") or []:
            lines.append(f"  - {line}")
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings(args.settings)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="[%(asctime)s] %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        report = validate_documents(
            args.inputs,
            schema_source=args.schema,
            collect_all_errors=False if args.fail_fast else None,
            settings=settings,
        )
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.format == "json":
        sys.stdout.write(json.dumps(report, indent=2) + "\n")
    elif args.format == "markdown":
        sys.stdout.write(render_summary(report))
    else:
        sys.stdout.write(_render_text(report))

    return EXIT_VALID if report["valid"] else EXIT_INVALID


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
