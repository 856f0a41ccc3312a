"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any


def aggregate(documents: list[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate per-document results into a single report.

    Each entry of ``documents`` is a dict with a ``source`` key plus the keys
    of ``ValidationResult.to_dict()`` (``valid``, ``errors``,
    ``errorSummary``). Totals and the top-level ``valid`` flag are computed;
    documents are passed through in order.
    """

    total_documents = len(documents)
    invalid = sum(1 for d in documents if not d.get("valid", False))
    total_errors = sum(len(d.get("errors", [])) for d in documents)

    report: dict[str, Any] = {
        "version": "1",
        "valid": invalid == 0,
        "documents": documents,
        "totals": {
            "documents": total_documents,
            "invalid": invalid,
            "errors": total_errors,
        },
    }

    return report
