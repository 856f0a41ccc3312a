"""Human-readable Markdown summary of a validation report."""

from __future__ import annotations

from typing import Any


def _cell(text: Any) -> str:
    return str(text).replace("|", "\\|")


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of violations."""
    totals = report.get("totals", {})
    documents = report.get("documents", [])

    lines = []
    lines.append("# process-validator Summary")
    lines.append("")
    lines.append(
        f"Documents: {totals.get('documents', 0)} | Invalid: {totals.get('invalid', 0)}"
        f" | Errors: {totals.get('errors', 0)}"
    )
    lines.append("")
    lines.append("| Document | Path | Keyword | Message |")
    lines.append("| --- | --- | --- | --- |")

    has_rows = False

    for doc in documents:
        source = doc.get("source") or "(unknown document)"
        errors = doc.get("errors") or []
        if not errors:
            lines.append(f"| {_cell(source)} | n/a | n/a | Valid |")
            has_rows = True
            continue

        for error in errors:
            path = error.get("path") or "(root)"
            lines.append(
                f"| {_cell(source)} | {_cell(path)} | {error.get('keyword', '')} | {_cell(error.get('message', ''))} |"
            )
            has_rows = True

    if not has_rows:
        lines.append("| (no documents validated) | n/a | n/a | n/a |")

    return "\n".join(lines) + "\n"
