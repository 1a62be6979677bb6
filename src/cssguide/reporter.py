"""Render batch results as text or JSON."""

from __future__ import annotations

import json
from typing import Sequence

from cssguide.batch import DocumentResult
from cssguide.model.diagnostic import Severity, Violation

GROUPS = ("none", "rule")


def summarize(results: Sequence[DocumentResult]) -> dict[str, int]:
    """Violation counts per severity, plus files processed and failed."""
    summary = {s.value.lower(): sum(r.count(s) for r in results) for s in Severity}
    summary["files"] = len(results)
    summary["failed"] = sum(1 for r in results if r.failed)
    return summary


def _summary_line(summary: dict[str, int]) -> str:
    line = (
        f"Summary: {summary['error']} error(s), {summary['warning']} warning(s), "
        f"{summary['info']} info in {summary['files']} file(s)"
    )
    if summary["failed"]:
        line += f", {summary['failed']} file(s) could not be processed"
    return line


def render_text(results: Sequence[DocumentResult], *, group: str = "none") -> str:
    """One line per violation (``path:line:col: SEVERITY rule: message``), or grouped by rule."""
    lines: list[str] = []
    for result in results:
        if result.error is not None:
            lines.append(f"{result.path}: ERROR {result.error}")

    if group == "rule":
        by_rule: dict[str, list[tuple[str, Violation]]] = {}
        for result in results:
            for v in result.violations:
                by_rule.setdefault(v.rule, []).append((result.path, v))
        for rule in sorted(by_rule):
            found = by_rule[rule]
            lines.append(f"{rule} ({len(found)})")
            for path, v in found:
                lines.append(f"  {path}:{v.line}:{v.column}: {v.severity.value} {v.message}")
    else:
        for result in results:
            for v in result.violations:
                lines.append(f"{result.path}:{v}")

    summary = summarize(results)
    if lines:
        lines.append("")
    lines.append(_summary_line(summary))
    return "\n".join(lines) + "\n"


def render_json(results: Sequence[DocumentResult]) -> str:
    payload = {
        "files": [
            {
                "path": r.path,
                "error": r.error,
                "changed": r.changed,
                "violations": [v.to_dict() for v in r.violations],
            }
            for r in results
        ],
        "summary": summarize(results),
    }
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"
