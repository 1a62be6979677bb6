"""Rule engine: runs every enabled check against a parsed stylesheet."""

from __future__ import annotations

import logging

from cssguide.checks import REGISTRY, CheckSpec
from cssguide.config import StyleConfig
from cssguide.errors import InternalCheckError
from cssguide.model.diagnostic import Severity, Violation
from cssguide.model.tree import Stylesheet
from cssguide.parser import parse, tokenize

logger = logging.getLogger("cssguide.engine")

INTERNAL_RULE = "internal"

_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


def _verify_results(spec: CheckSpec, violations: list[Violation], sheet: Stylesheet) -> None:
    lines = sheet.text.split("\n")
    for v in violations:
        if not isinstance(v, Violation):
            raise InternalCheckError(
                f"Check {spec.id!r} returned {type(v).__name__}, not a Violation",
                check_id=spec.id,
            )
        if _SEVERITY_RANK[v.severity] > _SEVERITY_RANK[spec.severity]:
            raise InternalCheckError(
                f"Check {spec.id!r} reported {v.severity.value} above its registered "
                f"severity {spec.severity.value}",
                check_id=spec.id,
            )
        inside = 1 <= v.line <= len(lines) and 1 <= v.column <= len(lines[v.line - 1]) + 1
        if not inside:
            raise InternalCheckError(
                f"Check {spec.id!r} reported position {v.line}:{v.column} "
                f"outside the document",
                check_id=spec.id,
            )


def _run_one(spec: CheckSpec, sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Run a single check, turning any failure into one ``internal`` violation."""
    try:
        try:
            found = list(spec.func(sheet, config))
        except Exception as exc:
            raise InternalCheckError(
                f"Check {spec.id!r} failed: {exc}", check_id=spec.id, cause=exc
            ) from exc
        _verify_results(spec, found, sheet)
    except InternalCheckError as exc:
        logger.warning("Discarding results of check %s: %s", spec.id, exc, exc_info=exc.cause)
        return [
            Violation(
                rule=INTERNAL_RULE,
                severity=Severity.INFO,
                message=str(exc),
                line=1,
                column=1,
            )
        ]
    logger.debug("Check %s reported %d violation(s)", spec.id, len(found))
    return found


def run_checks(sheet: Stylesheet, config: StyleConfig | None = None) -> list[Violation]:
    """Run every enabled check against *sheet*.

    Returns the parser's structural problems plus all check violations,
    sorted by ``(line, column, rule, message)``. A misbehaving check never
    aborts the run.
    """
    config = config or StyleConfig()
    violations: list[Violation] = list(sheet.problems)
    for spec in REGISTRY.values():
        if not config.is_enabled(spec.id):
            continue
        violations.extend(_run_one(spec, sheet, config))
    violations.sort(key=lambda v: v.sort_key)
    return violations


def parse_document(text: str, config: StyleConfig) -> Stylesheet:
    """Tokenize and parse *text* with the syntax options of *config*."""
    return parse(tokenize(text, line_comments=config.preprocessor), text)


def check(text: str, config: StyleConfig | None = None) -> list[Violation]:
    """Lint stylesheet *text* and return its violations in report order."""
    config = config or StyleConfig()
    return run_checks(parse_document(text, config), config)
