"""Preprocessor-only checks: nesting depth and @extend/@include placement."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cssguide.model.diagnostic import Severity, Violation
from cssguide.model.tree import AtRule, Comment, Ruleset, Stylesheet, body_of

if TYPE_CHECKING:
    from cssguide.config import StyleConfig


def check_nesting_depth(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Rulesets nest no deeper than ``max_nesting_depth`` levels."""
    limit = config.max_nesting_depth
    violations: list[Violation] = []
    for ruleset, ancestors in sheet.rulesets():
        depth = sum(1 for a in ancestors if isinstance(a, Ruleset))
        if depth <= limit:
            continue
        violations.append(
            Violation(
                rule="nesting-depth",
                severity=Severity.WARNING,
                message=(
                    f"Ruleset '{ruleset.selector_text}' is nested {depth} levels deep; "
                    f"maximum is {limit}."
                ),
                line=ruleset.line,
                column=ruleset.column,
                fix="Flatten the selector or give the element its own class.",
            )
        )
    return violations


# Placement phases inside a block: @extend, then @include, then the rest.
_EXTEND, _INCLUDE, _OTHER = 0, 1, 2
_PHASE_NAMES = {_EXTEND: "@extend", _INCLUDE: "@include", _OTHER: "other declarations"}


def _phase(node) -> int | None:
    if isinstance(node, Comment):
        return None
    if isinstance(node, AtRule) and node.name == "extend":
        return _EXTEND
    if isinstance(node, AtRule) and node.name == "include" and not node.has_block:
        return _INCLUDE
    return _OTHER


def check_extend_include_order(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Within a block, ``@extend`` comes first, then ``@include``, then everything else."""
    violations: list[Violation] = []
    for ruleset, _ in sheet.rulesets():
        reached = _EXTEND
        for node in body_of(ruleset):
            phase = _phase(node)
            if phase is None:
                continue
            if phase >= reached:
                reached = phase
                continue
            assert isinstance(node, AtRule)
            violations.append(
                Violation(
                    rule="extend-include-order",
                    severity=Severity.WARNING,
                    message=f"'@{node.name}' must come before {_PHASE_NAMES[reached]}.",
                    line=node.line,
                    column=node.column,
                    fix="Put @extend first, then @include, then other declarations.",
                )
            )
    return violations
