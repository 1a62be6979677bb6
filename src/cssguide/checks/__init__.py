"""Check registry.

Each check is a function taking a Stylesheet and a StyleConfig and returning
a list of Violation objects. Checks are looked up by identifier in
``REGISTRY``; adding a check means writing the function and registering a
``CheckSpec`` for it. The engine itself never changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from cssguide.checks.naming import check_naming
from cssguide.checks.nesting import check_extend_include_order, check_nesting_depth
from cssguide.checks.ordering import check_property_order
from cssguide.checks.values import (
    check_hex_case,
    check_hex_shorthand,
    check_quotes,
    check_zero_unit,
)
from cssguide.checks.whitespace import (
    check_blank_line_between_rulesets,
    check_brace_spacing,
    check_closing_brace_alignment,
    check_colon_spacing,
    check_declaration_per_line,
    check_indentation,
    check_selector_per_line,
    check_trailing_semicolon,
)
from cssguide.model.diagnostic import Severity, Violation
from cssguide.model.tree import Stylesheet

if TYPE_CHECKING:
    from cssguide.config import StyleConfig

__all__ = ["ALL_CHECKS", "REGISTRY", "CheckFunc", "CheckSpec", "register"]

CheckFunc = Callable[[Stylesheet, "StyleConfig"], list[Violation]]


@dataclass(frozen=True)
class CheckSpec:
    """Registry entry describing one check.

    Attributes:
        id: Identifier used in violations, configuration and the CLI.
        func: The check function.
        severity: Highest severity the check may report; individual findings
            can be lower (``naming`` reports abbreviations as INFO).
        description: One-line summary shown by ``cssguide rules``.
        fixable: ``yes``, ``no`` or ``partial`` (fixed only when unambiguous).
        preprocessor_only: Runs only when the configuration enables preprocessor syntax.
        enabled_by_default: Whether the check runs when the configuration does not mention it.
    """

    id: str
    func: CheckFunc
    severity: Severity
    description: str
    fixable: str = "yes"
    preprocessor_only: bool = False
    enabled_by_default: bool = True


ALL_CHECKS: list[CheckSpec] = [
    CheckSpec(
        "indentation",
        check_indentation,
        Severity.WARNING,
        "Indent with the preferred character; never mix tabs and spaces.",
    ),
    CheckSpec(
        "brace-spacing",
        check_brace_spacing,
        Severity.WARNING,
        "One space before '{'; pad braces of one-line rulesets.",
    ),
    CheckSpec(
        "selector-per-line",
        check_selector_per_line,
        Severity.WARNING,
        "Each selector of a selector list on its own line.",
    ),
    CheckSpec(
        "declaration-per-line",
        check_declaration_per_line,
        Severity.WARNING,
        "One declaration per line.",
    ),
    CheckSpec(
        "colon-spacing",
        check_colon_spacing,
        Severity.WARNING,
        "No space before ':' and one space after it.",
    ),
    CheckSpec(
        "hex-case",
        check_hex_case,
        Severity.WARNING,
        "Lowercase hex colours.",
    ),
    CheckSpec(
        "hex-shorthand",
        check_hex_shorthand,
        Severity.WARNING,
        "Three-digit hex colours where possible.",
    ),
    CheckSpec(
        "quotes",
        check_quotes,
        Severity.WARNING,
        "Preferred quote character; quoted attribute selector values.",
    ),
    CheckSpec(
        "zero-unit",
        check_zero_unit,
        Severity.WARNING,
        "No units on zero lengths.",
    ),
    CheckSpec(
        "trailing-semicolon",
        check_trailing_semicolon,
        Severity.WARNING,
        "Every declaration ends with ';'.",
    ),
    CheckSpec(
        "closing-brace-alignment",
        check_closing_brace_alignment,
        Severity.WARNING,
        "'}' aligned with the start of its selector line.",
    ),
    CheckSpec(
        "blank-line-between-rulesets",
        check_blank_line_between_rulesets,
        Severity.WARNING,
        "Fixed number of blank lines between top-level rulesets.",
    ),
    CheckSpec(
        "property-order",
        check_property_order,
        Severity.WARNING,
        "Alphabetical declarations; prefixed before unprefixed; offsets after position.",
        fixable="partial",
    ),
    CheckSpec(
        "naming",
        check_naming,
        Severity.WARNING,
        "Descriptive class selectors instead of IDs, bare tags and abbreviations.",
        fixable="no",
        enabled_by_default=False,
    ),
    CheckSpec(
        "nesting-depth",
        check_nesting_depth,
        Severity.WARNING,
        "Nested rulesets no deeper than max_nesting_depth.",
        fixable="no",
        preprocessor_only=True,
    ),
    CheckSpec(
        "extend-include-order",
        check_extend_include_order,
        Severity.WARNING,
        "@extend first, then @include, at the top of a block.",
        fixable="no",
        preprocessor_only=True,
    ),
]

REGISTRY: dict[str, CheckSpec] = {spec.id: spec for spec in ALL_CHECKS}


def register(spec: CheckSpec) -> CheckSpec:
    """Add *spec* to the registry; identifiers must be unique."""
    if spec.id in REGISTRY:
        raise ValueError(f"Check {spec.id!r} is already registered")
    ALL_CHECKS.append(spec)
    REGISTRY[spec.id] = spec
    return spec
