"""Selector naming check.

Components are styled through meaningful class names. The check flags ID
selectors, selectors made only of bare type tags (``ul li``), and class names
too short to carry meaning (``.cb``). Anything in ``naming_allowlist`` is
exempt. Rulesets inside ``@keyframes`` are skipped: ``from``/``to`` are not
type selectors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cssguide.model.diagnostic import Severity, Violation
from cssguide.model.token import Token, TokenKind
from cssguide.model.tree import AtRule, Selector, Stylesheet

if TYPE_CHECKING:
    from cssguide.config import StyleConfig

# Delimiters after which an identifier is not a type selector.
_QUALIFYING = frozenset({".", "&", "%", "-", "#"})


@dataclass
class _SelectorParts:
    classes: list[tuple[str, Token]] = field(default_factory=list)
    ids: list[Token] = field(default_factory=list)
    tags: list[Token] = field(default_factory=list)
    qualified: bool = False


def _analyse(selector: Selector) -> _SelectorParts:
    parts = _SelectorParts()
    depth = 0
    prev: Token | None = None
    for tok in selector.tokens:
        adjacent = prev is not None and prev.offset + len(prev.text) == tok.offset
        if tok.kind is TokenKind.DELIM and tok.text in "([":
            depth += 1
            parts.qualified = True
        elif tok.kind is TokenKind.DELIM and tok.text in ")]":
            depth = max(0, depth - 1)
        elif depth:
            pass
        elif tok.kind is TokenKind.COLON:
            parts.qualified = True
        elif tok.kind is TokenKind.HASH:
            parts.ids.append(tok)
            parts.qualified = True
        elif tok.kind is TokenKind.DELIM and tok.text in "&%":
            parts.qualified = True
        elif tok.kind is TokenKind.IDENT and adjacent and prev is not None:
            if prev.kind is TokenKind.DELIM and prev.text == ".":
                parts.classes.append((tok.text, prev))
                parts.qualified = True
            elif not (prev.kind is TokenKind.DELIM and prev.text in _QUALIFYING) and (
                prev.kind is not TokenKind.COLON
            ):
                parts.tags.append(tok)
        elif tok.kind is TokenKind.IDENT:
            parts.tags.append(tok)
        prev = tok
    return parts


def _in_keyframes(ancestors: tuple) -> bool:
    return any(isinstance(a, AtRule) and a.name.endswith("keyframes") for a in ancestors)


def check_naming(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Style components with descriptive classes, not IDs, bare tags or abbreviations."""
    allow = config.naming_allowlist
    min_length = config.min_class_name_length
    violations: list[Violation] = []
    for ruleset, ancestors in sheet.rulesets():
        if _in_keyframes(ancestors):
            continue
        for selector in ruleset.selectors:
            parts = _analyse(selector)
            for tok in parts.ids:
                name = tok.text[1:]
                if name in allow:
                    continue
                violations.append(
                    Violation(
                        rule="naming",
                        severity=Severity.WARNING,
                        message=f"ID selector '{tok.text}' used for styling.",
                        line=tok.line,
                        column=tok.column,
                        fix="Use a class selector instead.",
                    )
                )
            if parts.tags and not parts.qualified:
                if not all(t.text.lower() in allow for t in parts.tags):
                    violations.append(
                        Violation(
                            rule="naming",
                            severity=Severity.WARNING,
                            message=f"Selector '{selector.text}' styles bare type tags.",
                            line=selector.line,
                            column=selector.column,
                            fix="Add a class to the element and select on it.",
                        )
                    )
            for name, dot in parts.classes:
                if len(name) >= min_length or name in allow or "#{" in name:
                    continue
                violations.append(
                    Violation(
                        rule="naming",
                        severity=Severity.INFO,
                        message=(
                            f"Class name '{name}' looks abbreviated "
                            f"(shorter than {min_length} characters)."
                        ),
                        line=dot.line,
                        column=dot.column,
                        fix="Use a descriptive class name.",
                    )
                )
    return violations
