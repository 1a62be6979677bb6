"""Value checks: hex colours, quoting and unitless zeros.

The predicates in this module are shared with the formatter so that a value
the formatter writes is exactly a value these checks accept.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterator

from cssguide.checks.whitespace import iter_declarations
from cssguide.model.diagnostic import Severity, Violation
from cssguide.model.token import Token, TokenKind
from cssguide.model.tree import Declaration, Stylesheet

if TYPE_CHECKING:
    from cssguide.config import StyleConfig


_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

_ZERO_RE = re.compile(r"^[+-]?(?:0+(?:\.0*)?|\.0+)(?P<unit>%|[A-Za-z]+)$")

LENGTH_UNITS = frozenset(
    {
        "px", "em", "rem", "ex", "ch", "vw", "vh", "vmin", "vmax", "vi", "vb",
        "cm", "mm", "q", "in", "pt", "pc", "%",
    }
)


# ---------------------------------------------------------------------------
# Shared predicates
# ---------------------------------------------------------------------------


def is_hex_color(token: Token) -> bool:
    return token.kind is TokenKind.HASH and bool(_HEX_COLOR_RE.match(token.text))


def hex_shorthand(text: str) -> str | None:
    """Return the 3/4-digit form of a 6/8-digit hex colour, or ``None``."""
    digits = text[1:]
    if len(digits) not in (6, 8):
        return None
    lowered = digits.lower()
    if all(lowered[i] == lowered[i + 1] for i in range(0, len(lowered), 2)):
        return "#" + digits[0::2]
    return None


def top_level_tokens(tokens: tuple[Token, ...]) -> Iterator[Token]:
    """Yield tokens that are not inside parentheses (``calc()``, ``rgba()``...)."""
    depth = 0
    for tok in tokens:
        if tok.kind is TokenKind.DELIM and tok.text == "(":
            depth += 1
        elif tok.kind is TokenKind.DELIM and tok.text == ")":
            depth = max(0, depth - 1)
        elif depth == 0:
            yield tok


def redundant_zero_units(decl: Declaration, config: StyleConfig) -> list[Token]:
    """Zero lengths carrying a unit in a property that accepts a bare ``0``."""
    if decl.is_variable or decl.unprefixed not in config.zero_unit_properties:
        return []
    found: list[Token] = []
    for tok in top_level_tokens(decl.value):
        if tok.kind is not TokenKind.NUMBER:
            continue
        match = _ZERO_RE.match(tok.text)
        if match and match.group("unit").lower() in LENGTH_UNITS:
            found.append(tok)
    return found


def needs_requote(token: Token, quote: str) -> bool:
    """A terminated string using the other quote that can switch without escaping."""
    if token.kind is not TokenKind.STRING or token.is_unterminated_string:
        return False
    if token.text[0] == quote:
        return False
    return quote not in token.text[1:-1]


def requote(token: Token, quote: str) -> str:
    old = token.text[0]
    body = token.text[1:-1].replace("\\" + old, old)
    return f"{quote}{body}{quote}"


def unquoted_attribute_values(tokens: tuple[Token, ...]) -> list[Token]:
    """Attribute selector values written without quotes: ``[type=checkbox]``."""
    found: list[Token] = []
    in_brackets = False
    after_equals = False
    for tok in tokens:
        if tok.kind is TokenKind.DELIM and tok.text == "[":
            in_brackets, after_equals = True, False
        elif tok.kind is TokenKind.DELIM and tok.text == "]":
            in_brackets = after_equals = False
        elif not in_brackets or tok.is_trivia:
            continue
        elif tok.kind is TokenKind.DELIM and tok.text == "=":
            after_equals = True
        elif after_equals:
            if tok.kind in (TokenKind.IDENT, TokenKind.NUMBER):
                found.append(tok)
            after_equals = False
    return found


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def _hex_tokens(sheet: Stylesheet) -> Iterator[Token]:
    for decl in iter_declarations(sheet):
        for tok in decl.value:
            if is_hex_color(tok):
                yield tok


def check_hex_case(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Hex colours are written in lowercase."""
    return [
        Violation(
            rule="hex-case",
            severity=Severity.WARNING,
            message=f"Hex color '{tok.text}' should be lowercase.",
            line=tok.line,
            column=tok.column,
            fix=f"Use '{tok.text.lower()}'.",
        )
        for tok in _hex_tokens(sheet)
        if tok.text != tok.text.lower()
    ]


def check_hex_shorthand(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Hex colours use the three-digit form when one exists."""
    violations: list[Violation] = []
    for tok in _hex_tokens(sheet):
        short = hex_shorthand(tok.text)
        if short is not None:
            violations.append(
                Violation(
                    rule="hex-shorthand",
                    severity=Severity.WARNING,
                    message=f"Hex color '{tok.text}' can be shortened to '{short.lower()}'.",
                    line=tok.line,
                    column=tok.column,
                    fix=f"Use '{short.lower()}'.",
                )
            )
    return violations


def check_quotes(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Strings use the preferred quote; attribute selector values are quoted."""
    quote = config.quote
    name = "double" if quote == '"' else "single"
    violations: list[Violation] = []
    for tok in sheet.tokens:
        if needs_requote(tok, quote):
            violations.append(
                Violation(
                    rule="quotes",
                    severity=Severity.WARNING,
                    message=f"String {tok.text} should use {name} quotes.",
                    line=tok.line,
                    column=tok.column,
                    fix=f"Use {requote(tok, quote)}.",
                )
            )
    for ruleset, _ in sheet.rulesets():
        for selector in ruleset.selectors:
            for tok in unquoted_attribute_values(selector.tokens):
                violations.append(
                    Violation(
                        rule="quotes",
                        severity=Severity.WARNING,
                        message=f"Attribute value '{tok.text}' in '{selector.text}' should be quoted.",
                        line=tok.line,
                        column=tok.column,
                        fix=f"Use {quote}{tok.text}{quote}.",
                    )
                )
    return violations


def check_zero_unit(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Zero lengths omit their unit where the property allows it."""
    violations: list[Violation] = []
    for decl in iter_declarations(sheet):
        for tok in redundant_zero_units(decl, config):
            violations.append(
                Violation(
                    rule="zero-unit",
                    severity=Severity.WARNING,
                    message=f"Unit on zero value '{tok.text}' in '{decl.name}' is unnecessary.",
                    line=tok.line,
                    column=tok.column,
                    fix="Use '0'.",
                )
            )
    return violations
