"""Layout checks: indentation, spacing, one-thing-per-line and blank lines.

Each check is a function taking a Stylesheet and a StyleConfig and returning
a list of Violation objects. Every check here has a mechanical fix applied by
the formatter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from cssguide.model.diagnostic import Severity, Violation
from cssguide.model.token import Token, TokenKind
from cssguide.model.tree import (
    AtRule,
    Declaration,
    Node,
    Ruleset,
    Stylesheet,
    body_of,
    is_block_node,
)

if TYPE_CHECKING:
    from cssguide.config import StyleConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def iter_bodies(sheet: Stylesheet) -> Iterator[tuple[Node, ...]]:
    """Yield the top-level node sequence and every block body."""
    yield sheet.nodes
    for block, _ in sheet.blocks():
        yield body_of(block)


def iter_declarations(sheet: Stylesheet) -> Iterator[Declaration]:
    for node, _ in sheet.walk():
        if isinstance(node, Declaration):
            yield node


def token_index(sheet: Stylesheet) -> dict[int, int]:
    """Map token offset -> index in ``sheet.tokens``."""
    return {tok.offset: k for k, tok in enumerate(sheet.tokens)}


def blank_lines_between(lines: list[str], end_line: int, start_line: int) -> int:
    """Count whitespace-only lines strictly between two 1-based line numbers."""
    return sum(1 for n in range(end_line + 1, start_line) if not lines[n - 1].strip())


def _first_columns(sheet: Stylesheet) -> dict[int, int]:
    """Map line -> column of the first non-whitespace token starting on it."""
    firsts: dict[int, int] = {}
    for tok in sheet.tokens:
        if tok.is_trivia:
            continue
        firsts.setdefault(tok.line, tok.column)
    return firsts


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_indentation(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Leading indentation must not mix tabs and spaces, and must use the preferred character."""
    preferred, other = ("\t", " ") if config.indent_char == "tab" else (" ", "\t")
    wanted = "tabs" if preferred == "\t" else "spaces"
    toks = sheet.tokens
    violations: list[Violation] = []
    for k, tok in enumerate(toks):
        if tok.kind is not TokenKind.WHITESPACE or tok.column != 1:
            continue
        nxt = toks[k + 1] if k + 1 < len(toks) else None
        if nxt is None or nxt.kind is TokenKind.NEWLINE:
            continue  # whitespace-only line
        if " " in tok.text and "\t" in tok.text:
            message = "Indentation mixes tabs and spaces."
        elif other in tok.text:
            message = f"Indentation uses {'spaces' if other == ' ' else 'tabs'}; expected {wanted}."
        else:
            continue
        violations.append(
            Violation(
                rule="indentation",
                severity=Severity.WARNING,
                message=message,
                line=tok.line,
                column=tok.column,
                fix=f"Indent with {wanted} only.",
            )
        )
    return violations


def check_brace_spacing(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """One space before '{'; one-line single-declaration rulesets pad their braces."""
    index = token_index(sheet)
    toks = sheet.tokens
    violations: list[Violation] = []
    for block, _ in sheet.blocks():
        if isinstance(block, Ruleset) and not block.selectors:
            continue  # reported as a syntax problem
        brace = block.open_brace
        assert brace is not None
        k = index[brace.offset]
        prev = toks[k - 1] if k > 0 else None
        if (
            prev is None
            or prev.kind is not TokenKind.WHITESPACE
            or prev.text != " "
            or prev.column == 1
        ):
            violations.append(
                Violation(
                    rule="brace-spacing",
                    severity=Severity.WARNING,
                    message="Expected a single space before '{'.",
                    line=brace.line,
                    column=brace.column,
                    fix="Put exactly one space between the selector and '{'.",
                )
            )

        if not (isinstance(block, Ruleset) and block.is_single_line and len(block.body) == 1):
            continue
        if not isinstance(block.body[0], Declaration):
            continue
        close = block.close_brace
        assert close is not None
        after_open = toks[k + 1]
        before_close = toks[index[close.offset] - 1]
        if after_open.kind is not TokenKind.WHITESPACE:
            violations.append(
                Violation(
                    rule="brace-spacing",
                    severity=Severity.WARNING,
                    message="Expected a space after '{' in a one-line ruleset.",
                    line=brace.line,
                    column=brace.column,
                )
            )
        if before_close.kind is not TokenKind.WHITESPACE:
            violations.append(
                Violation(
                    rule="brace-spacing",
                    severity=Severity.WARNING,
                    message="Expected a space before '}' in a one-line ruleset.",
                    line=close.line,
                    column=close.column,
                )
            )
    return violations


def check_selector_per_line(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """In multi-selector rulesets each selector starts on its own line."""
    violations: list[Violation] = []
    for ruleset, _ in sheet.rulesets():
        for selector in ruleset.selectors[1:]:
            if not selector.starts_on_new_line:
                violations.append(
                    Violation(
                        rule="selector-per-line",
                        severity=Severity.WARNING,
                        message=f"Selector '{selector.text}' should start on its own line.",
                        line=selector.line,
                        column=selector.column,
                        fix="Put a line break after each comma in a selector list.",
                    )
                )
    return violations


def check_declaration_per_line(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """No two declarations share a line."""
    violations: list[Violation] = []
    for body in iter_bodies(sheet):
        prev: Declaration | None = None
        for node in body:
            if not isinstance(node, Declaration):
                continue
            if prev is not None and node.line == prev.last_token.end_line:
                violations.append(
                    Violation(
                        rule="declaration-per-line",
                        severity=Severity.WARNING,
                        message=f"Declaration '{node.name}' shares a line with '{prev.name}'.",
                        line=node.line,
                        column=node.column,
                        fix="Put each declaration on its own line.",
                    )
                )
            prev = node
    return violations


def check_colon_spacing(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """No space before a declaration's colon, exactly one space after it."""
    violations: list[Violation] = []
    for decl in iter_declarations(sheet):
        if decl.before_colon:
            ws = decl.before_colon[0]
            violations.append(
                Violation(
                    rule="colon-spacing",
                    severity=Severity.WARNING,
                    message=f"Unexpected space before ':' in '{decl.name}'.",
                    line=ws.line,
                    column=ws.column,
                    fix=f"Write '{decl.name}:' with no space.",
                )
            )
        if not decl.value:
            continue
        after = decl.after_colon
        if not after:
            where: Token = decl.colon
        elif len(after) == 1 and after[0].kind is TokenKind.WHITESPACE and after[0].text == " ":
            continue
        else:
            where = after[0]
        violations.append(
            Violation(
                rule="colon-spacing",
                severity=Severity.WARNING,
                message=f"Expected a single space after ':' in '{decl.name}'.",
                line=where.line,
                column=where.column,
                fix=f"Write '{decl.name}: {decl.value_text}'.",
            )
        )
    return violations


def check_trailing_semicolon(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Every declaration, including the last of a block, ends with ';'."""
    violations: list[Violation] = []
    for decl in iter_declarations(sheet):
        if decl.has_semicolon or decl.ends_open:
            continue
        where = decl.last_token
        violations.append(
            Violation(
                rule="trailing-semicolon",
                severity=Severity.WARNING,
                message=f"Declaration '{decl.name}' is missing its trailing ';'.",
                line=where.line,
                column=where.column,
                fix="End the last declaration of the block with ';'.",
            )
        )
    return violations


def check_closing_brace_alignment(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """A multi-line block's '}' lines up with the start of its selector line."""
    firsts = _first_columns(sheet)
    violations: list[Violation] = []
    for block, _ in sheet.blocks():
        close = block.close_brace
        if close is None or close.line == block.open_brace.line:  # type: ignore[union-attr]
            continue
        expected = firsts.get(block.line, 1)
        if close.column != expected:
            label = block.selector_text if isinstance(block, Ruleset) else f"@{block.name}"
            violations.append(
                Violation(
                    rule="closing-brace-alignment",
                    severity=Severity.WARNING,
                    message=(
                        f"Closing brace of '{label}' is at column {close.column}; "
                        f"expected column {expected}."
                    ),
                    line=close.line,
                    column=close.column,
                    fix="Put '}' on its own line, aligned with the selector.",
                )
            )
    return violations


def check_blank_line_between_rulesets(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Consecutive top-level rulesets are separated by exactly N blank lines."""
    wanted = config.blank_lines_between_rulesets
    lines = sheet.text.split("\n")
    violations: list[Violation] = []
    for prev, node in zip(sheet.nodes, sheet.nodes[1:]):
        if not (is_block_node(prev) and is_block_node(node)):
            continue
        assert isinstance(node, (Ruleset, AtRule))
        found = blank_lines_between(lines, prev.span.end_line, node.line)
        if found != wanted:
            violations.append(
                Violation(
                    rule="blank-line-between-rulesets",
                    severity=Severity.WARNING,
                    message=(
                        f"Expected {wanted} blank line{'s' if wanted != 1 else ''} "
                        f"between rulesets, found {found}."
                    ),
                    line=node.line,
                    column=node.column,
                )
            )
    return violations
