"""Canonical serialisation of a Stylesheet tree.

The formatter does not patch the input text; it re-renders every node in the
canonical layout::

    .nav,
    .nav-item {
    	color: #333;
    	position: absolute;
    		top: 0;
    }

and applies the value-level fixes (hex colours, zero units, quotes,
property order) whose checks are enabled. Comments, unparsed statements and
blank-line structure are carried over, so formatting its own output is a
no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from cssguide.checks.ordering import (
    GROUPED_AFTER,
    can_reorder,
    expected_order,
    first_out_of_order,
    is_grouped_member,
)
from cssguide.checks.values import (
    hex_shorthand,
    is_hex_color,
    needs_requote,
    redundant_zero_units,
    requote,
    unquoted_attribute_values,
)
from cssguide.checks.whitespace import blank_lines_between
from cssguide.config import StyleConfig
from cssguide.engine import check, parse_document
from cssguide.model.diagnostic import Violation
from cssguide.model.token import Token, TokenKind
from cssguide.model.tree import (
    AtRule,
    Comment,
    Declaration,
    Node,
    Ruleset,
    Selector,
    Unparsed,
    is_block_node,
    node_start,
)

logger = logging.getLogger("cssguide.formatter")

__all__ = ["FormatResult", "format", "format_text"]


@dataclass(frozen=True)
class FormatResult:
    """Formatted text plus the violations that remain in it."""

    text: str
    violations: list[Violation]

    @property
    def clean(self) -> bool:
        return not self.violations


def _line_comment_as_block(text: str) -> str:
    return "/*" + text[2:].rstrip() + " */"


class _Serializer:
    def __init__(self, text: str, config: StyleConfig) -> None:
        self.config = config
        self.lines = text.split("\n")
        self.unit = config.indent_unit
        self.fix_hex_case = config.is_enabled("hex-case")
        self.fix_hex_shorthand = config.is_enabled("hex-shorthand")
        self.fix_zero_unit = config.is_enabled("zero-unit")
        self.fix_quotes = config.is_enabled("quotes")
        self.fix_order = config.is_enabled("property-order")

    # ---- token runs ----

    def join(self, tokens: Sequence[Token], replace: dict[int, str] | None = None) -> str:
        """Render *tokens* on one line, collapsing whitespace and fixing strings."""
        replace = replace or {}
        parts: list[str] = []
        for tok in tokens:
            if tok.offset in replace:
                parts.append(replace[tok.offset])
            elif tok.is_trivia:
                if parts and parts[-1] != " ":
                    parts.append(" ")
            elif tok.kind is TokenKind.COMMENT and tok.text.startswith("//"):
                parts.append(_line_comment_as_block(tok.text))
            elif self.fix_quotes and needs_requote(tok, self.config.quote):
                parts.append(requote(tok, self.config.quote))
            else:
                parts.append(tok.text)
        return "".join(parts).strip()

    def value(self, decl: Declaration) -> str:
        replace: dict[int, str] = {}
        for tok in decl.value:
            if not is_hex_color(tok):
                continue
            text = tok.text
            if self.fix_hex_shorthand:
                text = hex_shorthand(text) or text
            if self.fix_hex_case:
                text = text.lower()
            if text != tok.text:
                replace[tok.offset] = text
        if self.fix_zero_unit:
            for tok in redundant_zero_units(decl, self.config):
                replace[tok.offset] = "0"
        return self.join(decl.value, replace)

    def selector(self, selector: Selector) -> str:
        replace: dict[int, str] = {}
        if self.fix_quotes:
            q = self.config.quote
            for tok in unquoted_attribute_values(selector.tokens):
                replace[tok.offset] = f"{q}{tok.text}{q}"
        return self.join(selector.tokens, replace)

    # ---- nodes ----

    def comment(self, node: Comment) -> list[str]:
        text = node.text.replace("\r\n", "\n")
        if not node.is_closed:
            text = text.rstrip()
        return [line.rstrip() for line in text.split("\n")]

    def render(self, node: Node, depth: int, extra: int = 0) -> list[str]:
        indent = self.unit * depth
        if isinstance(node, Comment):
            out = self.comment(node)
            return [indent + out[0]] + out[1:]
        if isinstance(node, Declaration):
            value = self.value(node)
            name = self.join(node.name_tokens)
            pad = self.unit * extra
            semicolon = "" if node.ends_open else ";"
            return [f"{indent}{pad}{name}:{' ' + value if value else ''}{semicolon}"]
        if isinstance(node, Unparsed):
            semicolon = ";" if node.semicolon is not None else ""
            return [f"{indent}{self.join(node.tokens)}{semicolon}"]
        if isinstance(node, AtRule):
            head = node.keyword.text
            prelude = self.join(node.prelude)
            if prelude:
                head = f"{head} {prelude}"
            if node.block is None:
                ends_open = bool(node.prelude) and node.prelude[-1].is_unterminated_string
                return [f"{indent}{head}{'' if ends_open else ';'}"]
            return self.block([indent + head + " {"], node.block, depth)
        assert isinstance(node, Ruleset)
        selectors = [self.selector(s) for s in node.selectors]
        if not selectors:
            return self.block([indent + "{"], node.body, depth)
        head = [f"{indent}{s}," for s in selectors[:-1]]
        head.append(f"{indent}{selectors[-1]} {{")
        return self.block(head, node.body, depth)

    def block(self, head: list[str], body: Sequence[Node], depth: int) -> list[str]:
        if not body:
            head[-1] += "}"
            return head
        return head + self.body(body, depth + 1, top_level=False) + [self.unit * depth + "}"]

    # ---- sequences ----

    def blank_before(self, body: Sequence[Node], index: int) -> int:
        """Blank lines between ``body[index]`` and its predecessor in the input."""
        if index == 0:
            return 0
        return blank_lines_between(
            self.lines, body[index - 1].span.end_line, node_start(body[index])[0]
        )

    def order(self, body: Sequence[Node]) -> tuple[list[int], range]:
        """Output order of *body* as input indices, and the span that was reordered."""
        indices = list(range(len(body)))
        if not self.fix_order or not can_reorder(body):
            return indices, range(0)
        decls = [n for n in body if isinstance(n, Declaration)]
        if first_out_of_order(decls) is None:
            return indices, range(0)
        start = next(k for k, n in enumerate(body) if isinstance(n, Declaration))
        position = {id(n): k for k, n in enumerate(body)}
        indices[start:start + len(decls)] = [position[id(d)] for d in expected_order(decls)]
        logger.debug("Reordered %d declarations at line %d", len(decls), decls[0].line)
        return indices, range(start, start + len(decls))

    def body(self, body: Sequence[Node], depth: int, *, top_level: bool) -> list[str]:
        wanted = self.config.blank_lines_between_rulesets
        indices, run = (list(range(len(body))), range(0)) if top_level else self.order(body)
        anchors = {
            d.unprefixed for d in body if isinstance(d, Declaration) and d.unprefixed in GROUPED_AFTER
        }
        out: list[str] = []
        prev: Node | None = None
        for k, index in enumerate(indices):
            node = body[index]
            moved = k in run
            if (
                prev is not None
                and isinstance(node, Comment)
                and node.token.line == prev.span.end_line
                and k - 1 not in run
            ):
                lines = self.comment(node)
                out[-1] += " " + lines[0]
                out.extend(lines[1:])
                prev = node
                continue

            if prev is None or (moved and k != run.start):
                blanks = 0
            else:
                # The reordered run sits where its first input declaration was.
                found = self.blank_before(body, k if moved else index)
                if top_level and is_block_node(prev) and is_block_node(node):
                    blanks = wanted
                elif top_level:
                    blanks = min(found, max(wanted, 1))
                else:
                    blanks = min(found, 1)
            out.extend([""] * blanks)

            extra = 0
            if isinstance(node, Declaration):
                extra = int(any(is_grouped_member(node, anchor) for anchor in anchors))
            out.extend(self.render(node, depth, extra))
            prev = node
        return out


def format_text(text: str, config: StyleConfig | None = None) -> str:
    """Return *text* re-rendered in canonical form."""
    config = config or StyleConfig()
    sheet = parse_document(text, config)
    lines = _Serializer(text, config).body(sheet.nodes, 0, top_level=True)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def format(text: str, config: StyleConfig | None = None) -> FormatResult:
    """Format *text* and report the violations the formatter could not fix."""
    config = config or StyleConfig()
    formatted = format_text(text, config)
    return FormatResult(text=formatted, violations=check(formatted, config))
