"""Stylesheet tree: Selector, Declaration, Comment, AtRule, Ruleset, Stylesheet.

The tree is built once per document by the parser and is never mutated;
every sequence is a tuple. Nodes keep references to the tokens they were
built from so checks can report exact positions and the formatter can
reproduce raw text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Union

from cssguide.model.diagnostic import Violation
from cssguide.model.token import Token, TokenKind

VENDOR_PREFIX_RE = re.compile(r"^-(?:webkit|moz|ms|o|khtml)-")

_SPACE_RE = re.compile(r"\s+")


def collapse(tokens: tuple[Token, ...] | list[Token]) -> str:
    """Join *tokens* into text with every whitespace run reduced to one space."""
    text = "".join(
        " " if t.kind in (TokenKind.WHITESPACE, TokenKind.NEWLINE) else t.text
        for t in tokens
    )
    return _SPACE_RE.sub(" ", text).strip()


@dataclass(frozen=True)
class Span:
    """Source range; the end position is exclusive."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def between(cls, first: Token, last: Token) -> Span:
        return cls(first.line, first.column, last.end_line, last.end_column)

    def contains(self, other: Span) -> bool:
        return (self.start_line, self.start_column) <= (
            other.start_line,
            other.start_column,
        ) and (other.end_line, other.end_column) <= (self.end_line, self.end_column)


@dataclass(frozen=True)
class Selector:
    """One comma-separated selector of a ruleset."""

    tokens: tuple[Token, ...]
    leading: tuple[Token, ...] = ()

    @property
    def text(self) -> str:
        return collapse(self.tokens)

    @property
    def line(self) -> int:
        return self.tokens[0].line

    @property
    def column(self) -> int:
        return self.tokens[0].column

    @property
    def starts_on_new_line(self) -> bool:
        return any(t.kind is TokenKind.NEWLINE for t in self.leading)


@dataclass(frozen=True)
class Declaration:
    """A ``property: value`` pair.

    ``before_colon`` and ``after_colon`` hold the whitespace tokens around the
    colon exactly as written; ``value`` is trimmed of surrounding whitespace.
    """

    name_tokens: tuple[Token, ...]
    colon: Token
    value: tuple[Token, ...]
    span: Span
    before_colon: tuple[Token, ...] = ()
    after_colon: tuple[Token, ...] = ()
    semicolon: Token | None = None

    @property
    def name(self) -> str:
        return "".join(t.text for t in self.name_tokens)

    @property
    def line(self) -> int:
        return self.name_tokens[0].line

    @property
    def column(self) -> int:
        return self.name_tokens[0].column

    @property
    def has_semicolon(self) -> bool:
        return self.semicolon is not None

    @property
    def ends_open(self) -> bool:
        """The value ends in an unterminated string, which swallows any ';'."""
        return bool(self.value) and self.value[-1].is_unterminated_string

    @property
    def is_variable(self) -> bool:
        name = self.name
        return name.startswith("$") or name.startswith("--")

    @property
    def vendor_prefix(self) -> str:
        if self.is_variable:
            return ""
        match = VENDOR_PREFIX_RE.match(self.name.lower())
        return match.group(0) if match else ""

    @property
    def unprefixed(self) -> str:
        """Lowercase property name with any vendor prefix removed."""
        name = self.name.lower()
        return name[len(self.vendor_prefix):]

    @property
    def value_text(self) -> str:
        return collapse(self.value)

    @property
    def last_token(self) -> Token:
        if self.semicolon is not None:
            return self.semicolon
        if self.value:
            return self.value[-1]
        return self.colon


@dataclass(frozen=True)
class Comment:
    """A ``/* */`` (or, in preprocessor mode, ``//``) comment."""

    token: Token
    span: Span

    @property
    def text(self) -> str:
        return self.token.text

    @property
    def is_closed(self) -> bool:
        text = self.token.text
        return text.startswith("//") or (len(text) >= 4 and text.endswith("*/"))


@dataclass(frozen=True)
class Unparsed:
    """Tokens that could not be parsed as a node, kept so text is never lost."""

    tokens: tuple[Token, ...]
    span: Span
    semicolon: Token | None = None

    @property
    def line(self) -> int:
        return self.tokens[0].line

    @property
    def column(self) -> int:
        return self.tokens[0].column

    @property
    def text(self) -> str:
        return collapse(self.tokens)


@dataclass(frozen=True)
class AtRule:
    """An at-rule: a statement (``@import ...;``) or a block (``@media ... {}``)."""

    keyword: Token
    prelude: tuple[Token, ...]
    span: Span
    block: tuple[Node, ...] | None = None
    open_brace: Token | None = None
    close_brace: Token | None = None
    semicolon: Token | None = None

    @property
    def name(self) -> str:
        return self.keyword.text[1:].lower()

    @property
    def has_block(self) -> bool:
        return self.block is not None

    @property
    def prelude_text(self) -> str:
        return collapse(self.prelude)

    @property
    def line(self) -> int:
        return self.keyword.line

    @property
    def column(self) -> int:
        return self.keyword.column


@dataclass(frozen=True)
class Ruleset:
    """A selector group plus its declaration block."""

    selectors: tuple[Selector, ...]
    open_brace: Token
    body: tuple[Node, ...]
    span: Span
    close_brace: Token | None = None

    @property
    def declarations(self) -> tuple[Declaration, ...]:
        return tuple(n for n in self.body if isinstance(n, Declaration))

    @property
    def line(self) -> int:
        return self.selectors[0].line if self.selectors else self.open_brace.line

    @property
    def column(self) -> int:
        return self.selectors[0].column if self.selectors else self.open_brace.column

    @property
    def is_single_line(self) -> bool:
        return self.close_brace is not None and self.close_brace.line == self.open_brace.line

    @property
    def selector_text(self) -> str:
        return ", ".join(s.text for s in self.selectors)


Node = Union[Ruleset, AtRule, Declaration, Comment, Unparsed]


def node_start(node: Node) -> tuple[int, int]:
    if isinstance(node, Comment):
        return node.token.line, node.token.column
    return node.line, node.column


def node_end_line(node: Node) -> int:
    return node.span.end_line


def is_block_node(node: Node) -> bool:
    """Rulesets and block at-rules are separated by blank lines at top level."""
    return isinstance(node, Ruleset) or (isinstance(node, AtRule) and node.has_block)


def body_of(node: Node) -> tuple[Node, ...]:
    if isinstance(node, Ruleset):
        return node.body
    if isinstance(node, AtRule) and node.block is not None:
        return node.block
    return ()


@dataclass(frozen=True)
class Stylesheet:
    """Root of the tree; owns every node for one lint/format invocation."""

    nodes: tuple[Node, ...]
    tokens: tuple[Token, ...] = ()
    text: str = ""
    problems: tuple[Violation, ...] = field(default=())

    @property
    def line_count(self) -> int:
        if not self.text:
            return 1
        return self.text.count("\n") + 1

    def walk(self) -> Iterator[tuple[Node, tuple[Node, ...]]]:
        """Yield every node depth-first together with its ancestors."""

        def _walk(nodes: tuple[Node, ...], ancestors: tuple[Node, ...]):
            for node in nodes:
                yield node, ancestors
                children = body_of(node)
                if children:
                    yield from _walk(children, ancestors + (node,))

        yield from _walk(self.nodes, ())

    def rulesets(self) -> Iterator[tuple[Ruleset, tuple[Node, ...]]]:
        for node, ancestors in self.walk():
            if isinstance(node, Ruleset):
                yield node, ancestors

    def blocks(self) -> Iterator[tuple[Ruleset | AtRule, tuple[Node, ...]]]:
        """Yield every Ruleset and block AtRule with its ancestors."""
        for node, ancestors in self.walk():
            if isinstance(node, Ruleset) or (isinstance(node, AtRule) and node.has_block):
                yield node, ancestors
