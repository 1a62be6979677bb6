"""Best-effort recursive-descent parser from tokens to a Stylesheet tree.

Syntax example (plain CSS and nested preprocessor syntax)::

    @import "base.css";
    .nav,
    .nav-item {
        color: #333;
        &:hover { color: #000; }
    }

The parser never raises. Structural problems (unmatched braces, missing
colons, stray characters) are collected as ``syntax`` violations and parsing
resumes at the next statement, so a broken file still yields a full tree.
"""

from __future__ import annotations

from typing import Sequence

from cssguide.model.diagnostic import Severity, Violation
from cssguide.model.token import Token, TokenKind
from cssguide.model.tree import (
    AtRule,
    Comment,
    Declaration,
    Node,
    Ruleset,
    Selector,
    Span,
    Stylesheet,
    Unparsed,
)
from cssguide.parser.tokenizer import tokenize

__all__ = ["parse", "parse_text", "SYNTAX_RULE"]

SYNTAX_RULE = "syntax"

_OPENERS = {"(": ")", "[": "]"}
_CLOSERS = frozenset(_OPENERS.values())
_TERMINATORS = frozenset({TokenKind.SEMICOLON, TokenKind.BRACE_OPEN, TokenKind.BRACE_CLOSE})


def _strip_trivia(tokens: Sequence[Token]) -> tuple[list[Token], list[Token], list[Token]]:
    """Split *tokens* into (leading trivia, content, trailing trivia)."""
    start, end = 0, len(tokens)
    while start < end and tokens[start].is_trivia:
        start += 1
    while end > start and tokens[end - 1].is_trivia:
        end -= 1
    return list(tokens[:start]), list(tokens[start:end]), list(tokens[end:])


class _Parser:
    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = list(tokens)
        self.i = 0
        self.problems: list[Violation] = []

    # ---- helpers ----

    def problem(self, message: str, token: Token, fix: str | None = None) -> None:
        self.problems.append(
            Violation(
                rule=SYNTAX_RULE,
                severity=Severity.ERROR,
                message=message,
                line=token.line,
                column=token.column,
                fix=fix,
            )
        )

    def peek(self) -> Token | None:
        return self.tokens[self.i] if self.i < len(self.tokens) else None

    def skip_trivia(self) -> None:
        while self.i < len(self.tokens) and self.tokens[self.i].is_trivia:
            self.i += 1

    def last_significant(self, fallback: Token) -> Token:
        j = self.i - 1
        while j >= 0 and self.tokens[j].is_trivia:
            j -= 1
        return self.tokens[j] if j >= 0 else fallback

    def scan_statement(self) -> int:
        """Index where the statement at the cursor ends.

        A statement ends at the first ``;``, ``{`` or ``}``, or just after an
        unterminated string (which has already consumed the rest of its line).
        A ``(`` or ``[`` still open at that point is reported and closed there.
        """
        open_brackets: list[Token] = []
        j = self.i
        while j < len(self.tokens):
            tok = self.tokens[j]
            if tok.kind is TokenKind.DELIM and tok.text in _OPENERS:
                open_brackets.append(tok)
            elif tok.kind is TokenKind.DELIM and tok.text in _CLOSERS:
                if open_brackets:
                    open_brackets.pop()
            elif tok.kind in _TERMINATORS:
                break
            elif tok.is_unterminated_string:
                j += 1
                break
            j += 1
        for opener in open_brackets:
            closer = _OPENERS[opener.text]
            self.problem(f"Unclosed '{opener.text}'.", opener, fix=f"Add the missing '{closer}'.")
        return j

    # ---- blocks ----

    def parse_items(self, opener: Token | None) -> tuple[list[Node], Token | None]:
        """Parse nodes until the ``}`` matching *opener*, or end of input.

        Returns the nodes and the closing brace (``None`` when the block was
        closed by end of input, or for the top level).
        """
        items: list[Node] = []
        while True:
            self.skip_trivia()
            tok = self.peek()
            if tok is None:
                if opener is not None:
                    self.problem(
                        "Unclosed '{': block closed at end of input.",
                        opener,
                        fix="Add the missing '}'.",
                    )
                return items, None

            if tok.kind is TokenKind.COMMENT:
                self.i += 1
                comment = Comment(token=tok, span=Span.between(tok, tok))
                if not comment.is_closed:
                    self.problem("Unterminated comment.", tok, fix="Close the comment with '*/'.")
                items.append(comment)
            elif tok.kind is TokenKind.BRACE_CLOSE:
                self.i += 1
                if opener is not None:
                    return items, tok
                self.problem("Unmatched '}'.", tok, fix="Remove the stray '}'.")
            elif tok.kind is TokenKind.SEMICOLON:
                self.i += 1
            elif tok.kind is TokenKind.AT_KEYWORD:
                items.append(self.parse_at_rule())
            else:
                node = self.parse_statement(opener)
                if node is not None:
                    items.append(node)

    def parse_at_rule(self) -> AtRule:
        keyword = self.tokens[self.i]
        self.i += 1
        stop = self.scan_statement()
        _, prelude, _ = _strip_trivia(self.tokens[self.i:stop])
        self.i = stop
        tok = self.peek()

        if tok is not None and tok.kind is TokenKind.BRACE_OPEN:
            self.i += 1
            body, close = self.parse_items(tok)
            last = close or self.last_significant(tok)
            return AtRule(
                keyword=keyword,
                prelude=tuple(prelude),
                block=tuple(body),
                open_brace=tok,
                close_brace=close,
                span=Span.between(keyword, last),
            )

        semicolon = None
        if tok is not None and tok.kind is TokenKind.SEMICOLON:
            semicolon = tok
            self.i += 1
        last = semicolon or (prelude[-1] if prelude else keyword)
        return AtRule(
            keyword=keyword,
            prelude=tuple(prelude),
            semicolon=semicolon,
            span=Span.between(keyword, last),
        )

    def parse_statement(self, opener: Token | None) -> Node | None:
        stop = self.scan_statement()
        chunk = self.tokens[self.i:stop]
        tok = self.peek() if stop == self.i else None
        end_tok = self.tokens[stop] if stop < len(self.tokens) else None

        if end_tok is not None and end_tok.kind is TokenKind.BRACE_OPEN:
            selectors = self.split_selectors(chunk, end_tok)
            self.i = stop + 1
            body, close = self.parse_items(end_tok)
            first = selectors[0].tokens[0] if selectors else end_tok
            last = close or self.last_significant(end_tok)
            return Ruleset(
                selectors=tuple(selectors),
                open_brace=end_tok,
                body=tuple(body),
                close_brace=close,
                span=Span.between(first, last),
            )

        if tok is not None:  # pragma: no cover - parse_items consumes these
            self.i += 1
            return None

        semicolon = None
        self.i = stop
        if end_tok is not None and end_tok.kind is TokenKind.SEMICOLON:
            semicolon = end_tok
            self.i += 1
        return self.build_declaration(chunk, semicolon, inside_block=opener is not None)

    def build_declaration(
        self, chunk: list[Token], semicolon: Token | None, *, inside_block: bool
    ) -> Declaration | Unparsed:
        colon_at = next(
            (k for k, t in enumerate(chunk) if t.kind is TokenKind.COLON), None
        )
        first = chunk[0]
        if colon_at is None or colon_at == 0:
            if inside_block:
                self.problem(
                    f"Expected ':' in declaration '{_text(chunk)}'.",
                    first,
                    fix="Write declarations as 'property: value;'.",
                )
            else:
                self.problem(f"Unexpected '{_text(chunk)}' at top level.", first)
            _, content, _ = _strip_trivia(chunk)
            return Unparsed(
                tokens=tuple(content),
                semicolon=semicolon,
                span=Span.between(content[0], semicolon or content[-1]),
            )

        name_part = chunk[:colon_at]
        _, name_tokens, before_colon = _strip_trivia(name_part)
        after_colon, value, _ = _strip_trivia(chunk[colon_at + 1:])
        colon = chunk[colon_at]
        last = semicolon or (value[-1] if value else colon)
        decl = Declaration(
            name_tokens=tuple(name_tokens),
            colon=colon,
            value=tuple(value),
            before_colon=tuple(before_colon),
            after_colon=tuple(after_colon),
            semicolon=semicolon,
            span=Span.between(name_tokens[0], last),
        )
        if not value:
            self.problem(f"Declaration '{decl.name}' has no value.", name_tokens[0])
        if not inside_block and not decl.is_variable:
            self.problem(
                f"Declaration '{decl.name}' outside of a ruleset.",
                name_tokens[0],
                fix="Move the declaration into a ruleset.",
            )
        return decl

    def split_selectors(self, chunk: list[Token], brace: Token) -> list[Selector]:
        """Split selector tokens at top-level commas."""
        parts: list[list[Token]] = [[]]
        commas: list[Token] = []
        depth = 0
        for tok in chunk:
            if tok.kind is TokenKind.DELIM and tok.text in _OPENERS:
                depth += 1
            elif tok.kind is TokenKind.DELIM and tok.text in _CLOSERS:
                depth = max(0, depth - 1)
            if tok.kind is TokenKind.COMMA and depth == 0:
                commas.append(tok)
                parts.append([])
            else:
                parts[-1].append(tok)

        selectors: list[Selector] = []
        for k, part in enumerate(parts):
            leading, content, _ = _strip_trivia(part)
            if not content:
                where = commas[min(k, len(commas) - 1)] if commas else brace
                self.problem("Empty selector.", where)
                continue
            selectors.append(Selector(tokens=tuple(content), leading=tuple(leading)))
        return selectors


def _text(tokens: Sequence[Token]) -> str:
    return "".join(t.text for t in tokens).strip()


def parse(tokens: Sequence[Token], text: str | None = None) -> Stylesheet:
    """Build a Stylesheet from *tokens*.

    Structural problems are recorded on ``Stylesheet.problems``; the parser
    does not raise on malformed input.
    """
    tokens = list(tokens)
    if text is None:
        text = "".join(t.text for t in tokens)
    parser = _Parser(tokens)
    nodes, _ = parser.parse_items(None)
    for tok in tokens:
        if tok.kind is TokenKind.UNKNOWN:
            parser.problem(f"Unexpected character {tok.text!r}.", tok)
        elif tok.is_unterminated_string:
            parser.problem("Unterminated string.", tok, fix="Close the string on the same line.")
    problems = sorted(parser.problems, key=lambda v: v.sort_key)
    return Stylesheet(
        nodes=tuple(nodes),
        tokens=tuple(tokens),
        text=text,
        problems=tuple(problems),
    )


def parse_text(text: str, *, line_comments: bool = False) -> Stylesheet:
    """Tokenize and parse *text* in one step."""
    return parse(tokenize(text, line_comments=line_comments), text)
