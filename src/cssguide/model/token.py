"""Lexical tokens produced by the tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Kind of a lexical token."""

    IDENT = "ident"
    AT_KEYWORD = "at-keyword"
    HASH = "hash"
    STRING = "string"
    URL = "url"
    NUMBER = "number"
    BRACE_OPEN = "brace-open"
    BRACE_CLOSE = "brace-close"
    COLON = "colon"
    SEMICOLON = "semicolon"
    COMMA = "comma"
    DELIM = "delim"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    NEWLINE = "newline"
    UNKNOWN = "unknown"


# Tokens that carry no meaning for the structure of a stylesheet.
TRIVIA = frozenset({TokenKind.WHITESPACE, TokenKind.NEWLINE})


@dataclass(frozen=True)
class Token:
    """A single lexical token with its exact source position.

    Attributes:
        kind: The token kind.
        text: The raw source text of the token, never normalized.
        line: 1-based line of the first character.
        column: 1-based column of the first character (a tab is one column).
        offset: 0-based index of the first character in the source.
    """

    kind: TokenKind
    text: str
    line: int
    column: int
    offset: int

    @property
    def end_line(self) -> int:
        return self.line + self.text.count("\n")

    @property
    def end_column(self) -> int:
        """Column just past the last character of the token."""
        if "\n" in self.text:
            return len(self.text) - self.text.rfind("\n")
        return self.column + len(self.text)

    @property
    def is_trivia(self) -> bool:
        return self.kind in TRIVIA

    @property
    def is_unterminated_string(self) -> bool:
        """A string that ran to the end of its line without its closing quote."""
        if self.kind is not TokenKind.STRING:
            return False
        text = self.text
        if len(text) < 2 or text[-1] != text[0]:
            return True
        body = text[1:-1]
        return (len(body) - len(body.rstrip("\\"))) % 2 == 1

    def __str__(self) -> str:
        return self.text
