"""Hand-written tokenizer for CSS and SCSS-style stylesheets.

The tokenizer never fails: characters it does not recognise become
``UNKNOWN`` tokens so the parser can report them as localized problems.
Whitespace is kept exactly as written, so tab and space runs stay
distinguishable for the indentation check.
"""

from __future__ import annotations

import re

from cssguide.model.token import Token, TokenKind

__all__ = ["tokenize"]

_NEWLINE_RE = re.compile(r"\r\n|\n")
_WHITESPACE_RE = re.compile(r"[ \t\r\f]+")
_COMMENT_RE = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//[^\r\n]*")

# An unterminated string ends before the newline.
_STRING_RE = re.compile(
    r"""
    "(?:[^"\\\r\n]|\\(?:\r\n|[\s\S]))*"?
    |
    '(?:[^'\\\r\n]|\\(?:\r\n|[\s\S]))*'?
    """,
    re.VERBOSE,
)

_URL_RE = re.compile(r"url\([ \t]*[^'\"\s)][^)\r\n]*\)", re.IGNORECASE)

_NUMBER_RE = re.compile(
    r"""
    [+-]?
    (?:\d+(?:\.\d+)?|\.\d+)     # integer or decimal
    (?:[eE][+-]?\d+)?           # exponent
    (?:%|[A-Za-z]+)?            # unit
    """,
    re.VERBOSE,
)

_NAME_CHARS = r"(?:[A-Za-z0-9_-]|[^\x00-\x7f]|\\[^\r\n])"

_IDENT_RE = re.compile(
    rf"""
    --{_NAME_CHARS}*                                      # custom property
    |
    [$-]?(?:[A-Za-z_]|[^\x00-\x7f]|\\[^\r\n]){_NAME_CHARS}*  # name, $variable
    """,
    re.VERBOSE,
)

_HASH_RE = re.compile(rf"#{_NAME_CHARS}+")
_AT_KEYWORD_RE = re.compile(rf"@-?(?:[A-Za-z_]|[^\x00-\x7f]){_NAME_CHARS}*")

_SINGLE = {
    "{": TokenKind.BRACE_OPEN,
    "}": TokenKind.BRACE_CLOSE,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
}

_DELIMS = frozenset(".>+~*()[]=!&%/|^$#-\\<")


def _interpolation_end(text: str, start: int) -> int:
    """Return the index just past the ``}`` closing the ``#{`` at *start*."""
    depth = 0
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        elif ch == "\n":
            break
        i += 1
    return -1


class _Scanner:
    """Cursor over the source that tracks line and column."""

    def __init__(self, text: str, line_comments: bool) -> None:
        self.text = text
        self.line_comments = line_comments
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def emit(self, kind: TokenKind, end: int) -> None:
        raw = self.text[self.pos:end]
        self.tokens.append(Token(kind, raw, self.line, self.column, self.pos))
        newlines = raw.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(raw) - raw.rfind("\n")
        else:
            self.column += len(raw)
        self.pos = end

    def _sign_allowed(self) -> bool:
        """A leading +/- starts a number unless it continues a previous word."""
        if not self.tokens:
            return True
        return self.tokens[-1].kind not in (TokenKind.IDENT, TokenKind.NUMBER)

    def step(self) -> None:
        text, pos = self.text, self.pos
        ch = text[pos]
        nxt = text[pos + 1] if pos + 1 < len(text) else ""

        for pattern, kind in (
            (_NEWLINE_RE, TokenKind.NEWLINE),
            (_WHITESPACE_RE, TokenKind.WHITESPACE),
        ):
            m = pattern.match(text, pos)
            if m:
                self.emit(kind, m.end())
                return

        if ch == "/" and nxt == "*":
            self.emit(TokenKind.COMMENT, _COMMENT_RE.match(text, pos).end())
            return
        if ch == "/" and nxt == "/" and self.line_comments:
            self.emit(TokenKind.COMMENT, _LINE_COMMENT_RE.match(text, pos).end())
            return

        if ch in "\"'":
            self.emit(TokenKind.STRING, _STRING_RE.match(text, pos).end())
            return

        if ch in "uU":
            m = _URL_RE.match(text, pos)
            if m:
                self.emit(TokenKind.URL, m.end())
                return

        if ch.isdigit() or (ch == "." and nxt.isdigit()) or (
            ch in "+-" and self._sign_allowed()
        ):
            m = _NUMBER_RE.match(text, pos)
            if m:
                self.emit(TokenKind.NUMBER, m.end())
                return

        m = _IDENT_RE.match(text, pos)
        if m:
            self.emit(TokenKind.IDENT, m.end())
            return

        if ch == "#" and nxt == "{":
            end = _interpolation_end(text, pos)
            if end > 0:
                self.emit(TokenKind.IDENT, end)
                return
        if ch == "#":
            m = _HASH_RE.match(text, pos)
            if m:
                self.emit(TokenKind.HASH, m.end())
                return
        if ch == "@":
            m = _AT_KEYWORD_RE.match(text, pos)
            if m:
                self.emit(TokenKind.AT_KEYWORD, m.end())
                return

        if ch in _SINGLE:
            self.emit(_SINGLE[ch], pos + 1)
        elif ch in _DELIMS:
            self.emit(TokenKind.DELIM, pos + 1)
        else:
            self.emit(TokenKind.UNKNOWN, pos + 1)


def tokenize(text: str, *, line_comments: bool = False) -> list[Token]:
    """Convert stylesheet *text* into a list of tokens.

    ``line_comments`` enables ``// ...`` comments (preprocessor syntax).
    Concatenating the text of the returned tokens reproduces *text* exactly.
    """
    scanner = _Scanner(text, line_comments)
    while scanner.pos < len(text):
        scanner.step()
    return scanner.tokens
