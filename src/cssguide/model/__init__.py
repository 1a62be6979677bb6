"""cssguide model layer -- public type re-exports."""

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

__all__ = [
    # tokens
    "Token",
    "TokenKind",
    # tree
    "Span",
    "Selector",
    "Declaration",
    "Comment",
    "AtRule",
    "Ruleset",
    "Node",
    "Stylesheet",
    "Unparsed",
    # diagnostic
    "Severity",
    "Violation",
]
