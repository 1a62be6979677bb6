"""Violation model: structured findings about a stylesheet."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a violation."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Violation:
    """A single style-guide finding about a stylesheet.

    Attributes:
        rule: Identifier of the check that produced this violation.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        line: 1-based line of the offending token in the input text.
        column: 1-based column of the offending token in the input text.
        fix: Suggested remediation, if available.
    """

    rule: str
    severity: Severity
    message: str
    line: int
    column: int
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def sort_key(self) -> tuple[int, int, str, str]:
        return (self.line, self.column, self.rule, self.message)

    def to_dict(self) -> dict[str, object]:
        return {
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "fix": self.fix,
        }

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.severity.value} {self.rule}: {self.message}"
