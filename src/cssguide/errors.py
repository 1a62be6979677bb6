"""Error hierarchy for cssguide.

Malformed stylesheets are never reported through exceptions; they surface as
``syntax`` violations. Exceptions are reserved for bad configuration and for
programming errors inside checks.
"""
from __future__ import annotations


class CSSGuideError(Exception):
    """Base error for all cssguide errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigError(CSSGuideError, ValueError):
    """An option value is invalid. Raised before any document is processed."""

    def __init__(self, message: str, *, option: str | None = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.option = option


class InternalCheckError(CSSGuideError):
    """A check misbehaved (raised, or produced a violation outside the document)."""

    def __init__(self, message: str, *, check_id: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.check_id = check_id
