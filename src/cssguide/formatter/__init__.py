"""Formatter: rewrites stylesheets into the canonical layout."""

from cssguide.formatter.serializer import FormatResult, format, format_text

__all__ = ["FormatResult", "format", "format_text"]
