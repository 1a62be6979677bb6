"""Rule engine: runs registered checks and collects violations."""

from cssguide.engine.engine import INTERNAL_RULE, check, parse_document, run_checks

__all__ = ["INTERNAL_RULE", "check", "parse_document", "run_checks"]
