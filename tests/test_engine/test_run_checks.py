"""Tests for the rule engine: running checks, merging and sorting violations."""

import logging
from pathlib import Path

import pytest

from cssguide import check
from cssguide.checks import REGISTRY, CheckSpec
from cssguide.config import StyleConfig
from cssguide.engine import INTERNAL_RULE, parse_document, run_checks
from cssguide.model.diagnostic import Severity, Violation

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _rules(violations: list[Violation]) -> set[str]:
    return {v.rule for v in violations}


# ---------------------------------------------------------------------------
# Running checks
# ---------------------------------------------------------------------------


class TestCheck:
    def test_compact_ruleset(self) -> None:
        found = check(".a,\n.b{color:#FFFFFF}")
        rules = _rules(found)
        assert "brace-spacing" in rules
        assert "hex-case" in rules
        assert "selector-per-line" not in rules

    def test_clean_fixture(self) -> None:
        assert check((FIXTURES / "clean.css").read_text()) == []

    def test_messy_fixture(self) -> None:
        rules = _rules(check((FIXTURES / "messy.css").read_text()))
        assert {
            "indentation",
            "brace-spacing",
            "selector-per-line",
            "colon-spacing",
            "hex-case",
            "hex-shorthand",
            "quotes",
            "zero-unit",
            "trailing-semicolon",
            "closing-brace-alignment",
            "blank-line-between-rulesets",
            "property-order",
        } <= rules

    def test_violations_sorted(self) -> None:
        found = check((FIXTURES / "messy.css").read_text())
        assert found == sorted(found, key=lambda v: v.sort_key)

    def test_order_is_stable(self) -> None:
        text = (FIXTURES / "messy.css").read_text()
        assert check(text) == check(text)

    def test_parser_problems_included(self) -> None:
        found = check(".a { color red; }")
        (syntax,) = [v for v in found if v.rule == "syntax"]
        assert syntax.severity is Severity.ERROR

    def test_empty_document(self) -> None:
        assert check("") == []

    def test_default_config(self) -> None:
        assert check(".a { color: #FFF; }") == check(".a { color: #FFF; }", StyleConfig())


# ---------------------------------------------------------------------------
# Enabling and disabling
# ---------------------------------------------------------------------------


class TestEnablement:
    def test_disabled_check_does_not_run(self) -> None:
        config = StyleConfig(checks={"hex-case": False})
        assert "hex-case" not in _rules(check(".a { color: #FFF; }", config))

    def test_naming_off_by_default(self) -> None:
        assert check(".cb { background: #000; }") == []

    def test_naming_enabled(self) -> None:
        found = check(".cb { background: #000; }", StyleConfig(checks={"naming": True}))
        assert [v.rule for v in found] == ["naming"]

    def test_preprocessor_checks_need_preprocessor_mode(self) -> None:
        text = (FIXTURES / "nested.scss").read_text()
        assert "nesting-depth" not in _rules(check(text))
        found = check(text, StyleConfig(preprocessor=True))
        assert [v.rule for v in found] == ["nesting-depth"]

    def test_preprocessor_mode_reads_line_comments(self) -> None:
        text = "// note\n.a {\n\tcolor: red;\n}\n"
        assert check(text, StyleConfig(preprocessor=True)) == []
        assert "syntax" not in _rules(check(text, StyleConfig(preprocessor=True)))


# ---------------------------------------------------------------------------
# Misbehaving checks
# ---------------------------------------------------------------------------


def _boom(sheet, config):
    raise RuntimeError("kaboom")


def _far_away(sheet, config):
    return [Violation("far", Severity.WARNING, "nowhere", line=99, column=1)]


def _loud(sheet, config):
    return [Violation("loud", Severity.WARNING, "too loud", line=1, column=1)]


def _wrong_type(sheet, config):
    return ["not a violation"]


class TestInternalErrors:
    def test_raising_check_becomes_internal_violation(self, monkeypatch, caplog) -> None:
        monkeypatch.setitem(REGISTRY, "boom", CheckSpec("boom", _boom, Severity.WARNING, "x"))
        with caplog.at_level(logging.WARNING, logger="cssguide.engine"):
            found = check(".a { color: #FFF; }")
        (internal,) = [v for v in found if v.rule == INTERNAL_RULE]
        assert internal.severity is Severity.INFO
        assert internal.message == "Check 'boom' failed: kaboom"
        assert "hex-case" in _rules(found)
        assert "boom" in caplog.text

    def test_position_outside_document(self, monkeypatch) -> None:
        monkeypatch.setitem(REGISTRY, "far", CheckSpec("far", _far_away, Severity.WARNING, "x"))
        found = check(".a {}\n")
        (internal,) = found
        assert internal.rule == INTERNAL_RULE
        assert internal.message == "Check 'far' reported position 99:1 outside the document"

    def test_non_violation_result(self, monkeypatch) -> None:
        monkeypatch.setitem(REGISTRY, "odd", CheckSpec("odd", _wrong_type, Severity.WARNING, "x"))
        (internal,) = check(".a {}\n")
        assert internal.message == "Check 'odd' returned str, not a Violation"

    def test_severity_above_registration(self, monkeypatch) -> None:
        monkeypatch.setitem(REGISTRY, "loud", CheckSpec("loud", _loud, Severity.INFO, "x"))
        (internal,) = check(".a {}\n")
        assert internal.rule == INTERNAL_RULE
        assert internal.message == "Check 'loud' reported WARNING above its registered severity INFO"

    def test_lower_severity_allowed(self) -> None:
        assert REGISTRY["naming"].severity is Severity.WARNING
        (v,) = check(".cb {}\n", StyleConfig(checks={"naming": True}))
        assert v.severity is Severity.INFO

    def test_run_checks_on_parsed_sheet(self) -> None:
        config = StyleConfig()
        sheet = parse_document(".a{}", config)
        (v,) = run_checks(sheet, config)
        assert v.rule == "brace-spacing"

    @pytest.mark.parametrize("line, column", [(0, 1), (1, 0), (1, 7), (3, 1)])
    def test_positions_checked(self, monkeypatch, line: int, column: int) -> None:
        def _at(sheet, config):
            return [Violation("at", Severity.WARNING, "x", line=line, column=column)]

        monkeypatch.setitem(REGISTRY, "at", CheckSpec("at", _at, Severity.WARNING, "x"))
        (internal,) = check(".a {}\n")
        assert internal.rule == INTERNAL_RULE
