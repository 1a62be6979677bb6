"""Tests for value checks: hex colours, quotes and zero units."""

import pytest

from cssguide.checks.values import (
    check_hex_case,
    check_hex_shorthand,
    check_quotes,
    check_zero_unit,
    hex_shorthand,
    is_hex_color,
    needs_requote,
    requote,
    unquoted_attribute_values,
)
from cssguide.config import StyleConfig
from cssguide.model.diagnostic import Violation
from cssguide.model.token import Token, TokenKind
from cssguide.parser import parse_text, tokenize


def _run(func, text: str, **options) -> list[Violation]:
    config = StyleConfig(**options)
    return func(parse_text(text, line_comments=config.preprocessor), config)


def _string(text: str) -> Token:
    return Token(TokenKind.STRING, text, 1, 1, 0)


# ---------------------------------------------------------------------------
# Predicates shared with the formatter
# ---------------------------------------------------------------------------


class TestPredicates:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("#aabbcc", "#abc"),
            ("#AABBCC", "#ABC"),
            ("#AaBbCc", "#ABC"),
            ("#aabbccdd", "#abcd"),
            ("#aabbc0", None),
            ("#abc", None),
        ],
    )
    def test_hex_shorthand(self, text: str, expected: str | None) -> None:
        assert hex_shorthand(text) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [("#fff", True), ("#FfFf", True), ("#a1b2c3", True), ("#main", False), ("#fffff", False)],
    )
    def test_is_hex_color(self, text: str, expected: bool) -> None:
        assert is_hex_color(Token(TokenKind.HASH, text, 1, 1, 0)) is expected

    def test_needs_requote(self) -> None:
        assert needs_requote(_string("'x'"), '"')
        assert not needs_requote(_string('"x"'), '"')
        assert not needs_requote(_string("'say \"hi\"'"), '"')
        assert needs_requote(_string('"x"'), "'")

    def test_unterminated_strings_are_left_alone(self) -> None:
        assert not needs_requote(_string("'abc"), '"')
        assert not needs_requote(_string("'abc\\'"), '"')
        assert not needs_requote(_string("'"), '"')

    def test_requote_unescapes_old_quote(self) -> None:
        assert requote(_string("'it\\'s'"), '"') == '"it\'s"'
        assert requote(_string('"x"'), "'") == "'x'"

    def test_unquoted_attribute_values(self) -> None:
        tokens = tuple(tokenize('a[target=_blank][type="text"][disabled][data-n = 2]'))
        assert [t.text for t in unquoted_attribute_values(tokens)] == ["_blank", "2"]


# ---------------------------------------------------------------------------
# hex-case / hex-shorthand
# ---------------------------------------------------------------------------


class TestHexChecks:
    def test_uppercase_hex(self) -> None:
        (v,) = _run(check_hex_case, ".a { color: #FFF; }")
        assert v.rule == "hex-case"
        assert v.message == "Hex color '#FFF' should be lowercase."
        assert (v.line, v.column) == (1, 13)
        assert v.fix == "Use '#fff'."

    def test_lowercase_hex(self) -> None:
        assert _run(check_hex_case, ".a { color: #fff; border: 1px solid #0a0b0c; }") == []

    def test_id_selectors_are_not_colors(self) -> None:
        assert _run(check_hex_case, "#MAIN { color: red; }") == []

    def test_long_form_hex(self) -> None:
        (v,) = _run(check_hex_shorthand, ".a { color: #AABBCC; }")
        assert v.rule == "hex-shorthand"
        assert v.message == "Hex color '#AABBCC' can be shortened to '#abc'."

    def test_hex_without_shorthand(self) -> None:
        assert _run(check_hex_shorthand, ".a { color: #aabbc0; background: #abc; }") == []

    def test_hex_inside_function_and_shorthand_property(self) -> None:
        found = _run(check_hex_case, ".a { border: 1px solid #ABC; box-shadow: 0 0 1px #DDD; }")
        assert [v.message for v in found] == [
            "Hex color '#ABC' should be lowercase.",
            "Hex color '#DDD' should be lowercase.",
        ]


# ---------------------------------------------------------------------------
# quotes
# ---------------------------------------------------------------------------


class TestQuotes:
    def test_single_quotes_when_double_preferred(self) -> None:
        (v,) = _run(check_quotes, ".a { content: 'x'; }")
        assert v.rule == "quotes"
        assert v.message == "String 'x' should use double quotes."
        assert (v.line, v.column) == (1, 15)
        assert v.fix == 'Use "x".'

    def test_double_quotes_when_single_preferred(self) -> None:
        (v,) = _run(check_quotes, '.a { content: "x"; }', quote="'")
        assert v.message == 'String "x" should use single quotes.'

    def test_string_containing_preferred_quote_is_exempt(self) -> None:
        assert _run(check_quotes, ".a { content: 'say \"hi\"'; }") == []

    def test_strings_in_at_rules(self) -> None:
        (v,) = _run(check_quotes, "@import 'base.css';")
        assert (v.line, v.column) == (1, 9)

    def test_unquoted_attribute_value(self) -> None:
        (v,) = _run(check_quotes, ".link[target=_blank] {}")
        assert v.message == "Attribute value '_blank' in '.link[target=_blank]' should be quoted."
        assert (v.line, v.column) == (1, 14)

    def test_single_quoted_attribute_value(self) -> None:
        (v,) = _run(check_quotes, "input[type='text'] {}")
        assert v.message == "String 'text' should use double quotes."

    def test_quoted_attribute_value(self) -> None:
        assert _run(check_quotes, 'input[type="text"] {}') == []


# ---------------------------------------------------------------------------
# zero-unit
# ---------------------------------------------------------------------------


class TestZeroUnit:
    def test_zero_with_unit(self) -> None:
        (v,) = _run(check_zero_unit, ".a { margin: 0px; }")
        assert v.rule == "zero-unit"
        assert v.message == "Unit on zero value '0px' in 'margin' is unnecessary."
        assert (v.line, v.column) == (1, 14)

    def test_every_offending_value(self) -> None:
        found = _run(check_zero_unit, ".a { margin: 0 0px 10px 0.0em; }")
        assert [v.message.split("'")[1] for v in found] == ["0px", "0.0em"]

    @pytest.mark.parametrize(
        "text",
        [
            ".a { margin: 0; }",
            ".a { line-height: 0px; }",
            ".a { transition: opacity 0s; }",
            ".a { width: calc(0px + 10%); }",
            ".a { margin: 10px; }",
        ],
    )
    def test_allowed(self, text: str) -> None:
        assert _run(check_zero_unit, text) == []

    def test_vendor_prefixed_property(self) -> None:
        (v,) = _run(check_zero_unit, ".a { -webkit-border-radius: 0px; }")
        assert v.column == 29

    def test_variables_are_skipped(self) -> None:
        assert _run(check_zero_unit, "$gap: 0px;", preprocessor=True) == []

    def test_configured_properties(self) -> None:
        text = ".a { margin: 0px; padding: 0px; }"
        (v,) = _run(check_zero_unit, text, zero_unit_properties={"padding"})
        assert "'padding'" in v.message
