"""
Error taxonomy and message template tests
"""

import pytest

from mathitem.lib.errors import (
    InvalidStateError,
    MathItemError,
    ParseError,
    RenderError,
    message_format,
)


class TestMessageFormat:
    """%-template substitution"""

    def test_positional_argument(self):
        """%1 is replaced by the first argument"""
        assert message_format("Missing argument for %1", ["^"]) == "Missing argument for ^"

    def test_braced_argument(self):
        """%{1} and %2 forms can be mixed"""
        assert message_format("%{1} and %2", ["a", "b"]) == "a and b"

    def test_numbers_are_stringified(self):
        """Non-string arguments are converted with str()"""
        assert message_format("Found %1 errors", [3]) == "Found 3 errors"

    def test_literal_percent(self):
        """%% yields a single percent sign"""
        assert message_format("100%%", []) == "100%"

    def test_missing_argument(self):
        """Out-of-range argument renders as ???"""
        assert message_format("Value %3", ["a"]) == "Value ???"

    def test_plural_kept_literally(self):
        """Plural forms are not localized and pass through unchanged"""
        template = "%{plural:%1|one item|many items}"
        assert message_format(template, [2]) == template

    def test_plain_text_untouched(self):
        """Templates without % come back as-is"""
        assert message_format("Missing close brace", []) == "Missing close brace"

    @pytest.mark.parametrize("template, expected", [
        ("Value %²", "Value ²"),
        ("Value %{٣}", "Value {٣}"),
        ("Value %٣", "Value ٣"),
    ])
    def test_non_ascii_digits_are_literal(self, template, expected):
        """Superscript and non-Latin digits are not argument numbers"""
        assert message_format(template, ["a"]) == expected

    def test_open_brace_without_number(self):
        """%{ followed by a non-digit is taken literally"""
        assert message_format("a %{x", []) == "a {x"


class TestParseError:
    """ParseError built from a TeX-style error list"""

    def test_built_from_error_list(self):
        """[id, template, *args] sets id and the formatted message"""
        err = ParseError("MissingArgFor", "Missing argument for %1", "\\frac")
        assert err.id == "MissingArgFor"
        assert err.message == "Missing argument for \\frac"
        assert str(err) == "Missing argument for \\frac"

    def test_short_error_list(self):
        """A list with no template leaves id and message empty"""
        err = ParseError("OnlyId")
        assert err.id == ""
        assert err.message == ""


class TestTaxonomy:
    @pytest.mark.parametrize("cls", [ParseError, RenderError, InvalidStateError])
    def test_common_base(self, cls):
        """Every lifecycle error derives from MathItemError"""
        assert issubclass(cls, MathItemError)
