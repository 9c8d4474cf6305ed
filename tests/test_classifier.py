"""Tests for fragment classification."""

import pytest
from debug_json.classifier import (
    classify,
    is_field_name,
    is_float_literal,
    starts_with_uppercase,
)
from debug_json.types import (
    AFTER_COLON,
    AFTER_ESCAPE,
    AFTER_OPEN_BRACE,
    AFTER_OPEN_BRACKET,
    AFTER_SCALAR,
    INSIDE_STRING,
    VALUE_COMPLETED,
    Rule,
    TokenKind,
)


class TestClassify:
    """Tests for classify."""

    def test_open_brace_only_when_expected(self):
        """Test that '{' opens an object only when OPEN_BRACE is expected."""
        assert classify("{", TokenKind.OPEN_BRACE) == Rule.OPEN_BRACE
        assert classify("{", AFTER_OPEN_BRACE) is None

    def test_close_brace(self):
        """Test closing an object."""
        assert classify("}", AFTER_OPEN_BRACE) == Rule.CLOSE_BRACE
        assert classify("}", AFTER_COLON) is None

    def test_brackets_and_parentheses(self):
        """Test that tuples and lists map to the same bracket rules."""
        assert classify("[", AFTER_COLON) == Rule.OPEN_BRACKET
        assert classify("(", AFTER_COLON) == Rule.OPEN_BRACKET
        assert classify("]", VALUE_COMPLETED) == Rule.CLOSE_BRACKET
        assert classify(")", VALUE_COMPLETED) == Rule.CLOSE_BRACKET
        assert classify("(", TokenKind.OPEN_BRACE) is None

    def test_colon(self):
        """Test the colon after a field name."""
        assert classify(":", TokenKind.COLON) == Rule.COLON

    def test_quote_roles(self):
        """Test that a quote starts, ends or continues a string depending on state."""
        assert classify('"', AFTER_COLON) == Rule.STRING_START
        assert classify('"', INSIDE_STRING) == Rule.STRING_END
        assert classify('"', AFTER_ESCAPE) == Rule.STRING_BODY

    def test_booleans(self):
        """Test boolean literals in scalar position."""
        assert classify("true", AFTER_COLON) == Rule.BOOLEAN
        assert classify("false", AFTER_SCALAR) == Rule.BOOLEAN

    def test_containers_after_scalar(self):
        """Test that lists and records may follow a scalar."""
        assert classify("[", AFTER_SCALAR) == Rule.OPEN_BRACKET
        assert classify("(", AFTER_SCALAR) == Rule.OPEN_BRACKET
        assert classify("{", AFTER_SCALAR) == Rule.OPEN_BRACE

    def test_boolean_inside_string_is_body(self):
        """Test that literals inside a string stay string content."""
        assert classify("true", INSIDE_STRING) == Rule.STRING_BODY
        assert classify("42", INSIDE_STRING) == Rule.STRING_BODY
        assert classify("{", INSIDE_STRING) == Rule.STRING_BODY

    def test_numbers(self):
        """Test number literals in scalar position."""
        assert classify("1.5e-3", AFTER_COLON) == Rule.NUMBER
        assert classify("-7", AFTER_OPEN_BRACKET) == Rule.NUMBER

    def test_malformed_number_is_dropped(self):
        """Test that text which is not a float literal does not match."""
        assert classify("1_000", AFTER_COLON) is None
        assert classify("abc", AFTER_COLON) is None

    def test_field_name(self):
        """Test field names after an opened or completed value."""
        assert classify("hello", AFTER_OPEN_BRACE) == Rule.FIELD_NAME
        assert classify("after", VALUE_COMPLETED) == Rule.FIELD_NAME

    def test_capitalized_name_is_not_a_field(self):
        """Test that type names and variant tags never become fields."""
        assert classify("Basic", VALUE_COMPLETED) is None
        assert classify("Basic", AFTER_OPEN_BRACE) is None
        assert classify("Basic", INSIDE_STRING) == Rule.STRING_BODY

    def test_separator_artifacts_match_field_rule(self):
        """Test that bare commas and empty fragments reach the field rule."""
        assert classify(",", VALUE_COMPLETED) == Rule.FIELD_NAME
        assert classify("", AFTER_OPEN_BRACE) == Rule.FIELD_NAME
        assert classify("", AFTER_OPEN_BRACKET) is None

    def test_classify_is_pure(self):
        """Test that repeated classification gives the same answer."""
        expecting = VALUE_COMPLETED
        first = classify("name", expecting)
        second = classify("name", expecting)

        assert first == second == Rule.FIELD_NAME
        assert expecting == VALUE_COMPLETED


class TestFloatLiteral:
    """Tests for is_float_literal."""

    @pytest.mark.parametrize("text", [
        "0", "-1", "+2.5", "1.", ".5", "1e10", "1E-7", "2.5e+3",
        "inf", "-Infinity", "NaN",
    ])
    def test_valid(self, text):
        """Test accepted float literals."""
        assert is_float_literal(text)

    @pytest.mark.parametrize("text", [
        "", ".", "e5", "1e", "1_0", " 1", "0x10", "1.2.3", "true", "infinit",
    ])
    def test_invalid(self, text):
        """Test rejected float literals."""
        assert not is_float_literal(text)


class TestStartsWithUppercase:
    """Tests for starts_with_uppercase."""

    def test_ascii_uppercase(self):
        """Test detection of an ASCII capital."""
        assert starts_with_uppercase("Variant1")
        assert not starts_with_uppercase("variant")
        assert not starts_with_uppercase("")

    def test_non_ascii_uppercase_is_ignored(self):
        """Test that only ASCII capitals count."""
        assert not starts_with_uppercase("Élan")


class TestIsFieldName:
    """Tests for mapping key checks."""

    @pytest.mark.parametrize("name", ["hello", "snake_case", "_private", "x1", "e", "infinite"])
    def test_valid(self, name):
        """Test keys that come through as field names."""
        assert is_field_name(name)

    @pytest.mark.parametrize("name", [
        1, None, "", "1", "2.5", "1e5", "true", "false", "nan", "inf",
        "Name", "a b", " a", "a:b", "a,b", "a{", 'a"b', "a\\b", "tab\t",
    ])
    def test_invalid(self, name):
        """Test keys the aggregator would misread or corrupt."""
        assert not is_field_name(name)
