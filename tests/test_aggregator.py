"""Tests for the streaming aggregator."""

import pytest
from debug_json.aggregator import StreamingAggregator
from debug_json.naming import pascal_case
from debug_json.types import (
    AFTER_SCALAR,
    VALUE_COMPLETED,
    ErrorType,
    IncompleteDocument,
    MalformedNumber,
    TokenKind,
    UnexpectedToken,
    UnsupportedVariant,
)


def feed_all(aggregator, fragments):
    for fragment in fragments:
        aggregator.feed(fragment)
    return aggregator.finalize()


class TestStreamingAggregator:
    """Tests for StreamingAggregator in lenient mode."""

    def setup_method(self):
        """Set up test fixtures."""
        self.aggregator = StreamingAggregator()

    def test_initial_state(self):
        """Test the empty buffer and the initial expectation."""
        assert self.aggregator.finalize() == ""
        assert self.aggregator.expecting == TokenKind.OPEN_BRACE
        assert not self.aggregator.is_complete

    def test_basic_record(self, basic_fragments):
        """Test a single string field with renderer separators."""
        assert feed_all(self.aggregator, basic_fragments) == '{"hello":"world"}'
        assert self.aggregator.is_complete
        assert self.aggregator.fragment_count == len(basic_fragments)

    def test_write_is_feed(self, basic_fragments):
        """Test that the sink entry point behaves like feed."""
        for fragment in basic_fragments:
            self.aggregator.write(fragment)

        assert self.aggregator.finalize() == '{"hello":"world"}'

    def test_fragments_before_open_brace_are_dropped(self):
        """Test that nothing is emitted until the root object opens."""
        result = feed_all(self.aggregator, ["hello", '"', "42", "{", "}"])

        assert result == "{}"

    def test_number_list(self):
        """Test that numbers in a list are comma separated."""
        result = feed_all(self.aggregator, ["{", "v", ":", "[", "1", ",", "2.5", ",", "-3", "]", "}"])

        assert result == '{"v":[1,2.5,-3]}'

    def test_boolean_list(self):
        """Test that booleans in a list are comma separated."""
        result = feed_all(self.aggregator, ["{", "flags", ":", "(", "true", ",", "false", ")", "}"])

        assert result == '{"flags":[true,false]}'

    def test_state_after_scalar(self):
        """Test the expectation after a number."""
        feed_all(self.aggregator, ["{", "n", ":", "1"])

        assert self.aggregator.expecting == AFTER_SCALAR

    def test_state_after_close_brace(self):
        """Test the expectation after a completed object."""
        feed_all(self.aggregator, ["{", "}"])

        assert self.aggregator.expecting == VALUE_COMPLETED

    def test_escaped_quote(self):
        """Test the backslash-quote escape sequence inside a string."""
        result = feed_all(self.aggregator, ["{", "hello", ":", '"', "\\", '"', '"', "}"])

        assert result == r'{"hello":"\\""}'

    def test_container_after_scalar(self):
        """Test that a list or record may follow a number inside a list."""
        result = feed_all(self.aggregator, ["{", "t", ":", "(", "1", ",", "[", "2", "]", ",", "true", ",", "{", "}", ")", "}"])

        assert result == '{"t":[1,[2],true,{}]}'

    def test_escaped_backslash_closes_string(self):
        """Test that a string ending in an escaped backslash is closed by the next quote."""
        result = feed_all(self.aggregator, ["{", "a", ":", '"', "x", "\\", "\\", '"', ",", "b", ":", '"', "y", '"', "}"])

        assert result == r'{"a":"x\\\\","b":"y"}'
        assert self.aggregator.expecting == VALUE_COMPLETED

    def test_string_body_is_stripped(self):
        """Test that string fragments lose their surrounding whitespace."""
        result = feed_all(self.aggregator, ["{", "s", ":", '"', "  hi there ", '"', "}"])

        assert result == '{"s":"hi there"}'

    def test_string_body_keeps_structural_characters(self):
        """Test that braces and literals inside a string are content."""
        result = feed_all(self.aggregator, ["{", "s", ":", '"', "{", "true", "}", '"', "}"])

        assert result == '{"s":"{true}"}'

    def test_rename_field(self):
        """Test that the rename callback is applied to every field."""
        aggregator = StreamingAggregator(rename_field=pascal_case)
        result = feed_all(aggregator, ["{", "first_name", ":", '"', "a", '"', ",", "last_name", ":", '"', "b", '"', "}"])

        assert result == '{"FirstName":"a","LastName":"b"}'

    def test_malformed_number_is_dropped(self):
        """Test that a malformed number leaves no value behind."""
        result = feed_all(self.aggregator, ["{", "n", ":", "1_000", "}"])

        assert result == '{"n":'

    def test_capitalized_field_is_dropped(self):
        """Test that an uppercase-leading name is never written as a field."""
        result = feed_all(self.aggregator, ["{", "Name", "}"])

        assert result == "{}"

    def test_finalize_mid_parse(self):
        """Test that finalize returns the prefix and does not mutate."""
        self.aggregator.feed("{")
        self.aggregator.feed("a")

        assert self.aggregator.finalize() == '{"a":'
        assert self.aggregator.finalize() == '{"a":'
        assert self.aggregator.expecting == TokenKind.COLON

    def test_never_raises(self):
        """Test that lenient mode swallows unsupported fragments."""
        result = feed_all(self.aggregator, ["Variant1", "(", '"', "hi", '"', ",", ")"])

        assert result == ""


class TestStrictAggregator:
    """Tests for StreamingAggregator in strict mode."""

    def setup_method(self):
        """Set up test fixtures."""
        self.aggregator = StreamingAggregator(strict=True)

    def test_record_header_is_accepted(self, basic_fragments):
        """Test that a type name followed by '{' is not an error."""
        assert feed_all(self.aggregator, basic_fragments) == '{"hello":"world"}'

    def test_root_variant(self):
        """Test that a tuple variant at the root is rejected."""
        with pytest.raises(UnsupportedVariant) as exc_info:
            feed_all(self.aggregator, ["Variant1", "(\n", "    ", '"', "hi", '"', ",\n", ")"])

        assert exc_info.value.fragment == "Variant1"
        assert exc_info.value.error_type == ErrorType.UNSUPPORTED_VARIANT

    def test_unit_variant_in_field(self):
        """Test that a bare capitalized value followed by another field is rejected."""
        with pytest.raises(UnsupportedVariant) as exc_info:
            feed_all(self.aggregator, ["{", "kind", ":", "None", ",\n", "other", ":", "1", "}"])

        assert exc_info.value.partial_output == '{"kind":'

    def test_unit_variant_at_end(self):
        """Test that a pending capitalized name fails on finalize."""
        for fragment in ["{", "a", ":", "[", "Red"]:
            self.aggregator.feed(fragment)

        with pytest.raises(UnsupportedVariant):
            self.aggregator.finalize()

    def test_malformed_number(self):
        """Test that text in scalar position must be a number or boolean."""
        with pytest.raises(MalformedNumber) as exc_info:
            feed_all(self.aggregator, ["{", "n", ":", "1_000"])

        assert exc_info.value.fragment == "1_000"
        assert exc_info.value.partial_output == '{"n":'

    def test_unexpected_token(self):
        """Test a structural fragment in the wrong place."""
        with pytest.raises(UnexpectedToken):
            feed_all(self.aggregator, ["{", "a", ":", "}"])

    def test_content_after_root(self):
        """Test that a second root object is rejected."""
        with pytest.raises(UnexpectedToken):
            feed_all(self.aggregator, ["{", "}", "{"])

    def test_incomplete_document(self):
        """Test finalize before the root object closes."""
        for fragment in ["{", "a", ":", '"', "x", '"']:
            self.aggregator.feed(fragment)

        with pytest.raises(IncompleteDocument) as exc_info:
            self.aggregator.finalize()

        assert exc_info.value.partial_output == '{"a":"x"'

    def test_no_root(self):
        """Test finalize with nothing fed."""
        with pytest.raises(IncompleteDocument):
            self.aggregator.finalize()

    def test_separators_never_raise(self):
        """Test that empty and comma fragments are tolerated anywhere."""
        result = feed_all(self.aggregator, ["", ",", "{", "a", ":", "[", "\n", "", "1", ",\n", "]", ",", "}", ""])

        assert result == '{"a":[1]}'
