"""Test escape parity, quote tracking, and the span data types."""

from classprism.tokens import (
    EMPTY_RESULT,
    VALUE_QUOTE_CHARS,
    Category,
    HighlightResult,
    Span,
    is_escaped,
    next_quote_state,
)


class TestIsEscaped:
    def test_no_backslash(self):
        assert not is_escaped('a"', 1)

    def test_single_backslash(self):
        assert is_escaped('\\"', 1)

    def test_double_backslash(self):
        assert not is_escaped('\\\\"', 2)

    def test_triple_backslash(self):
        assert is_escaped('\\\\\\"', 3)

    def test_index_zero(self):
        assert not is_escaped('"', 0)


class TestNextQuoteState:
    def test_opens_double(self):
        assert next_quote_state('"', 0, None) == '"'

    def test_opens_template(self):
        assert next_quote_state("`", 0, None) == "`"

    def test_escaped_quote_does_not_open(self):
        assert next_quote_state('\\"', 1, None) is None

    def test_matching_quote_closes(self):
        assert next_quote_state('"a"', 2, '"') is None

    def test_escaped_quote_does_not_close(self):
        assert next_quote_state('"a\\"', 3, '"') == '"'

    def test_other_quote_inside_is_literal(self):
        assert next_quote_state("\"'", 1, '"') == '"'

    def test_plain_char_outside(self):
        assert next_quote_state("a", 0, None) is None

    def test_custom_quote_set(self):
        assert next_quote_state("'", 0, None, VALUE_QUOTE_CHARS) == "'"
        assert next_quote_state("`", 0, None, VALUE_QUOTE_CHARS) is None


class TestSpan:
    def test_shift(self):
        assert Span(1, 4).shift(10) == Span(11, 14)


class TestHighlightResult:
    def test_spans_by_category(self):
        r = HighlightResult(variant=(Span(0, 3),), utility=(Span(0, 6),))
        assert r.spans(Category.VARIANT) == (Span(0, 3),)
        assert r.spans(Category.UTILITY) == (Span(0, 6),)
        assert r.spans(Category.IMPORTANT) == ()

    def test_empty(self):
        assert EMPTY_RESULT.is_empty()
        assert not HighlightResult(utility=(Span(0, 1),)).is_empty()

    def test_value_equality(self):
        assert HighlightResult(utility=(Span(0, 1),)) == HighlightResult(utility=(Span(0, 1),))
