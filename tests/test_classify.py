"""Test token classification: variant prefix, important marker, arbitrary values."""

from classprism.classify import classify_token, token_spans
from classprism.tokens import Category, ClassToken, Span


def _classify(text: str):
    return classify_token(ClassToken(text, 0))


class TestVariantPrefix:
    def test_plain_utility(self):
        c = _classify("bg-red-500")
        assert c.variant_prefix_length == 0
        assert not c.has_important_marker
        assert c.arbitrary_spans == ()

    def test_single_variant(self):
        assert _classify("hover:underline").variant_prefix_length == len("hover:")

    def test_last_colon_wins(self):
        c = _classify("sm:hover:!bg-red-500")
        assert c.variant_prefix_length == 9
        assert c.has_important_marker

    def test_colon_inside_brackets_ignored(self):
        c = _classify("bg-[url(http://x)]")
        assert c.variant_prefix_length == 0

    def test_colon_inside_quoted_value_ignored(self):
        c = _classify("content-['a:b']")
        assert c.variant_prefix_length == 0

    def test_escaped_colon_ignored(self):
        assert _classify("a\\:b").variant_prefix_length == 0

    def test_arbitrary_variant(self):
        c = _classify("data-[state=open]:opacity-0")
        assert c.variant_prefix_length == len("data-[state=open]:")
        assert c.arbitrary_spans == (Span(5, 17),)

    def test_trailing_colon(self):
        assert _classify("md:").variant_prefix_length == 3


class TestImportantMarker:
    def test_leading_important(self):
        c = _classify("!p-2")
        assert c.has_important_marker
        assert c.variant_prefix_length == 0

    def test_important_after_variant(self):
        assert _classify("md:!flex").has_important_marker

    def test_bang_elsewhere_is_not_important(self):
        assert not _classify("md:fl!ex").has_important_marker

    def test_prefix_covers_whole_token(self):
        assert not _classify("md:").has_important_marker


class TestArbitrarySpans:
    def test_multiple_spans(self):
        c = _classify("[&>*]:w-[10px]")
        assert c.arbitrary_spans == (Span(0, 5), Span(8, 14))

    def test_nested_brackets_give_outer_span(self):
        c = _classify("[&_[data-x]]:flex")
        assert c.arbitrary_spans == (Span(0, 12),)
        assert c.variant_prefix_length == 13

    def test_unclosed_bracket_is_ignored(self):
        c = _classify("w-[10px")
        assert c.arbitrary_spans == ()

    def test_quoted_bracket_inside_value(self):
        c = _classify("content-['a]b']")
        assert c.arbitrary_spans == (Span(8, 15),)


class TestTokenSpans:
    def test_absolute_spans(self):
        token = ClassToken("sm:!w-[1px]", 4)
        spans = token_spans(classify_token(token), 100)
        assert spans == [
            (Category.VARIANT, Span(104, 107)),
            (Category.IMPORTANT, Span(107, 108)),
            (Category.ARBITRARY, Span(110, 115)),
            (Category.UTILITY, Span(104, 115)),
        ]

    def test_plain_token_has_only_utility(self):
        spans = token_spans(classify_token(ClassToken("flex", 0)), 10)
        assert spans == [(Category.UTILITY, Span(10, 14))]
