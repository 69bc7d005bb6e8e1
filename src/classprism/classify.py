"""Token classifier: variant prefix, important marker, arbitrary values."""

from __future__ import annotations

from classprism.tokens import (
    VALUE_QUOTE_CHARS,
    Category,
    ClassifiedToken,
    ClassToken,
    Span,
    is_escaped,
    next_quote_state,
)

IMPORTANT_MARKER = "!"


def classify_token(token: ClassToken) -> ClassifiedToken:
    """Classify one token in a single left-to-right pass.

    The variant prefix ends at the *last* unescaped colon outside brackets, so
    ``sm:hover:flex`` has a prefix of ``sm:hover:``. Each outermost, properly
    closed ``[...]`` is an arbitrary-value span; an unclosed one is ignored.
    """
    text = token.text
    prefix_len = 0
    depth = 0
    quote: str | None = None
    bracket_start = 0
    arbitrary: list[Span] = []

    for pos, ch in enumerate(text):
        if quote is not None:
            quote = next_quote_state(text, pos, quote)
            continue

        if depth > 0:
            quote = next_quote_state(text, pos, None, VALUE_QUOTE_CHARS)
            if quote is not None:
                continue

        if ch == "[":
            if depth == 0:
                bracket_start = pos
            depth += 1
        elif ch == "]":
            if depth > 0:
                depth -= 1
                if depth == 0:
                    arbitrary.append(Span(bracket_start, pos + 1))
        elif ch == ":" and depth == 0 and not is_escaped(text, pos):
            prefix_len = pos + 1

    important = prefix_len < len(text) and text[prefix_len] == IMPORTANT_MARKER

    return ClassifiedToken(
        token=token,
        variant_prefix_length=prefix_len,
        has_important_marker=important,
        arbitrary_spans=tuple(arbitrary),
    )


def token_spans(classified: ClassifiedToken, base: int) -> list[tuple[Category, Span]]:
    """Expand a classified token into absolute (category, span) pairs.

    ``base`` is the document offset of the token's candidate. The utility
    span always covers the whole token; the other categories decorate it.
    """
    token = classified.token
    start = base + token.start
    spans: list[tuple[Category, Span]] = []

    prefix = classified.variant_prefix_length
    if prefix:
        spans.append((Category.VARIANT, Span(start, start + prefix)))
    if classified.has_important_marker:
        spans.append((Category.IMPORTANT, Span(start + prefix, start + prefix + 1)))
    for span in classified.arbitrary_spans:
        spans.append((Category.ARBITRARY, span.shift(start)))
    spans.append((Category.UTILITY, Span(start, start + len(token.text))))

    return spans
