"""Scan pipeline from source text to categorized highlight spans."""

from __future__ import annotations

from classprism.classify import classify_token, token_spans
from classprism.comments import build_comment_index
from classprism.lexer import split_tokens
from classprism.locator import select_candidates
from classprism.strings import split_template
from classprism.tokens import (
    Category,
    ClassifiedToken,
    ClassStringCandidate,
    HighlightMode,
    HighlightResult,
    Span,
)


def candidate_runs(candidate: ClassStringCandidate) -> list[tuple[str, int]]:
    """Return the (text, absolute offset) runs of a candidate to tokenize."""
    if candidate.template:
        return [
            (text, candidate.base_offset + offset) for text, offset in split_template(candidate.text)
        ]
    return [(candidate.text, candidate.base_offset)]


def classify_source(
    source: str,
    cursor: int | None = None,
    mode: HighlightMode = HighlightMode.FULL,
) -> list[tuple[int, ClassifiedToken]]:
    """Return (base offset, classified token) for every token the mode selects."""
    comments = build_comment_index(source)
    result: list[tuple[int, ClassifiedToken]] = []
    for candidate in select_candidates(source, comments, mode, cursor):
        for text, base in candidate_runs(candidate):
            for token in split_tokens(text):
                result.append((base, classify_token(token)))
    return result


def scan(
    source: str,
    cursor: int | None = None,
    mode: HighlightMode = HighlightMode.FULL,
) -> HighlightResult:
    """Compute the four highlight span lists for one document state.

    Pure function: the same source, cursor, and mode always give an equal
    result. In cursor mode with no enclosing region every list is empty.
    """
    buckets: dict[Category, list[Span]] = {category: [] for category in Category}
    for base, classified in classify_source(source, cursor, mode):
        for category, span in token_spans(classified, base):
            buckets[category].append(span)

    return HighlightResult(
        variant=tuple(buckets[Category.VARIANT]),
        important=tuple(buckets[Category.IMPORTANT]),
        arbitrary=tuple(buckets[Category.ARBITRARY]),
        utility=tuple(buckets[Category.UTILITY]),
    )
