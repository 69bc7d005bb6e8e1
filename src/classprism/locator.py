"""Locate class-string candidates and filter them by highlight mode."""

from __future__ import annotations

import re

from classprism.calls import CallSite, find_calls
from classprism.comments import CommentIndex
from classprism.tokens import (
    CandidateKind,
    ClassStringCandidate,
    HighlightMode,
    next_quote_state,
)

CLASS_ATTRIBUTES = ("className", "class")

# class="..." / className="..."; escaped quotes stay inside the value
_ATTRIBUTE_RE = re.compile(
    r"(?<![\w-])(?:" + "|".join(CLASS_ATTRIBUTES) + r')\s*=\s*"((?:[^"\\]|\\.)*)"'
)

# Literal delimiters whose contents are class strings; single-quoted literals
# are stepped over whole
CANDIDATE_QUOTES = frozenset("\"`")


# ---------------------------------------------------------------------------
# Attribute form
# ---------------------------------------------------------------------------


def find_attribute_candidates(source: str, comments: CommentIndex) -> list[ClassStringCandidate]:
    """Return the value of every recognized class attribute outside comments."""
    candidates: list[ClassStringCandidate] = []
    for match in _ATTRIBUTE_RE.finditer(source):
        base = match.start(1)
        if comments.is_inside(base):
            continue
        candidates.append(ClassStringCandidate(match.group(1), base, CandidateKind.ATTRIBUTE))
    return candidates


# ---------------------------------------------------------------------------
# Function-call form
# ---------------------------------------------------------------------------


def find_call_candidates(call: CallSite, comments: CommentIndex) -> list[ClassStringCandidate]:
    """Return each double-quoted and template literal inside one call's arguments.

    ``base_offset`` of each candidate points just past its opening delimiter.
    """
    candidates: list[ClassStringCandidate] = []
    args = call.args
    base = call.args_start
    pos = 0

    while pos < len(args):
        quote = next_quote_state(args, pos, None)
        if quote is None:
            pos += 1
            continue

        comment = comments.range_at(base + pos)
        if comment is not None:
            pos = comment.end - base
            continue

        close = _find_terminator(args, pos + 1, quote)
        if close is None:
            break
        start = base + pos + 1
        if quote in CANDIDATE_QUOTES and not comments.is_inside(start):
            candidates.append(
                ClassStringCandidate(
                    args[pos + 1 : close],
                    start,
                    CandidateKind.FUNCTION_ARGS,
                    template=quote == "`",
                )
            )
        pos = close + 1

    return candidates


def _find_terminator(text: str, pos: int, quote: str) -> int | None:
    while pos < len(text):
        if next_quote_state(text, pos, quote) is None:
            return pos
        pos += 1
    return None


# ---------------------------------------------------------------------------
# Mode controller
# ---------------------------------------------------------------------------


def find_candidates(source: str, comments: CommentIndex) -> list[ClassStringCandidate]:
    """Return every candidate in the document (full mode)."""
    candidates = find_attribute_candidates(source, comments)
    seen = {c.base_offset for c in candidates}
    for call in find_calls(source, comments):
        for candidate in find_call_candidates(call, comments):
            # Literals of a call nested in another call are found twice
            if candidate.base_offset in seen:
                continue
            seen.add(candidate.base_offset)
            candidates.append(candidate)
    return candidates


def find_candidates_at(
    source: str, comments: CommentIndex, cursor: int
) -> list[ClassStringCandidate]:
    """Return the candidates of the region enclosing cursor (cursor mode).

    An attribute value containing the cursor wins; otherwise every literal of
    the first call containing the cursor; otherwise nothing.
    """
    for candidate in find_attribute_candidates(source, comments):
        if candidate.base_offset <= cursor <= candidate.base_offset + len(candidate.text):
            return [candidate]

    for call in find_calls(source, comments):
        if call.contains(cursor):
            return find_call_candidates(call, comments)

    return []


def select_candidates(
    source: str,
    comments: CommentIndex,
    mode: HighlightMode,
    cursor: int | None = None,
) -> list[ClassStringCandidate]:
    """Pick the candidates that feed the pipeline for the given mode."""
    if mode == HighlightMode.FULL:
        return find_candidates(source, comments)
    if cursor is None:
        return []
    return find_candidates_at(source, comments, cursor)
