"""Span and token data structures, and escape/quote classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    VARIANT = "variant"  # sm:hover:
    IMPORTANT = "important"  # !
    ARBITRARY = "arbitrary"  # [state=open]
    UTILITY = "utility"  # whole token


class CandidateKind(Enum):
    ATTRIBUTE = "attribute"  # class="..." / className="..."
    FUNCTION_ARGS = "functionArgs"  # literal inside cn(...) / clsx(...)


class HighlightMode(Enum):
    FULL = "full"
    CURSOR = "cursor"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open offset range [start, end) into the document."""

    start: int
    end: int

    def shift(self, delta: int) -> Span:
        return Span(self.start + delta, self.end + delta)


@dataclass(frozen=True, slots=True)
class ClassStringCandidate:
    """A slice of source believed to hold whitespace-separated utility classes.

    ``base_offset`` is the document offset of ``text[0]``.
    """

    text: str
    base_offset: int
    kind: CandidateKind
    template: bool = False


@dataclass(frozen=True, slots=True)
class ClassToken:
    """One whitespace-delimited class token, offset relative to its candidate."""

    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True, slots=True)
class ClassifiedToken:
    """A token with its decoration spans (all offsets relative to the token)."""

    token: ClassToken
    variant_prefix_length: int = 0
    has_important_marker: bool = False
    arbitrary_spans: tuple[Span, ...] = ()


@dataclass(frozen=True, slots=True)
class HighlightResult:
    """Absolute spans for each category, in scan order."""

    variant: tuple[Span, ...] = ()
    important: tuple[Span, ...] = ()
    arbitrary: tuple[Span, ...] = ()
    utility: tuple[Span, ...] = ()

    def spans(self, category: Category) -> tuple[Span, ...]:
        return getattr(self, category.value)

    def is_empty(self) -> bool:
        return not (self.variant or self.important or self.arbitrary or self.utility)


EMPTY_RESULT = HighlightResult()

ESCAPE_CHAR = "\\"

# Quote characters that open a quoted region in source text
QUOTE_CHARS = frozenset("'\"`")

# Quote characters recognized inside arbitrary values ([content-['a_b']])
VALUE_QUOTE_CHARS = frozenset("'\"")


def is_escaped(text: str, index: int) -> bool:
    """Return True if text[index] is preceded by an odd run of backslashes."""
    count = 0
    i = index - 1
    while i >= 0 and text[i] == ESCAPE_CHAR:
        count += 1
        i -= 1
    return count % 2 == 1


def next_quote_state(
    text: str, index: int, active: str | None, quotes: frozenset[str] = QUOTE_CHARS
) -> str | None:
    """Return the quote state after reading text[index].

    ``active`` is the quote character currently open, or None outside quotes.
    Only an unescaped matching quote closes a region; only an unescaped
    character from ``quotes`` opens one.
    """
    ch = text[index]
    if active is None:
        if ch in quotes and not is_escaped(text, index):
            return ch
        return None
    if ch == active and not is_escaped(text, index):
        return None
    return active
