"""Comment map — locates non-code ranges with a single forward scan."""

from __future__ import annotations

from bisect import bisect_right
from enum import Enum, auto

from classprism.tokens import Span, next_quote_state


class _State(Enum):
    CODE = auto()
    QUOTED = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    MARKUP_COMMENT = auto()


_CLOSERS = {
    _State.BLOCK_COMMENT: "*/",
    _State.MARKUP_COMMENT: "-->",
}


class CommentMapBuilder:
    """Scan source text once and collect its comment ranges.

    Quoted and template regions are skipped so that comment markers inside
    strings, and quote characters inside comments, do not confuse each other.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._state = _State.CODE
        self._quote: str | None = None
        self._comment_start = 0
        self._ranges: list[Span] = []

    def build(self) -> list[Span]:
        """Scan the full source and return sorted, disjoint comment ranges."""
        end = len(self._source)
        while self._pos < end:
            if self._state == _State.CODE:
                self._scan_code()
            elif self._state == _State.QUOTED:
                self._scan_quoted()
            elif self._state == _State.LINE_COMMENT:
                self._scan_line_comment()
            else:
                self._scan_block_comment()

        # Unterminated comment runs to end of document
        if self._state in (_State.LINE_COMMENT, _State.BLOCK_COMMENT, _State.MARKUP_COMMENT):
            self._ranges.append(Span(self._comment_start, end))
            self._state = _State.CODE

        return self._ranges

    # ------------------------------------------------------------------
    # Code state
    # ------------------------------------------------------------------

    def _scan_code(self) -> None:
        src = self._source
        pos = self._pos
        ch = src[pos]

        self._quote = next_quote_state(src, pos, None)
        if self._quote is not None:
            self._state = _State.QUOTED
            self._pos += 1
            return

        if src.startswith("//", pos) and not (pos > 0 and src[pos - 1] == ":"):
            self._open_comment(_State.LINE_COMMENT, 2)
            return

        if src.startswith("/*", pos):
            self._open_comment(_State.BLOCK_COMMENT, 2)
            return

        if src.startswith("<!--", pos):
            self._open_comment(_State.MARKUP_COMMENT, 4)
            return

        if ch == "#" and self._at_line_start(pos):
            self._open_comment(_State.LINE_COMMENT, 1)
            return

        self._pos += 1

    def _open_comment(self, state: _State, opener_len: int) -> None:
        self._state = state
        self._comment_start = self._pos
        self._pos += opener_len

    def _at_line_start(self, pos: int) -> bool:
        """True if only spaces/tabs sit between the line start and pos."""
        i = pos - 1
        while i >= 0 and self._source[i] in " \t":
            i -= 1
        return i < 0 or self._source[i] == "\n"

    # ------------------------------------------------------------------
    # Quoted regions
    # ------------------------------------------------------------------

    def _scan_quoted(self) -> None:
        src = self._source
        pos = self._pos
        while pos < len(src):
            self._quote = next_quote_state(src, pos, self._quote)
            if self._quote is None:
                self._state = _State.CODE
                self._pos = pos + 1
                return
            pos += 1
        self._pos = pos

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _scan_line_comment(self) -> None:
        newline = self._source.find("\n", self._pos)
        end = len(self._source) if newline == -1 else newline
        self._close_comment(end)

    def _scan_block_comment(self) -> None:
        closer = _CLOSERS[self._state]
        idx = self._source.find(closer, self._pos)
        if idx == -1:
            self._pos = len(self._source)
            return
        self._close_comment(idx + len(closer))

    def _close_comment(self, end: int) -> None:
        self._ranges.append(Span(self._comment_start, end))
        self._state = _State.CODE
        self._pos = end


class CommentIndex:
    """Binary-search membership test over sorted, disjoint comment ranges."""

    def __init__(self, ranges: list[Span]) -> None:
        self._ranges = ranges
        self._starts = [r.start for r in ranges]

    def __len__(self) -> int:
        return len(self._ranges)

    def __contains__(self, offset: int) -> bool:
        return self.is_inside(offset)

    def range_at(self, offset: int) -> Span | None:
        """Return the comment range containing offset, if any."""
        i = bisect_right(self._starts, offset) - 1
        if i >= 0:
            r = self._ranges[i]
            if r.start <= offset < r.end:
                return r
        return None

    def is_inside(self, offset: int) -> bool:
        return self.range_at(offset) is not None


def build_comment_map(source: str) -> list[Span]:
    """Convenience function: return the comment ranges of source."""
    return CommentMapBuilder(source).build()


def build_comment_index(source: str) -> CommentIndex:
    return CommentIndex(build_comment_map(source))
