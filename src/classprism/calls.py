"""Find class-merging helper calls and their balanced argument spans."""

from __future__ import annotations

import re
from dataclasses import dataclass

from classprism.comments import CommentIndex
from classprism.tokens import QUOTE_CHARS, next_quote_state

MERGE_FUNCTIONS = ("cn", "clsx", "classnames")

_CALL_RE = re.compile(r"\b(" + "|".join(MERGE_FUNCTIONS) + r")\s*\(")


@dataclass(frozen=True, slots=True)
class CallSite:
    """One recognized call. ``call_end`` is one past the closing parenthesis."""

    name: str
    call_start: int
    args_start: int
    args: str
    call_end: int

    def contains(self, offset: int) -> bool:
        return self.call_start <= offset <= self.call_end


def find_closing_paren(source: str, open_pos: int, comments: CommentIndex) -> int | None:
    """Return the index of the parenthesis matching source[open_pos], or None.

    Parentheses inside quoted regions or comment ranges do not count.
    """
    depth = 0
    quote: str | None = None
    pos = open_pos
    end = len(source)

    while pos < end:
        ch = source[pos]

        if quote is not None:
            quote = next_quote_state(source, pos, quote)
            pos += 1
            continue

        if ch in QUOTE_CHARS or ch in "()":
            comment = comments.range_at(pos)
            if comment is not None:
                pos = comment.end
                continue

        quote = next_quote_state(source, pos, None)
        if quote is None:
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth == 0:
                    return pos
        pos += 1

    return None


def find_calls(source: str, comments: CommentIndex) -> list[CallSite]:
    """Return every recognized call with a balanced argument list, in order.

    Calls whose name starts inside a comment are skipped; calls without a
    matching closing parenthesis are dropped.
    """
    calls: list[CallSite] = []
    for match in _CALL_RE.finditer(source):
        if comments.is_inside(match.start()):
            continue
        open_pos = match.end() - 1
        close_pos = find_closing_paren(source, open_pos, comments)
        if close_pos is None:
            continue
        calls.append(
            CallSite(
                name=match.group(1),
                call_start=match.start(),
                args_start=open_pos + 1,
                args=source[open_pos + 1 : close_pos],
                call_end=close_pos + 1,
            )
        )
    return calls
