"""Shared test fixtures and helpers."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from classprism.colors import OverlayStyle
from classprism.comments import CommentIndex, build_comment_index
from classprism.pipeline import scan
from classprism.tokens import Category, HighlightMode, HighlightResult, Span


@pytest.fixture
def comments():
    """Return a helper that builds the comment index of source."""

    def _comments(source: str) -> CommentIndex:
        return build_comment_index(source)

    return _comments


@pytest.fixture
def scan_source():
    """Return a helper that scans source in the given mode."""

    def _scan(source: str, cursor: int | None = None, mode: str = "full") -> HighlightResult:
        return scan(source, cursor, HighlightMode(mode))

    return _scan


def texts(source: str, spans: Sequence[Span]) -> list[str]:
    """Read each span back from source."""
    return [source[s.start : s.end] for s in spans]


class RecordingHandle:
    """Paint handle that records every call."""

    def __init__(self, category: Category, style: OverlayStyle) -> None:
        self.category = category
        self.style = style
        self.spans: list[Span] = []
        self.set_calls = 0
        self.dispose_calls = 0

    @property
    def disposed(self) -> bool:
        return self.dispose_calls > 0

    def set_spans(self, spans: Sequence[Span]) -> None:
        assert not self.disposed, "set_spans on a disposed handle"
        self.spans = list(spans)
        self.set_calls += 1

    def dispose(self) -> None:
        self.dispose_calls += 1


class RecordingPainter:
    """Painter that keeps every handle it creates."""

    def __init__(self) -> None:
        self.handles: list[RecordingHandle] = []

    def create_handle(self, category: Category, style: OverlayStyle) -> RecordingHandle:
        handle = RecordingHandle(category, style)
        self.handles.append(handle)
        return handle

    def live(self) -> list[RecordingHandle]:
        return [h for h in self.handles if not h.disposed]

    def live_for(self, category: Category) -> RecordingHandle:
        (handle,) = [h for h in self.live() if h.category == category]
        return handle


@pytest.fixture
def painter() -> RecordingPainter:
    return RecordingPainter()
