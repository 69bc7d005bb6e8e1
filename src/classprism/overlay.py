"""Overlay manager — owns the live paint handles for one editor view."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from classprism.colors import OverlayStyle, PrismColors, overlay_style
from classprism.tokens import Category, HighlightResult, Span


class PaintHandle(Protocol):
    """Host-side style that paints a set of spans."""

    def set_spans(self, spans: Sequence[Span]) -> None: ...

    def dispose(self) -> None: ...


class Painter(Protocol):
    """Host collaborator that creates paint handles."""

    def create_handle(self, category: Category, style: OverlayStyle) -> PaintHandle: ...


class OverlayManager:
    """Hold at most one set of four paint handles and keep them current.

    The handle set is created lazily on the first apply, replaced whenever
    the colors change, and disposed exactly once. After disposal the
    reference is dropped so the next apply creates fresh handles.
    """

    def __init__(self, painter: Painter) -> None:
        self._painter = painter
        self._handles: dict[Category, PaintHandle] | None = None
        self._colors: PrismColors | None = None

    @property
    def active(self) -> bool:
        return self._handles is not None

    @property
    def colors(self) -> PrismColors | None:
        return self._colors

    def apply(self, result: HighlightResult, colors: PrismColors) -> None:
        """Replace every category's painted spans with those in result."""
        if self._handles is not None and colors != self._colors:
            self.clear()
        if self._handles is None:
            self._handles = {
                category: self._painter.create_handle(category, overlay_style(category, colors))
                for category in Category
            }
            self._colors = colors
        for category, handle in self._handles.items():
            handle.set_spans(list(result.spans(category)))

    def update_colors(self, colors: PrismColors) -> None:
        """Dispose the live handles if colors differ; the next apply recreates them."""
        if self._handles is not None and colors != self._colors:
            self.clear()

    def clear(self) -> None:
        """Dispose the live handle set. No-op when there is none."""
        handles = self._handles
        if handles is None:
            return
        self._handles = None
        self._colors = None
        for handle in handles.values():
            handle.dispose()
