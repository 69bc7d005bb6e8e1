"""Utility-class token highlighter for source text."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from classprism.tokens import HighlightResult

__version__ = "0.1.0"


def highlight(
    source: str,
    cursor: int | None = None,
    mode: str = "full",
) -> HighlightResult:
    """Scan source and return its categorized highlight spans."""
    from classprism.pipeline import scan
    from classprism.settings import parse_mode

    return scan(source, cursor, parse_mode(mode))
