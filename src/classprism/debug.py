"""--debug dump of classified tokens to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from classprism.tokens import ClassifiedToken


def dump_tokens(
    tokens: list[tuple[int, ClassifiedToken]], *, file: TextIO | None = None
) -> None:
    """Print one line per classified token to *file* (default: current stderr)."""
    if file is None:
        file = sys.stderr
    file.write(f"Tokens ({len(tokens)})\n")
    for base, classified in tokens:
        _dump_token(base, classified, file)


def _dump_token(base: int, classified: ClassifiedToken, f: TextIO) -> None:
    token = classified.token
    start = base + token.start
    f.write(f"  {start}..{start + len(token.text)} {token.text!r}")
    if classified.variant_prefix_length:
        f.write(f" variant={token.text[: classified.variant_prefix_length]!r}")
    if classified.has_important_marker:
        f.write(" important")
    for span in classified.arbitrary_spans:
        f.write(f" arbitrary={token.text[span.start : span.end]!r}")
    f.write("\n")
