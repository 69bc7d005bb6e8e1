"""Template-literal splitting into static class-string runs."""

from __future__ import annotations

from classprism.tokens import is_escaped

INTERPOLATION_OPEN = "${"
INTERPOLATION_CLOSE = "}"


def split_template(body: str) -> list[tuple[str, int]]:
    """Return the static runs of a template-literal body as (text, offset).

    Algorithm:
    1. Find the next unescaped ``${``.
    2. The interpolation ends at the first ``}`` after it (no nesting).
    3. The text before the interpolation is a static run.
    4. Continue after the ``}``; the tail after the last interpolation is the
       final run.

    Runs that are empty or whitespace-only are dropped. A ``${`` without a
    closing brace is left in the static text.
    """
    runs: list[tuple[str, int]] = []
    run_start = 0
    search = 0

    while True:
        open_pos = body.find(INTERPOLATION_OPEN, search)
        if open_pos == -1:
            break
        if is_escaped(body, open_pos):
            search = open_pos + 1
            continue
        close_pos = body.find(INTERPOLATION_CLOSE, open_pos + len(INTERPOLATION_OPEN))
        if close_pos == -1:
            break
        _add_run(runs, body, run_start, open_pos)
        run_start = search = close_pos + 1

    _add_run(runs, body, run_start, len(body))
    return runs


def _add_run(runs: list[tuple[str, int]], body: str, start: int, end: int) -> None:
    text = body[start:end]
    if text.strip():
        runs.append((text, start))
