"""Language server that paints classified utility tokens in the client.

Paint handles are client-side decoration types. The server drives them with
three custom notifications:

- ``classprism/createDecorationType`` {id, category, color, fontStyle, fontWeight}
- ``classprism/setDecorations`` {uri, id, ranges}
- ``classprism/disposeDecorationType`` {id}

The client reports cursor moves with ``classprism/cursorMoved``
{uri, position}, since LSP has no selection-change notification.
"""

from __future__ import annotations

import itertools
import logging
from bisect import bisect_right
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from lsprotocol.types import (
    SHUTDOWN,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    DidChangeConfigurationParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from classprism import __version__
from classprism.colors import OverlayStyle
from classprism.errors import ConfigError
from classprism.pipeline import scan
from classprism.overlay import OverlayManager
from classprism.settings import SECTION, Settings, parse_mode
from classprism.tokens import Category, HighlightMode, Span

logger = logging.getLogger(__name__)

CURSOR_MOVED = "classprism/cursorMoved"
CREATE_DECORATION_TYPE = "classprism/createDecorationType"
SET_DECORATIONS = "classprism/setDecorations"
DISPOSE_DECORATION_TYPE = "classprism/disposeDecorationType"

CMD_TOGGLE = "classprism.toggle"
CMD_SET_MODE = "classprism.setMode"
CMD_SET_PRESET = "classprism.setPreset"


class PrismLanguageServer(LanguageServer):
    """Language server holding the settings, cursors, and one overlay per document."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        # Highlighting stays off until the client enables it
        self.settings = Settings(enabled=False)
        self.cursors: dict[str, int] = {}
        self.overlays: dict[str, OverlayManager] = {}
        self._handle_ids = itertools.count(1)

    def next_handle_id(self) -> str:
        return f"classprism.{next(self._handle_ids)}"

    def overlay_for(self, uri: str) -> OverlayManager:
        overlay = self.overlays.get(uri)
        if overlay is None:
            overlay = self.overlays[uri] = OverlayManager(DecorationPainter(self, uri))
        return overlay

    def clear_overlays(self) -> None:
        for overlay in self.overlays.values():
            overlay.clear()


# ---------------------------------------------------------------------------
# Paint handles
# ---------------------------------------------------------------------------


class DecorationHandle:
    """One client decoration type, painting spans in a single document."""

    def __init__(self, ls: PrismLanguageServer, uri: str, handle_id: str) -> None:
        self._ls = ls
        self._uri = uri
        self.id = handle_id
        self.disposed = False

    def set_spans(self, spans: Sequence[Span]) -> None:
        doc = self._ls.workspace.get_text_document(self._uri)
        index = _LineIndex(doc.source)
        ranges = []
        for span in spans:
            rng = Range(start=index.position(span.start), end=index.position(span.end))
            rng = doc.position_codec.range_to_client_units(doc.lines, rng)
            ranges.append(_range_json(rng))
        self._ls.protocol.notify(
            SET_DECORATIONS, {"uri": self._uri, "id": self.id, "ranges": ranges}
        )

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self._ls.protocol.notify(DISPOSE_DECORATION_TYPE, {"id": self.id})


class DecorationPainter:
    """Create client decoration types for one document."""

    def __init__(self, ls: PrismLanguageServer, uri: str) -> None:
        self._ls = ls
        self._uri = uri

    def create_handle(self, category: Category, style: OverlayStyle) -> DecorationHandle:
        handle = DecorationHandle(self._ls, self._uri, self._ls.next_handle_id())
        self._ls.protocol.notify(
            CREATE_DECORATION_TYPE,
            {
                "id": handle.id,
                "category": category.value,
                "color": style.color,
                "fontStyle": style.font_style,
                "fontWeight": style.font_weight,
            },
        )
        return handle


class _LineIndex:
    """Offset → (line, character) conversion in code points."""

    def __init__(self, source: str) -> None:
        self._starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self._starts.append(i + 1)

    def position(self, offset: int) -> Position:
        line = bisect_right(self._starts, offset) - 1
        return Position(line=line, character=offset - self._starts[line])


def _range_json(rng: Range) -> dict[str, dict[str, int]]:
    return {
        "start": {"line": rng.start.line, "character": rng.start.character},
        "end": {"line": rng.end.line, "character": rng.end.character},
    }


def _field(params: Any, name: str) -> Any:
    if isinstance(params, Mapping):
        return params.get(name)
    return getattr(params, name, None)


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def _refresh(ls: PrismLanguageServer, uri: str) -> None:
    """Re-scan one document and replace its painted spans."""
    if not ls.settings.enabled:
        overlay = ls.overlays.get(uri)
        if overlay is not None:
            overlay.clear()
        return

    doc = ls.workspace.get_text_document(uri)
    result = scan(doc.source, ls.cursors.get(uri), ls.settings.mode)
    ls.overlay_for(uri).apply(result, ls.settings.resolved_colors())


def _refresh_all(ls: PrismLanguageServer) -> None:
    if not ls.settings.enabled:
        ls.clear_overlays()
        return
    colors = ls.settings.resolved_colors()
    for overlay in ls.overlays.values():
        overlay.update_colors(colors)
    for uri in list(ls.workspace.text_documents):
        _refresh(ls, uri)


def _apply_settings(ls: PrismLanguageServer, settings: Settings) -> dict[str, Any]:
    ls.settings = settings
    _refresh_all(ls)
    return {"enabled": settings.enabled, "mode": settings.mode.value, "preset": settings.preset}


def _update_cursor(ls: PrismLanguageServer, uri: str, position: Position) -> None:
    if uri not in ls.workspace.text_documents:
        return
    doc = ls.workspace.get_text_document(uri)
    ls.cursors[uri] = doc.offset_at_position(position)
    if ls.settings.mode == HighlightMode.CURSOR:
        _refresh(ls, uri)


def _update_configuration(ls: PrismLanguageServer, data: Any) -> None:
    if not isinstance(data, Mapping):
        return
    section = data.get(SECTION, data)
    if not isinstance(section, Mapping):
        return
    try:
        settings = ls.settings.merged(section)
    except ConfigError as exc:
        logger.warning("ignoring invalid settings: %s", exc.message)
        return
    _apply_settings(ls, settings)


server = PrismLanguageServer(
    "classprism-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


# ---------------------------------------------------------------------------
# Document lifecycle
# ---------------------------------------------------------------------------


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: PrismLanguageServer, params: DidOpenTextDocumentParams) -> None:
    _refresh(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: PrismLanguageServer, params: DidChangeTextDocumentParams) -> None:
    _refresh(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: PrismLanguageServer, params: DidCloseTextDocumentParams) -> None:
    uri = params.text_document.uri
    ls.cursors.pop(uri, None)
    overlay = ls.overlays.pop(uri, None)
    if overlay is not None:
        overlay.clear()


@server.feature(CURSOR_MOVED)
def cursor_moved(ls: PrismLanguageServer, params: Any) -> None:
    uri = _field(params, "uri")
    position = _field(params, "position")
    if uri is None or position is None:
        return
    _update_cursor(
        ls,
        uri,
        Position(line=_field(position, "line"), character=_field(position, "character")),
    )


@server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
def did_change_configuration(ls: PrismLanguageServer, params: DidChangeConfigurationParams) -> None:
    _update_configuration(ls, params.settings)


@server.feature(SHUTDOWN)
def shutdown(ls: PrismLanguageServer, *args: Any) -> None:
    logger.info("shutting down, disposing %d overlays", len(ls.overlays))
    ls.clear_overlays()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@server.command(CMD_TOGGLE)
def toggle(ls: PrismLanguageServer, *args: Any) -> dict[str, Any]:
    return _apply_settings(ls, replace(ls.settings, enabled=not ls.settings.enabled))


@server.command(CMD_SET_MODE)
def set_mode(ls: PrismLanguageServer, *args: Any) -> dict[str, Any] | None:
    value = _command_arg(args)
    if value is None:
        return None
    try:
        mode = parse_mode(value)
    except ConfigError as exc:
        logger.warning("%s", exc.message)
        return None
    return _apply_settings(ls, replace(ls.settings, mode=mode))


@server.command(CMD_SET_PRESET)
def set_preset(ls: PrismLanguageServer, *args: Any) -> dict[str, Any] | None:
    value = _command_arg(args)
    if not isinstance(value, str):
        return None
    return _apply_settings(ls, replace(ls.settings, preset=value))


def _command_arg(args: tuple[Any, ...]) -> Any:
    """First command argument, whether arguments arrive unpacked or as one list."""
    if not args:
        return None
    first = args[0]
    if isinstance(first, list):
        return first[0] if first else None
    return first


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    server.start_io()
