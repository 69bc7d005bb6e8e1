"""Renderers — HTML preview and JSON dump of a highlight result."""

from __future__ import annotations

import json

from classprism.colors import OverlayStyle, PrismColors, overlay_style
from classprism.tokens import Category, HighlightResult

# Later categories paint over earlier ones where spans overlap
_PAINT_ORDER = (Category.UTILITY, Category.VARIANT, Category.ARBITRARY, Category.IMPORTANT)


def render_json(result: HighlightResult) -> str:
    """Render the four span lists as a JSON object of [start, end] pairs."""
    data = {
        category.value: [[span.start, span.end] for span in result.spans(category)]
        for category in Category
    }
    return json.dumps(data, indent=2) + "\n"


def render_html(source: str, result: HighlightResult, colors: PrismColors) -> str:
    """Render source as a standalone HTML page with the spans painted."""
    painted: list[Category | None] = [None] * len(source)
    for category in _PAINT_ORDER:
        for span in result.spans(category):
            for i in range(span.start, min(span.end, len(source))):
                painted[i] = category

    styles = {category: _style_attr(overlay_style(category, colors)) for category in Category}

    parts: list[str] = [
        "<!DOCTYPE html>\n",
        "<html>\n",
        "<head>\n",
        '<meta charset="utf-8">\n',
        "</head>\n",
        "<body>\n",
        '<pre class="classprism">',
    ]

    run_start = 0
    for i in range(1, len(source) + 1):
        if i == len(source) or painted[i] != painted[run_start]:
            text = _escape_html(source[run_start:i])
            category = painted[run_start]
            if category is None:
                parts.append(text)
            else:
                parts.append(f'<span class="{category.value}" style="{styles[category]}">')
                parts.append(text)
                parts.append("</span>")
            run_start = i

    parts.append("</pre>\n")
    parts.append("</body>\n")
    parts.append("</html>\n")
    return "".join(parts)


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------


def _escape_html(text: str) -> str:
    """Escape text for HTML body content. Also encodes non-ASCII as entities."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


def _style_attr(style: OverlayStyle) -> str:
    decls = [f"color:{style.color}"]
    if style.font_style:
        decls.append(f"font-style:{style.font_style}")
    if style.font_weight:
        decls.append(f"font-weight:{style.font_weight}")
    return ";".join(decls).replace('"', "&quot;")
