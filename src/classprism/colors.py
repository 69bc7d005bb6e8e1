"""Color presets and per-category overlay styles."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from classprism.tokens import Category


@dataclass(frozen=True, slots=True)
class PrismColors:
    variant: str
    important: str
    arbitrary: str
    utility: str

    def for_category(self, category: Category) -> str:
        return getattr(self, category.value)


@dataclass(frozen=True, slots=True)
class OverlayStyle:
    """Visual style of one paint handle."""

    color: str
    font_style: str | None = None
    font_weight: str | None = None


PRESETS: dict[str, PrismColors] = {
    # Light themes
    "Clear": PrismColors("#2563EB", "#DC2626", "#B45309", "#1F2937"),
    "Soft": PrismColors("#4F46E5", "#E11D48", "#CA8A04", "#374151"),
    # Dark themes
    "Calm": PrismColors("#7FB4FF", "#FF6B81", "#F2C97D", "#D1D7E0"),
    "Contrast": PrismColors("#93C5FD", "#FB7185", "#FACC15", "#E5E7EB"),
    "Muted": PrismColors("#9CA3AF", "#F87171", "#D4B483", "#9CA3AF"),
}

DEFAULT_PRESET = "Calm"

PRESET_DESCRIPTIONS = {
    "Clear": "Light mode · High readability",
    "Soft": "Light mode · Gentle contrast",
    "Calm": "Dark mode · Balanced (recommended)",
    "Contrast": "Dark mode · High contrast",
    "Muted": "Dark mode · Low visual noise",
}

_FONT_STYLES: dict[Category, tuple[str | None, str | None]] = {
    Category.VARIANT: ("italic", None),
    Category.IMPORTANT: (None, "600"),
    Category.ARBITRARY: (None, None),
    Category.UTILITY: (None, "500"),
}


def resolve_colors(
    preset: str = DEFAULT_PRESET,
    overrides: Mapping[str, str | None] | None = None,
) -> PrismColors:
    """Map a preset name plus optional overrides to four concrete colors.

    An unknown preset falls back to the default; an empty or missing override
    falls back to the preset's color.
    """
    base = PRESETS.get(preset, PRESETS[DEFAULT_PRESET])
    overrides = overrides or {}

    def pick(category: Category) -> str:
        return overrides.get(category.value) or base.for_category(category)

    return PrismColors(
        variant=pick(Category.VARIANT),
        important=pick(Category.IMPORTANT),
        arbitrary=pick(Category.ARBITRARY),
        utility=pick(Category.UTILITY),
    )


def overlay_style(category: Category, colors: PrismColors) -> OverlayStyle:
    font_style, font_weight = _FONT_STYLES[category]
    return OverlayStyle(colors.for_category(category), font_style, font_weight)
