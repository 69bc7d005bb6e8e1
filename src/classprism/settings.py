"""User settings: enabled flag, mode, preset, and color overrides."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from classprism.colors import DEFAULT_PRESET, PrismColors, resolve_colors
from classprism.errors import ConfigError
from classprism.tokens import Category, HighlightMode

SECTION = "classprism"

# Config file spelling → editor spelling
_ALIASES = {
    "mode": "highlightMode",
    "preset": "colorPreset",
}


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved user settings."""

    enabled: bool = True
    mode: HighlightMode = HighlightMode.FULL
    preset: str = DEFAULT_PRESET
    colors: dict[str, str] = field(default_factory=dict)

    def resolved_colors(self) -> PrismColors:
        return resolve_colors(self.preset, self.colors)

    def merged(self, data: Mapping[str, Any]) -> Settings:
        """Return a copy with the keys present in data applied on top."""
        return settings_from_mapping(data, base=self)


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    alias = _ALIASES.get(key)
    if alias is not None and alias in data:
        return data[alias]
    return None


def parse_mode(value: object, key: str = "mode") -> HighlightMode:
    """Parse a mode string ("full" or "cursor")."""
    if isinstance(value, HighlightMode):
        return value
    try:
        return HighlightMode(value)
    except ValueError:
        choices = ", ".join(m.value for m in HighlightMode)
        raise ConfigError(
            f"invalid highlight mode (expected one of {choices})", key, value
        ) from None


def parse_color_overrides(data: object, key: str = "colors") -> dict[str, str]:
    """Validate a category → color mapping. Empty values are dropped."""
    if not isinstance(data, Mapping):
        raise ConfigError("expected a table of category colors", key, data)
    categories = {c.value for c in Category}
    colors: dict[str, str] = {}
    for name, color in data.items():
        if name not in categories:
            raise ConfigError(f"unknown color category '{name}'", f"{key}.{name}", color)
        if color is None or color == "":
            continue
        if not isinstance(color, str):
            raise ConfigError("color must be a string", f"{key}.{name}", color)
        colors[name] = color
    return colors


def settings_from_mapping(data: Mapping[str, Any], base: Settings | None = None) -> Settings:
    """Build Settings from a config-file table or an editor settings section.

    Keys that are absent keep their value from base (or the defaults).
    Accepts ``colors`` as a table or as dotted ``colors.<category>`` keys.
    """
    settings = base if base is not None else Settings()

    enabled = _lookup(data, "enabled")
    if enabled is not None:
        if not isinstance(enabled, bool):
            raise ConfigError("enabled must be true or false", "enabled", enabled)
        settings = replace(settings, enabled=enabled)

    mode = _lookup(data, "mode")
    if mode is not None:
        settings = replace(settings, mode=parse_mode(mode))

    preset = _lookup(data, "preset")
    if preset is not None:
        if not isinstance(preset, str):
            raise ConfigError("preset must be a string", "preset", preset)
        settings = replace(settings, preset=preset)

    colors: dict[str, Any] = {}
    table = data.get("colors")
    if table is not None:
        colors.update(parse_color_overrides(table))
    dotted = {k.partition(".")[2]: v for k, v in data.items() if k.startswith("colors.")}
    if dotted:
        colors.update(parse_color_overrides(dotted))
    if table is not None or dotted:
        settings = replace(settings, colors=colors)

    return settings
