"""Settings parsing from config tables and editor settings sections."""

from __future__ import annotations

import pytest

from classprism.colors import PRESETS
from classprism.errors import ConfigError
from classprism.settings import Settings, parse_mode, settings_from_mapping
from classprism.tokens import HighlightMode


class TestDefaults:
    def test_defaults(self):
        s = settings_from_mapping({})
        assert s == Settings()
        assert s.enabled is True
        assert s.mode == HighlightMode.FULL
        assert s.preset == "Calm"
        assert s.resolved_colors() == PRESETS["Calm"]


class TestTomlSpelling:
    def test_all_keys(self):
        s = settings_from_mapping(
            {
                "enabled": False,
                "mode": "cursor",
                "preset": "Muted",
                "colors": {"variant": "#111111"},
            }
        )
        assert s.enabled is False
        assert s.mode == HighlightMode.CURSOR
        assert s.preset == "Muted"
        assert s.colors == {"variant": "#111111"}
        assert s.resolved_colors().variant == "#111111"
        assert s.resolved_colors().utility == PRESETS["Muted"].utility


class TestEditorSpelling:
    def test_aliases(self):
        s = settings_from_mapping({"highlightMode": "cursor", "colorPreset": "Soft"})
        assert s.mode == HighlightMode.CURSOR
        assert s.preset == "Soft"

    def test_dotted_colors(self):
        s = settings_from_mapping({"colors.important": "#ff0000", "colors.utility": ""})
        assert s.colors == {"important": "#ff0000"}

    def test_merge_keeps_absent_keys(self):
        base = Settings(enabled=True, mode=HighlightMode.CURSOR, preset="Contrast")
        s = base.merged({"enabled": False})
        assert s.enabled is False
        assert s.mode == HighlightMode.CURSOR
        assert s.preset == "Contrast"


class TestErrors:
    def test_invalid_mode(self):
        with pytest.raises(ConfigError) as info:
            settings_from_mapping({"mode": "partial"})
        assert info.value.key == "mode"
        assert "full, cursor" in info.value.message

    def test_enabled_not_bool(self):
        with pytest.raises(ConfigError):
            settings_from_mapping({"enabled": "yes"})

    def test_preset_not_string(self):
        with pytest.raises(ConfigError):
            settings_from_mapping({"preset": 3})

    def test_unknown_color_category(self):
        with pytest.raises(ConfigError) as info:
            settings_from_mapping({"colors": {"border": "#fff"}})
        assert info.value.key == "colors.border"

    def test_colors_not_a_table(self):
        with pytest.raises(ConfigError):
            settings_from_mapping({"colors": "#fff"})

    def test_color_not_string(self):
        with pytest.raises(ConfigError):
            settings_from_mapping({"colors": {"variant": 5}})

    def test_unknown_preset_is_not_an_error(self):
        s = settings_from_mapping({"preset": "Neon"})
        assert s.resolved_colors() == PRESETS["Calm"]

    def test_error_format(self):
        exc = ConfigError("invalid highlight mode", "mode", "partial")
        text = exc.format("my.toml")
        assert text.startswith("error: invalid highlight mode\n")
        assert "--> my.toml: mode" in text
        assert "mode = 'partial'" in text


class TestParseMode:
    def test_values(self):
        assert parse_mode("full") == HighlightMode.FULL
        assert parse_mode(HighlightMode.CURSOR) == HighlightMode.CURSOR

    def test_custom_key(self):
        with pytest.raises(ConfigError) as info:
            parse_mode("x", "--mode")
        assert info.value.key == "--mode"
