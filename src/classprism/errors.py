"""Error types with formatted context."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised on an invalid configuration value, naming the offending key."""

    def __init__(self, message: str, key: str, value: object = None) -> None:
        self.message = message
        self.key = key
        self.value = value
        super().__init__(self.format())

    def format(self, filename: str = "classprism.toml") -> str:
        gutter = "  "
        lines = [
            f"error: {self.message}",
            f"{gutter}--> {filename}: {self.key}",
        ]
        if self.value is not None:
            lines.append(f"{gutter} |")
            lines.append(f"{gutter} | {self.key} = {self.value!r}")
        return "\n".join(lines)
