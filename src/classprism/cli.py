"""Command-line interface for classprism."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from classprism.colors import PRESET_DESCRIPTIONS
from classprism.errors import ConfigError
from classprism.settings import Settings, parse_mode, settings_from_mapping
from classprism.tokens import Category, HighlightMode

CONFIG_FILENAME = "classprism.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    settings: Settings
    cursor: int | tuple[int, int] | None
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    presets = "\n".join(f"  {name:<10}{desc}" for name, desc in PRESET_DESCRIPTIONS.items())
    p = argparse.ArgumentParser(
        prog="classprism",
        description="Highlight utility-class tokens in source files",
        epilog=f"color presets:\n{presets}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("input", help="Input source file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=("json", "html"),
        default="json",
        help="Output format (default: json)",
    )
    p.add_argument(
        "--mode",
        choices=[m.value for m in HighlightMode],
        default=None,
        help="Highlight mode (default: full, or cursor when --cursor is given)",
    )
    p.add_argument(
        "--cursor",
        default=None,
        metavar="OFFSET|LINE:COL",
        help="Cursor position for cursor mode (LINE:COL is 1-based)",
    )
    p.add_argument("--preset", default=None, metavar="NAME", help="Color preset (default: Calm)")
    p.add_argument(
        "--color",
        action="append",
        default=[],
        metavar="CATEGORY=COLOR",
        help="Override one category color (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILENAME})",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-render")
    p.add_argument("--debug", action="store_true", help="Dump classified tokens to stderr")
    return p


def parse_color_arg(s: str) -> tuple[str, str]:
    """Parse a CATEGORY=COLOR string into (category, color)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid color format (expected CATEGORY=COLOR): {s}")
    name, _, value = s.partition("=")
    if name not in {c.value for c in Category}:
        raise argparse.ArgumentTypeError(f"unknown color category: {name}")
    return name, value


def parse_cursor_arg(s: str) -> int | tuple[int, int]:
    """Parse OFFSET or LINE:COL (1-based) into an int or a (line, col) pair."""
    line, sep, col = s.partition(":")
    try:
        if not sep:
            offset = int(s)
            if offset < 0:
                raise ValueError(s)
            return offset
        pair = (int(line), int(col))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid cursor (expected OFFSET or LINE:COL): {s}"
        ) from None
    if pair[0] < 1 or pair[1] < 1:
        raise argparse.ArgumentTypeError(f"invalid cursor (LINE and COL start at 1): {s}")
    return pair


def cursor_offset(source: str, cursor: int | tuple[int, int]) -> int:
    """Convert a parsed cursor to a document offset, clamped to the source."""
    if isinstance(cursor, int):
        return min(cursor, len(source))
    line, col = cursor
    lines = source.split("\n")
    if line > len(lines):
        return len(source)
    offset = sum(len(text) + 1 for text in lines[: line - 1])
    return offset + min(col - 1, len(lines[line - 1]))


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    settings = settings_from_mapping(config)

    cursor = parse_cursor_arg(args.cursor) if args.cursor is not None else None

    # Mode: config < CLI; a cursor without an explicit mode means cursor mode
    if args.mode is not None:
        settings = replace(settings, mode=parse_mode(args.mode, "--mode"))
    elif cursor is not None:
        settings = replace(settings, mode=HighlightMode.CURSOR)

    if args.preset is not None:
        settings = replace(settings, preset=args.preset)

    # Color overrides: config < CLI
    if args.color:
        colors = dict(settings.colors)
        for raw in args.color:
            name, value = parse_color_arg(raw)
            colors[name] = value
        settings = replace(settings, colors=colors)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=args.format,
        settings=settings,
        cursor=cursor,
        watch=args.watch,
        debug=args.debug,
    )


def highlight_file(options: CliOptions) -> str:
    """Read, scan, and render one source file."""
    from classprism.debug import dump_tokens
    from classprism.pipeline import classify_source, scan
    from classprism.render import render_html, render_json
    from classprism.tokens import EMPTY_RESULT

    source = options.input_file.read_text(encoding="utf-8")
    settings = options.settings
    cursor = cursor_offset(source, options.cursor) if options.cursor is not None else None

    if not settings.enabled:
        result = EMPTY_RESULT
    else:
        if options.debug:
            dump_tokens(classify_source(source, cursor, settings.mode))
        result = scan(source, cursor, settings.mode)

    if options.format == "html":
        return render_html(source, result, settings.resolved_colors())
    return render_json(result)


def _write_output(options: CliOptions, text: str) -> None:
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-render on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write_output(options, highlight_file(options))
                    print(f"Highlighted {options.input_file}", file=sys.stderr)
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ConfigError as exc:
        config_name = args.config or CONFIG_FILENAME
        print(exc.format(config_name), file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        output = highlight_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 1

    _write_output(options, output)
    return 0
