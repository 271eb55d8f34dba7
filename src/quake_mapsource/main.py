#!/usr/bin/env python3
"""
quake-mapsource - command-line entry point.

Parses an idTech 1 MAP file and prints the resulting tree as a
human-readable dump, JSON, or normalised MAP source.

Exit status:
    0  success
    1  parse error or unusable settings (file or encoding)
    2  the input file could not be read
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .conversion import WRITER_NAMES, get_writer
from .errors import MapParseError, SettingsError
from .parsing import parse_file
from .settings import AppSettings, is_known_encoding, load_settings, load_settings_from_path

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quake-mapsource",
        description="Parse an idTech 1 MAP file and dump its entities and brushes.",
    )
    parser.add_argument("input", type=Path, help="MAP file to parse")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="write the dump here instead of stdout")
    parser.add_argument("-f", "--format", choices=WRITER_NAMES, default=None,
                        help="output format (default from settings: text)")
    parser.add_argument("--normals", action="store_true", default=None,
                        help="include derived plane normals in text/json dumps")
    parser.add_argument("--encoding", default=None, help="input text encoding")
    parser.add_argument("--config", type=Path, default=None,
                        help="settings JSON file (default ~/.config/quake_mapsource/settings.json)")
    parser.add_argument("--trace", action="store_true", default=None,
                        help="log every grammar rule attempt (implies --verbose)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="log errors only")
    return parser


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    """Merge saved settings with command-line overrides."""
    settings = load_settings_from_path(args.config) if args.config else load_settings()
    overrides = {}
    if args.format is not None:
        overrides["dump_format"] = args.format
    if args.normals:
        overrides["include_normals"] = True
    if args.encoding is not None:
        if not is_known_encoding(args.encoding):
            raise SettingsError(f"unknown encoding: {args.encoding}")
        overrides["encoding"] = args.encoding
    if args.trace:
        overrides["trace"] = True
    if args.verbose or args.trace:
        overrides["log_level"] = "DEBUG"
    elif args.quiet:
        overrides["log_level"] = "ERROR"
    return replace(settings, **overrides)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except SettingsError as e:
        _configure_logging("WARNING")
        print(f"quake-mapsource: {e}", file=sys.stderr)
        return 1
    _configure_logging(settings.log_level)

    try:
        map_data = parse_file(args.input, encoding=settings.encoding, trace=settings.trace)
    except (OSError, UnicodeDecodeError) as e:
        print(f"quake-mapsource: {e}", file=sys.stderr)
        return 2
    except MapParseError as e:
        print(f"quake-mapsource: {args.input}: {e}", file=sys.stderr)
        return 1

    writer = get_writer(
        settings.dump_format,
        include_normals=settings.include_normals,
        float_precision=settings.float_precision,
    )
    output = writer.write(map_data)

    if args.output is None:
        sys.stdout.write(output)
    else:
        try:
            args.output.write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"quake-mapsource: {e}", file=sys.stderr)
            return 2
        logger.info("Wrote %s dump to %s", writer.format_name(), args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
