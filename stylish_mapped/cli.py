#!/usr/bin/env python3
"""
Entry point for the stylish-mapped CLI.

Reads the JSON output of an ESLint-style linter and prints the stylish
report, with positions remapped through source maps.

Usage examples:
  eslint -f json dist/ | stylish-mapped
  stylish-mapped report.json --color always
  stylish-mapped report.json --no-source-maps -o report.txt
"""

import argparse
import json
import sys

from colorama import just_fix_windows_console

from stylish_mapped.config import Config, ConfigError
from stylish_mapped.formatter import StylishFormatter
from stylish_mapped.utils.file_utils import read_text_file, write_text_file
from stylish_mapped.utils.logger import get_logger
from stylish_mapped.utils.metadata import LintResult
from stylish_mapped.utils.settings import COLOR_MODES

LOG = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stylish-mapped",
        description="Format ESLint JSON results as a stylish report, remapped through source maps.",
    )
    parser.add_argument(
        "report",
        nargs="?",
        default="-",
        help="ESLint JSON report to read (default: stdin)"
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to config file (TOML/YAML/INI). If omitted, will search in cwd for stylish-mapped.toml, etc."
    )
    parser.add_argument(
        "--no-source-maps",
        action="store_true",
        help="Report positions as given, without consulting source maps"
    )
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        help="Colorize output (default: from config, else auto)"
    )
    parser.add_argument(
        "-o", "--output",
        help="Write the report to a file instead of stdout"
    )
    return parser


def _read_results(report: str):
    if report == "-":
        text = sys.stdin.read()
    else:
        text = read_text_file(report)
    raw = json.loads(text) if text.strip() else []
    if not isinstance(raw, list):
        raise ValueError("expected a JSON array of lint results")
    return [LintResult.from_dict(item) for item in raw]


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        parser.error(str(e))
    if args.no_source_maps:
        config.source_maps = False
    if args.color:
        config.color = args.color

    try:
        results = _read_results(args.report)
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        parser.error(f"invalid lint results in {args.report}: {e}")
    LOG.debug("Read %d lint result(s)", len(results))

    # Files only get colors with --color always.
    stream = None if args.output else sys.stdout
    formatter = StylishFormatter.from_config(config, stream=stream)
    report = formatter.format(results)
    summary = formatter.summarize(results)

    if args.output:
        LOG.info("Writing report to %s", args.output)
        write_text_file(args.output, report)
    elif report:
        just_fix_windows_console()
        sys.stdout.write(report)

    return 1 if summary.errors else 0


if __name__ == "__main__":
    sys.exit(main())
