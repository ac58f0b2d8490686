#!/usr/bin/env python3
"""Command-line interface for snapmatch."""

import re
import sys
import difflib
import argparse
import logging
from pathlib import Path

from .config import MatchConfig, build_redactions, get_config, load_config
from .data import Data, DataFormat
from .exceptions import SnapMatchError
from .filter.exceptions import RedactionError
from .filter.normalize import NormalizeToExpected
from .filter.pattern import line_matches
from .filter.redact import Redactions

_FORMAT_CHOICES = {fmt.value: fmt for fmt in DataFormat if fmt is not DataFormat.ERROR}


def _parse_assignment(value: str) -> tuple:
    placeholder, sep, replacement = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {value!r}")
    return placeholder, replacement


def _redactions_for(args, config: MatchConfig) -> Redactions:
    redactions = build_redactions(config)
    try:
        for placeholder, literal in args.redact or []:
            redactions.insert(placeholder, literal)
        for placeholder, regex in args.redact_regex or []:
            redactions.insert(placeholder, re.compile(regex))
    except re.error as exc:
        raise SnapMatchError(f"Bad regex: {exc}") from exc
    except RedactionError as exc:
        raise SnapMatchError(str(exc)) from exc
    return redactions


def _load(path: str, fmt) -> Data:
    return Data.try_read_from(Path(path), _FORMAT_CHOICES[fmt] if fmt else None)


def cmd_normalize(args, config: MatchConfig) -> int:
    redactions = _redactions_for(args, config)
    actual = config.prepare(_load(args.actual, args.format))
    pattern = config.prepare(_load(args.pattern, args.format))

    normalized = NormalizeToExpected(redactions, pattern).filter(actual)

    if args.output:
        normalized.write_to(Path(args.output))
        print(f"Wrote normalized output to {args.output}")
        return 0

    rendered = normalized.render()
    if rendered is None:
        print(f"<binary {len(normalized.inner)} bytes>")
        return 0

    if not args.diff:
        sys.stdout.write(rendered)
        return 0

    diff = list(
        difflib.unified_diff(
            (pattern.render() or "").splitlines(),
            rendered.splitlines(),
            fromfile=args.pattern,
            tofile=args.actual,
            lineterm="",
        )
    )
    if not diff:
        print("No differences after normalization.")
        return 0
    for line in diff:
        print(line)
    return 1


def cmd_match(args, config: MatchConfig) -> int:
    redactions = _redactions_for(args, config)
    line = redactions.redact(args.line)
    if line_matches(line, args.pattern, redactions):
        print("match")
        return 0
    print("no match")
    return 1


def cmd_redact(args, config: MatchConfig) -> int:
    redactions = _redactions_for(args, config)
    data = config.prepare(_load(args.file, None))
    rendered = data.render()
    if rendered is None:
        raise SnapMatchError(f"{args.file} has no text form")
    sys.stdout.write(redactions.redact(rendered))
    return 0


def _configure_logging(debug: bool, config: MatchConfig) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG)
        return

    level_name = config.log_level
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        logging.warning(
            "Unknown log level '%s' in configuration. Falling back to INFO.",
            level_name,
        )
        level = logging.INFO
    logging.basicConfig(level=level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapmatch",
        description="Normalize captured output to an expected pattern",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", help="Path to a JSON5 configuration file")

    redact_parent = argparse.ArgumentParser(add_help=False)
    redact_parent.add_argument(
        "--redact",
        action="append",
        type=_parse_assignment,
        metavar="NAME=VALUE",
        help="Redact a literal value as [NAME]",
    )
    redact_parent.add_argument(
        "--redact-regex",
        action="append",
        type=_parse_assignment,
        metavar="NAME=REGEX",
        help="Redact matches of REGEX as [NAME]",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    normalize_parser = subparsers.add_parser(
        "normalize", parents=[redact_parent], help="Normalize actual output to a pattern"
    )
    normalize_parser.add_argument("actual", help="File holding the actual output")
    normalize_parser.add_argument("pattern", help="File holding the expected pattern")
    normalize_parser.add_argument(
        "--format", choices=sorted(_FORMAT_CHOICES), help="Override format detection"
    )
    normalize_parser.add_argument(
        "--diff", action="store_true", help="Show a unified diff against the pattern"
    )
    normalize_parser.add_argument("--output", help="Write the normalized output to a file")
    normalize_parser.set_defaults(func=cmd_normalize)

    match_parser = subparsers.add_parser(
        "match", parents=[redact_parent], help="Check one line against a pattern line"
    )
    match_parser.add_argument("line")
    match_parser.add_argument("pattern")
    match_parser.set_defaults(func=cmd_match)

    redact_parser = subparsers.add_parser(
        "redact", parents=[redact_parent], help="Print a file with redactions applied"
    )
    redact_parser.add_argument("file")
    redact_parser.set_defaults(func=cmd_redact)

    return parser


def main(argv=None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_config()
    except SnapMatchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    _configure_logging(args.debug, config)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return args.func(args, config)
    except SnapMatchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
