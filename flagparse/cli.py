#!/usr/bin/env python3
"""Command-line interface for trying flag definitions against arguments."""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .definitions import Flag, Options
from .flag_types import FlagType
from .parser import Parser
from .version import __version_display__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flagparse",
        usage="%(prog)s [--define SPEC ...] [OPTIONS] -- ARGS...",
        description="Parse ARGS with the flags declared through --define and "
                    "print the resulting values and flagless arguments.")
    parser.add_argument(
        "--define",
        metavar="SPEC",
        action="append",
        default=[],
        help="Declare a flag as name[:type[:alias,alias...[:description]]]. "
             "Type is string, number or bool (default: string). Repeatable.")
    parser.add_argument(
        "--prefix",
        default=Options.flag_prefix,
        help="Prefix marking a token as a flag (default: %(default)s).")
    parser.add_argument(
        "--separator",
        default=Options.separator,
        help="Separator between a flag id and its inline value (default: %(default)s).")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip unknown flags instead of failing.")
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the declared flags and exit.")
    parser.add_argument( '-log',
        '--loglevel',
        default='warning',
        help='Provide logging level. Example --loglevel debug, default=warning' )
    parser.add_argument(
        "--version",
        action="version",
        version=__version_display__)

    return parser


def split_argv(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Split the front end's own options from the arguments to parse."""
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1:]
    return argv, []


def parse_definition(spec: str) -> Flag:
    """Build a flag from ``name[:type[:alias,alias...[:description]]]``."""
    parts = spec.split(":", 3)
    name = parts[0].strip()
    if not name:
        raise ValueError(f"Flag definition '{spec}' has no name.")

    flag_type = FlagType.STRING
    if len(parts) > 1 and parts[1].strip():
        flag_type = FlagType.from_name(parts[1])

    aliases = []
    if len(parts) > 2:
        aliases = [alias.strip() for alias in parts[2].split(",") if alias.strip()]

    description = parts[3] if len(parts) > 3 else ""
    return Flag(name, description, flag_type, aliases)


def format_value(flag: Flag) -> str:
    if flag.type == FlagType.NUMBER and flag.value.is_integer():
        return str(int(flag.value))
    if flag.type == FlagType.BOOL:
        return "true" if flag.value else "false"
    return str(flag.value)


def format_report(parser: Parser) -> str:
    lines = []
    for flag in parser.flags:
        marker = "*" if flag.triggered else " "
        lines.append(f"{marker} {flag.name}={format_value(flag)}")
    lines.append("args: " + " ".join(parser.args))
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    own_args, tokens = split_argv(list(argv))

    arg_parser = build_parser()
    args = arg_parser.parse_args(own_args)

    logging.basicConfig(level=args.loglevel.upper())

    try:
        options = Options(
            flag_prefix=args.prefix,
            separator=args.separator,
            strict_flags=not args.lenient)
        parser = Parser(options=options)
        for spec in args.define:
            parser.set(parse_definition(spec))
    except ValueError as exc:
        arg_parser.error(str(exc))

    if args.describe:
        print(parser.to_string(), end="")
        return 0

    result = parser.parse(tokens)
    if not result:
        print(f"error: {result.error} ({result.flag_id})", file=sys.stderr)
        return 1

    print(format_report(parser))
    return 0


if __name__ == "__main__":
    sys.exit(main())
