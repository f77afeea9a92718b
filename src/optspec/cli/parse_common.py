"""Shared CLI argument parsing for optspec subcommands (--spec, --json, --verbose, ...)."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from optspec.helpers import path_resolver
from optspec.parsing import OptionSpec, ParseResult, parse_opts

COMMON_OPTIONS = [
    OptionSpec(
        "--spec",
        "-s",
        "FILE",
        "YAML file declaring the options",
        parse_fn=path_resolver,
        required='Missing required option "--spec FILE"',
    ),
    OptionSpec("--verbose", "-v", description="Log debug output to stderr"),
    OptionSpec("--help", "-h", description="Show this help"),
]

CHECK_OPTIONS = [
    *COMMON_OPTIONS,
    OptionSpec("--json", description="Print the result as JSON"),
    OptionSpec("--in-order", description="Treat everything after the first positional as positional"),
    OptionSpec("--no-defaults", description="Do not seed options with declared defaults"),
]

SUMMARY_OPTIONS = COMMON_OPTIONS


def parse_command_args(
    usage: str,
    args: Sequence[str],
    specs: Sequence[OptionSpec],
    *,
    allow_arguments: bool = False,
) -> ParseResult:
    """Parse a subcommand's own flags; print usage and exit on --help or errors.

    Exits 0 for --help, 1 for parse errors. Sets up DEBUG logging for --verbose.
    """
    result = parse_opts(args, specs, in_order=allow_arguments)
    if result.options.get("help"):
        print(usage)
        print(result.summary)
        sys.exit(0)
    errors = list(result.errors)
    if result.arguments and not allow_arguments:
        errors.append(f"Unexpected argument(s): {' '.join(result.arguments)}")
    if errors:
        for e in errors:
            print(f"Error: {e}", file=sys.stderr)
        print(usage, file=sys.stderr)
        sys.exit(1)
    if result.options.get("verbose"):
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return result
