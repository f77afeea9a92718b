"""CLI for spec files: optspec check | summary."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from optspec.cli.parse_common import CHECK_OPTIONS, SUMMARY_OPTIONS, parse_command_args
from optspec.parsing import OptionSpec, ParseResult, SpecError, parse_opts, summarize
from optspec.specfile import load_spec_file

CHECK_USAGE = (
    "Usage: optspec check --spec <file> [--json] [--in-order] [--no-defaults] [-- ARGS...]"
)
SUMMARY_USAGE = "Usage: optspec summary --spec <file>"


def _plain(value: Any) -> Any:
    """Reduce parsed option values to YAML/JSON-safe types."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(v) for v in value)
    return str(value)


def _load(spec_path: Path) -> list[OptionSpec] | None:
    try:
        return load_spec_file(spec_path)
    except SpecError as e:
        print(f"❌ {e}", file=sys.stderr)
        return None


def print_result(result: ParseResult, *, json_out: bool = False) -> None:
    payload = {
        "options": _plain(result.options),
        "arguments": list(result.arguments),
        "errors": list(result.errors),
    }
    if json_out:
        print(json.dumps(payload, indent=2))
        return
    print(
        yaml.safe_dump(
            {"options": payload["options"], "arguments": payload["arguments"]},
            default_flow_style=False,
            sort_keys=False,
        ),
        end="",
    )
    for e in result.errors:
        print(f"❌ {e}", file=sys.stderr)
    if result.ok:
        print("✅ No errors")


def run_check(
    spec_path: Path,
    args: Sequence[str],
    *,
    json_out: bool = False,
    in_order: bool = False,
    no_defaults: bool = False,
) -> int:
    """Parse args against the spec file. Returns 0 on success, 1 on parse errors, 2 on a bad spec file."""
    specs = _load(spec_path)
    if specs is None:
        return 2
    result = parse_opts(args, specs, in_order=in_order, no_defaults=no_defaults)
    print_result(result, json_out=json_out)
    return 0 if result.ok else 1


def run_summary(spec_path: Path) -> int:
    """Print the help summary for the spec file. Returns 0, or 2 on a bad spec file."""
    specs = _load(spec_path)
    if specs is None:
        return 2
    print(summarize(specs))
    return 0


def run_check_argv() -> None:
    """optspec check --spec <file> [--json] [--in-order] [--no-defaults] [-- ARGS...]."""
    parsed = parse_command_args(CHECK_USAGE, sys.argv[2:], CHECK_OPTIONS, allow_arguments=True)
    opts = parsed.options
    rc = run_check(
        opts["spec"],
        parsed.arguments,
        json_out=bool(opts.get("json")),
        in_order=bool(opts.get("in_order")),
        no_defaults=bool(opts.get("no_defaults")),
    )
    sys.exit(rc)


def run_summary_argv() -> None:
    """optspec summary --spec <file>."""
    parsed = parse_command_args(SUMMARY_USAGE, sys.argv[2:], SUMMARY_OPTIONS)
    sys.exit(run_summary(parsed.options["spec"]))
