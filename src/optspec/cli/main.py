"""Main CLI entry point for optspec."""

import sys

from optspec.cli import check_cmd


def _usage() -> None:
    print("Usage: optspec <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  check    - Parse arguments against a YAML option spec and report the result",
        file=sys.stderr,
    )
    print("  summary  - Print the help summary for a YAML option spec", file=sys.stderr)


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        _usage()
        sys.exit(1)

    command = sys.argv[1]

    if command == "check":
        check_cmd.run_check_argv()
    elif command == "summary":
        check_cmd.run_summary_argv()
    elif command in ("-h", "--help", "help"):
        _usage()
        sys.exit(0)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        _usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
