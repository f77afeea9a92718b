"""Pytest fixtures for optspec tests."""

from pathlib import Path

import pytest

from optspec.helpers import parse_int
from optspec.parsing import OptionSpec


@pytest.fixture
def count_specs() -> list[OptionSpec]:
    """-n/--count COUNT (int, default 1, must be < 100) plus a boolean and a help flag."""
    return [
        OptionSpec(
            "--count",
            "-n",
            "COUNT",
            "How many times",
            default=1,
            parse_fn=parse_int,
            validate_fn=lambda n: n < 100,
            validate_msg="Must be less than 100",
        ),
        OptionSpec("--verbose", "-v", description="Chatty output"),
        OptionSpec("--help", "-h", description="Show help"),
    ]


@pytest.fixture
def write_spec(tmp_path: Path):
    """Write YAML text to a spec file under tmp_path and return its path."""

    def _write(text: str, name: str = "spec.yaml") -> Path:
        p = tmp_path / name
        p.write_text(text)
        return p

    return _write


SERVER_SPEC_YAML = """\
options:
  - short: -p
    long: --port
    arg: PORT
    desc: Port number
    default: 80
    parse: port
    validate:
      - range: [1, 1024]
        msg: Must be below 1024
  - short: -v
    long: --verbose
    desc: Verbosity level
    default: 0
    update: count
  - long: --tag
    arg: TAG
    desc: Tag to apply (repeatable)
    assoc: collect
  - long: --[no-]daemon
    desc: Run in the background
    default: true
"""


@pytest.fixture
def server_spec(write_spec) -> Path:
    return write_spec(SERVER_SPEC_YAML, "server.yaml")
