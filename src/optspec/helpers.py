"""Shared helpers for option specs (parse functions, accumulators, validators).

Used by callers building OptionSpec lists and by specfile, which resolves the
names in YAML spec files through the PARSERS / ACCUMULATORS / UPDATERS /
VALIDATORS registries.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from optspec.parsing.errors import ParseError

# --- Parse functions (str -> value) ---


def parse_int(s: str) -> int:
    """Decimal, or prefixed 0x / 0o / 0b (e.g. 0x10 -> 16)."""
    return int(s.strip(), 0)


def parse_float(s: str) -> float:
    return float(s)


_TRUE = frozenset({"1", "true", "yes", "on", "y"})
_FALSE = frozenset({"0", "false", "no", "off", "n"})


def parse_bool(s: str) -> bool:
    v = s.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    msg = f"Not a boolean: {s!r}"
    raise ParseError(msg)


def parse_port(s: str) -> int:
    """TCP/UDP port number, 1..65535."""
    port = parse_int(s)
    if not 0 < port < 65536:
        msg = f"Port must be between 1 and 65535, got {port}"
        raise ParseError(msg)
    return port


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --project-root, --spec)."""
    return Path(s).resolve()


def parse_csv(s: str) -> list[str]:
    """Comma-separated list, items stripped, empty items dropped."""
    return [part.strip() for part in s.split(",") if part.strip()]


# --- Accumulators: assoc_fn (current, parsed) and update_fn (current) ---


def collect(current: Any, value: Any) -> list[Any]:
    """Append to a list; a missing or non-list current value starts a new one."""
    items = list(current) if isinstance(current, list) else []
    items.append(value)
    return items


def keep_max(current: Any, value: Any) -> Any:
    return value if current is None else max(current, value)


def keep_min(current: Any, value: Any) -> Any:
    return value if current is None else min(current, value)


def count(current: Any) -> int:
    """update_fn for repeatable boolean flags: -vvv -> 3."""
    return (current or 0) + 1


# --- Validators (factories returning predicates) ---


def in_range(lo: float, hi: float) -> Callable[[Any], bool]:
    """lo <= value < hi."""

    def check(value: Any) -> bool:
        return lo <= value < hi

    return check


def one_of(*choices: Any) -> Callable[[Any], bool]:
    allowed = frozenset(choices)

    def check(value: Any) -> bool:
        return value in allowed

    return check


def matches(pattern: str) -> Callable[[Any], bool]:
    """Full match of str(value) against pattern."""
    rx = re.compile(pattern)

    def check(value: Any) -> bool:
        return rx.fullmatch(str(value)) is not None

    return check


# --- Registries (names usable in YAML spec files) ---

PARSERS: dict[str, Callable[[str], Any]] = {
    "int": parse_int,
    "float": parse_float,
    "bool": parse_bool,
    "port": parse_port,
    "path": path_resolver,
    "csv": parse_csv,
}

ACCUMULATORS: dict[str, Callable[[Any, Any], Any]] = {
    "collect": collect,
    "max": keep_max,
    "min": keep_min,
}

UPDATERS: dict[str, Callable[[Any], Any]] = {
    "count": count,
}

VALIDATORS: dict[str, Callable[..., Callable[[Any], bool]]] = {
    "range": in_range,
    "choices": one_of,
    "pattern": matches,
}
