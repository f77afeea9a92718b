"""Help summary: one aligned line per option spec."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from optspec.parsing.spec import NO_DEFAULT, OptionSpec

INDENT = "  "
GAP = "  "


def render_value(value: Any) -> str:
    """Booleans lower-case, None as "none", everything else via str()."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "none"
    return str(value)


def flag_column(spec: OptionSpec) -> str:
    """"-p, --port PORT"; long-only flags are padded so long names line up."""
    short = f"{spec.short_flag}, " if spec.short_flag else "    "
    text = f"{short}{spec.long_flag}"
    if spec.placeholder:
        text = f"{text} {spec.placeholder}"
    return text


def default_column(spec: OptionSpec) -> str:
    if spec.default_desc is not None:
        return f"({spec.default_desc})"
    if spec.default is not NO_DEFAULT:
        return f"({render_value(spec.default)})"
    return ""


def summarize(specs: Sequence[OptionSpec]) -> str:
    """Format specs as help text.

    Column widths come from the longest flag column and the longest
    description, so the output depends only on the specs.
    """
    if not specs:
        return ""
    rows = [(flag_column(s), s.description or "", default_column(s)) for s in specs]
    flag_width = max(len(r[0]) for r in rows)
    desc_width = max(len(r[1]) for r in rows)
    lines = []
    for flags, desc, default in rows:
        line = INDENT + flags.ljust(flag_width)
        if desc_width:
            line += GAP + desc.ljust(desc_width)
        if default:
            line += GAP + default
        lines.append(line.rstrip())
    return "\n".join(lines)
