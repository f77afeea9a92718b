"""Option declarations: OptionSpec, flag/id derivation, and compile-time checks.

An OptionSpec describes one recognised option. compile_specs() turns a list of
specs (or plain mappings with the same field names) into validated specs with
ids filled in, and raises SpecError on malformed or clashing declarations.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, fields, replace
from typing import Any

from optspec.parsing.errors import SpecError

log = logging.getLogger(__name__)

LONG_FLAG_RE = re.compile(r"^--(?P<negatable>\[no-\])?(?P<name>[A-Za-z0-9][A-Za-z0-9-]*)$")
SHORT_FLAG_RE = re.compile(r"^-[A-Za-z0-9]$")

# Fields that must be str or None; YAML turns bare numbers into ints
TEXT_FIELDS = ("short_flag", "placeholder", "id", "description", "default_desc", "required")


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()

Validator = tuple[Callable[[Any], bool], Any]


@dataclass(frozen=True)
class OptionSpec:
    """One declared option.

    long_flag is required; "--[no-]name" declares a boolean flag that also
    accepts "--no-name" to set False. A placeholder means the option consumes
    a value, otherwise it is a boolean flag.
    """

    long_flag: str
    short_flag: str | None = None
    placeholder: str | None = None
    description: str | None = None
    id: str | None = None
    default: Any = NO_DEFAULT
    default_fn: Callable[[], Any] | None = None
    default_desc: str | None = None
    parse_fn: Callable[[Any], Any] | None = None
    assoc_fn: Callable[[Any, Any], Any] | None = None
    update_fn: Callable[[Any], Any] | None = None
    validate_fn: Callable[[Any], bool] | None = None
    validate_msg: Any = None
    validators: Sequence[Validator] = ()
    required: str | None = None

    @property
    def takes_value(self) -> bool:
        return self.placeholder is not None

    @property
    def negatable(self) -> bool:
        return self.long_flag.startswith("--[no-]")

    @property
    def name(self) -> str:
        """Long flag name without dashes or the [no-] marker (e.g. "dry-run")."""
        return self.long_flag[len("--[no-]") :] if self.negatable else self.long_flag[2:]

    @property
    def long_names(self) -> tuple[str, ...]:
        """Long tokens that select this option; the --no- alias comes second."""
        if self.negatable:
            return (f"--{self.name}", f"--no-{self.name}")
        return (self.long_flag,)

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT or self.default_fn is not None

    def initial_value(self) -> Any:
        """The value seeded into options before the scan. Only valid if has_default."""
        if self.default is NO_DEFAULT and self.default_fn is not None:
            return self.default_fn()
        return self.default

    def checks(self) -> list[Validator]:
        """validate_fn/validate_msg first, then the extra validators, in order."""
        out: list[Validator] = []
        if self.validate_fn is not None:
            out.append((self.validate_fn, self.validate_msg))
        out.extend(self.validators)
        return out


def derive_id(long_flag: str) -> str:
    """--dry-run -> dry_run; --[no-]daemon -> daemon."""
    m = LONG_FLAG_RE.match(long_flag)
    if not m:
        msg = f"Invalid long flag: {long_flag!r}"
        raise SpecError(msg)
    return m.group("name").replace("-", "_")


def _coerce(entry: OptionSpec | Mapping[str, Any], index: int) -> OptionSpec:
    if isinstance(entry, OptionSpec):
        return entry
    if not isinstance(entry, Mapping):
        msg = f"Option #{index}: expected OptionSpec or mapping, got {type(entry).__name__}"
        raise SpecError(msg)
    allowed = {f.name for f in fields(OptionSpec)}
    unknown = sorted(set(entry) - allowed)
    if unknown:
        msg = f"Option #{index}: unknown field(s) {', '.join(unknown)}"
        raise SpecError(msg)
    if "long_flag" not in entry:
        msg = f"Option #{index}: long_flag is required"
        raise SpecError(msg)
    return OptionSpec(**entry)


def _check_shape(spec: OptionSpec) -> None:
    if not isinstance(spec.long_flag, str) or not LONG_FLAG_RE.match(spec.long_flag):
        msg = f"Invalid long flag: {spec.long_flag!r} (expected --name)"
        raise SpecError(msg)
    for name in TEXT_FIELDS:
        value = getattr(spec, name)
        if value is not None and not isinstance(value, str):
            msg = f"{spec.long_flag}: {name} must be a string, got {type(value).__name__} {value!r}"
            raise SpecError(msg)
    if spec.short_flag is not None and not SHORT_FLAG_RE.match(spec.short_flag):
        msg = f"Invalid short flag for {spec.long_flag}: {spec.short_flag!r} (expected -X)"
        raise SpecError(msg)
    if spec.negatable and spec.takes_value:
        msg = f"{spec.long_flag}: a negatable flag cannot take an argument"
        raise SpecError(msg)
    if spec.assoc_fn is not None and spec.update_fn is not None:
        msg = f"{spec.long_flag}: assoc_fn and update_fn are mutually exclusive"
        raise SpecError(msg)


def compile_specs(specs: Iterable[OptionSpec | Mapping[str, Any]]) -> list[OptionSpec]:
    """Validate declarations and fill derived ids.

    Raises SpecError on malformed flags and on duplicate ids, short flags or
    long flags (including the --no- alias of negatable flags).
    """
    compiled: list[OptionSpec] = []
    seen_ids: dict[str, str] = {}
    seen_flags: dict[str, str] = {}
    for index, entry in enumerate(specs):
        spec = _coerce(entry, index)
        _check_shape(spec)
        option_id = spec.id if spec.id is not None else derive_id(spec.long_flag)
        if spec.id is None:
            spec = replace(spec, id=option_id)
        if option_id in seen_ids:
            msg = f"Duplicate option id {option_id!r}: {seen_ids[option_id]} and {spec.long_flag}"
            raise SpecError(msg)
        seen_ids[option_id] = spec.long_flag
        flags = [*spec.long_names]
        if spec.short_flag is not None:
            flags.append(spec.short_flag)
        for flag in flags:
            if flag in seen_flags:
                msg = f"Duplicate flag {flag}: declared by {seen_flags[flag]} and {spec.long_flag}"
                raise SpecError(msg)
            seen_flags[flag] = spec.long_flag
        compiled.append(spec)
    log.debug("Compiled %d option specs", len(compiled))
    return compiled


def default_options(specs: Iterable[OptionSpec]) -> dict[str, Any]:
    """Map id -> default for every spec that declares one."""
    return {spec.id: spec.initial_value() for spec in specs if spec.has_default}
