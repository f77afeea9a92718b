"""Load option specs from YAML.

Spec file format:
- options: list of entries, each a mapping with
  - long (required), short, arg, desc, id, default, default_desc
  - parse: name from helpers.PARSERS (int, float, bool, port, path, csv)
  - assoc: name from helpers.ACCUMULATORS (collect, max, min)
  - update: name from helpers.UPDATERS (count)
  - validate: list of rules {range: [lo, hi]} | {choices: [...]} | {pattern: "..."},
    each with an optional msg
  - required: message text, or true for a generic message
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from optspec.helpers import ACCUMULATORS, PARSERS, UPDATERS, VALIDATORS
from optspec.parsing import OptionSpec, SpecError, compile_specs

log = logging.getLogger(__name__)

# YAML key -> OptionSpec field, for keys copied through unchanged
PLAIN_KEYS = {
    "long": "long_flag",
    "short": "short_flag",
    "arg": "placeholder",
    "desc": "description",
    "id": "id",
    "default": "default",
    "default_desc": "default_desc",
}
NAMED_KEYS: dict[str, tuple[str, dict[str, Callable[..., Any]]]] = {
    "parse": ("parse_fn", PARSERS),
    "assoc": ("assoc_fn", ACCUMULATORS),
    "update": ("update_fn", UPDATERS),
}
KNOWN_KEYS = {*PLAIN_KEYS, *NAMED_KEYS, "validate", "required"}


def _lookup(where: str, key: str, name: Any, registry: dict[str, Callable[..., Any]]) -> Any:
    if not isinstance(name, str) or name not in registry:
        choices = ", ".join(sorted(registry))
        msg = f"{where}: unknown {key} {name!r} (choose from {choices})"
        raise SpecError(msg)
    return registry[name]


def _validator(where: str, rule: Any) -> tuple[Callable[[Any], bool], Any]:
    if not isinstance(rule, Mapping):
        msg = f"{where}: validate rules must be mappings, got {rule!r}"
        raise SpecError(msg)
    kinds = [k for k in rule if k in VALIDATORS]
    extra = sorted(set(rule) - set(VALIDATORS) - {"msg"})
    if len(kinds) != 1 or extra:
        msg = f"{where}: each validate rule needs exactly one of {', '.join(VALIDATORS)} (and optional msg)"
        raise SpecError(msg)
    kind = kinds[0]
    arg = rule[kind]
    if kind == "range":
        if not isinstance(arg, list) or len(arg) != 2:
            msg = f"{where}: range must be [lo, hi]"
            raise SpecError(msg)
        predicate = VALIDATORS[kind](*arg)
    elif kind == "choices":
        if not isinstance(arg, list):
            msg = f"{where}: choices must be a list"
            raise SpecError(msg)
        predicate = VALIDATORS[kind](*arg)
    else:
        predicate = VALIDATORS[kind](str(arg))
    return predicate, rule.get("msg")


def _entry_to_fields(where: str, entry: Any) -> dict[str, Any]:
    if not isinstance(entry, Mapping):
        msg = f"{where}: expected a mapping, got {type(entry).__name__}"
        raise SpecError(msg)
    unknown = sorted(set(entry) - KNOWN_KEYS)
    if unknown:
        msg = f"{where}: unknown key(s) {', '.join(map(str, unknown))}"
        raise SpecError(msg)
    if "long" not in entry:
        msg = f"{where}: 'long' is required"
        raise SpecError(msg)

    out: dict[str, Any] = {PLAIN_KEYS[k]: v for k, v in entry.items() if k in PLAIN_KEYS}
    for key, (field_name, registry) in NAMED_KEYS.items():
        if key in entry:
            out[field_name] = _lookup(where, key, entry[key], registry)
    rules = entry.get("validate") or []
    if not isinstance(rules, list):
        rules = [rules]
    if rules:
        out["validators"] = tuple(_validator(where, r) for r in rules)
    required = entry.get("required")
    if required is True:
        out["required"] = f'Missing required option "{entry["long"]}"'
    elif required:
        out["required"] = str(required)
    return out


def specs_from_data(data: Any, source: str = "<data>") -> list[OptionSpec]:
    """Build compiled specs from an already-loaded spec document."""
    if not isinstance(data, Mapping):
        msg = f"{source}: top level must be a mapping with an 'options' list"
        raise SpecError(msg)
    entries = data.get("options") or []
    if not isinstance(entries, list):
        msg = f"{source}: 'options' must be a list"
        raise SpecError(msg)
    fields = [_entry_to_fields(f"{source}: option #{i}", e) for i, e in enumerate(entries)]
    try:
        return compile_specs(fields)
    except SpecError as e:
        msg = f"{source}: {e}"
        raise SpecError(msg) from e


def load_spec_file(path: Path) -> list[OptionSpec]:
    """Load and compile option specs from a YAML file. Raises SpecError on any problem."""
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        msg = f"{path}: invalid YAML: {e}"
        raise SpecError(msg) from e
    except OSError as e:
        msg = f"{path}: cannot read spec file: {e}"
        raise SpecError(msg) from e
    specs = specs_from_data(data, str(path))
    log.debug("Loaded %d option specs from %s", len(specs), path)
    return specs
