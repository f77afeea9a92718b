"""parse_opts: resolve an argument list against option specs.

A single left-to-right scan over the tokens produced by tokens.tokenize().
Malformed input never raises; every problem becomes a string in
ParseResult.errors, in encounter order. Only invalid declarations
(SpecError) abort before scanning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, cast

from optspec.parsing import errors as err
from optspec.parsing.spec import OptionSpec, compile_specs, default_options
from optspec.parsing.summary import summarize
from optspec.parsing.tokens import ARGUMENT, UNKNOWN, Token, build_flag_table, tokenize

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    options: dict[str, Any] = field(default_factory=dict)
    arguments: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    summary: str = ""

    @property
    def ok(self) -> bool:
        return not self.errors


def _first_failure(spec: OptionSpec, candidate: Any) -> str | None:
    """Message of the first failing check. A check that raises counts as failed."""
    for predicate, message in spec.checks():
        try:
            passed = predicate(candidate)
        except Exception as e:
            log.debug("Validator for %s raised on %r: %s", spec.long_flag, candidate, e)
            if message is None:
                return err.describe_cause(e)
            return err.render_message(message, candidate)
        if not passed:
            return err.render_message(message, candidate)
    return None


def _apply(options: dict[str, Any], spec: OptionSpec, token: Token) -> str | None:
    """Fold one option token into options. Returns an error string or None."""
    raw: str | None = None
    if spec.takes_value:
        if token.value is None:
            return err.missing_argument(token.text, spec.placeholder or "")
        raw = token.value
        parsed: Any = raw
    else:
        parsed = not token.negated
    if spec.parse_fn is not None:
        try:
            parsed = spec.parse_fn(parsed)
        except Exception as e:
            log.debug("parse_fn for %s rejected %r: %s", token.text, parsed, e)
            return err.parse_failure(token.text, raw, e)

    key = cast(str, spec.id)
    current = options.get(key)
    if spec.update_fn is not None:
        candidate = spec.update_fn(current)
    elif spec.assoc_fn is not None:
        candidate = spec.assoc_fn(current, parsed)
    else:
        candidate = parsed

    message = _first_failure(spec, candidate)
    if message is not None:
        return err.validation_failure(token.text, raw, message)
    options[key] = candidate
    return None


def parse_opts(
    args: Sequence[str],
    specs: Iterable[OptionSpec | Mapping[str, Any]],
    *,
    in_order: bool = False,
    no_defaults: bool = False,
    summary_fn: Callable[[Sequence[OptionSpec]], str] = summarize,
) -> ParseResult:
    """Parse args against specs.

    Args:
        args: Raw argument tokens (without the program name).
        specs: OptionSpec instances or mappings of OptionSpec field names.
        in_order: Stop option processing at the first positional argument.
        no_defaults: Do not seed options with declared defaults.
        summary_fn: Formatter for the summary; receives the compiled specs.

    Returns:
        ParseResult with options, positional arguments, errors and summary.

    Raises:
        SpecError: If the declarations are malformed or ambiguous.
    """
    compiled = compile_specs(specs)
    table = build_flag_table(compiled)
    options: dict[str, Any] = {} if no_defaults else default_options(compiled)
    arguments: list[str] = []
    errors: list[str] = []
    supplied: set[str] = set()

    for token in tokenize(args, table, in_order=in_order):
        if token.kind == ARGUMENT:
            arguments.append(token.text)
            continue
        if token.kind == UNKNOWN:
            errors.append(err.unknown_option(token.text))
            continue
        spec = cast(OptionSpec, token.spec)
        supplied.add(cast(str, spec.id))
        error = _apply(options, spec, token)
        if error is not None:
            errors.append(error)

    for spec in compiled:
        if spec.required and spec.id not in supplied:
            errors.append(spec.required)

    log.debug(
        "Parsed %d args: %d options, %d arguments, %d errors",
        len(args),
        len(options),
        len(arguments),
        len(errors),
    )
    return ParseResult(options, arguments, errors, summary_fn(compiled))
