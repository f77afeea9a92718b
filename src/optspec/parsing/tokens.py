"""Token classification: split raw argv into option, argument and unknown tokens.

The tokenizer owns all lexical concerns (literal mode after "--", inline
"--name=value", attached "-pVALUE", clustered "-abc", and the lookahead that
consumes an option's value). It never records errors itself; the parser
turns OPTION tokens without a value and UNKNOWN tokens into error strings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from optspec.parsing.spec import OptionSpec

log = logging.getLogger(__name__)

LITERAL_SEPARATOR = "--"

OPTION = "option"
ARGUMENT = "argument"
UNKNOWN = "unknown"


@dataclass(frozen=True)
class FlagMatch:
    spec: OptionSpec
    negated: bool = False


@dataclass(frozen=True)
class Token:
    """One classified token.

    For OPTION tokens, text is the flag as the user wrote it (without any
    inline value) and value is the raw option argument, or None for boolean
    flags and for value-taking flags whose argument is missing.
    """

    kind: str
    text: str
    spec: OptionSpec | None = None
    value: str | None = None
    negated: bool = False


def build_flag_table(specs: Iterable[OptionSpec]) -> dict[str, FlagMatch]:
    """Map every accepted flag string (-p, --port, --no-daemon) to its spec."""
    table: dict[str, FlagMatch] = {}
    for spec in specs:
        if spec.short_flag is not None:
            table[spec.short_flag] = FlagMatch(spec)
        long_names = spec.long_names
        table[long_names[0]] = FlagMatch(spec)
        if len(long_names) > 1:
            table[long_names[1]] = FlagMatch(spec, negated=True)
    return table


def is_flag_like(token: str) -> bool:
    return token.startswith("-") and token != "-"


def names_known_flag(token: str, table: dict[str, FlagMatch]) -> bool:
    """True if token would be read as a recognised option (or is the separator)."""
    if token == LITERAL_SEPARATOR or token in table:
        return True
    if token.startswith("--"):
        head, sep, _ = token.partition("=")
        return bool(sep) and head in table
    return token.startswith("-") and len(token) > 2 and token[:2] in table


class _Scanner:
    def __init__(self, args: Sequence[str], table: dict[str, FlagMatch], in_order: bool):
        self.args = list(args)
        self.table = table
        self.in_order = in_order
        self.pos = 0
        self.literal = False

    def next_value(self) -> str | None:
        """Consume the following token as an option argument, if it can be one."""
        if self.pos >= len(self.args):
            return None
        candidate = self.args[self.pos]
        if names_known_flag(candidate, self.table):
            return None
        self.pos += 1
        return candidate

    def option(self, flag: str, match: FlagMatch, inline: str | None = None) -> Token:
        value = None
        if match.spec.takes_value:
            value = inline if inline is not None else self.next_value()
        return Token(OPTION, flag, match.spec, value, match.negated)

    def long_option(self, token: str) -> Iterator[Token]:
        match = self.table.get(token)
        if match is not None:
            yield self.option(token, match)
            return
        head, sep, inline = token.partition("=")
        match = self.table.get(head)
        if sep and match is not None and match.spec.takes_value:
            yield self.option(head, match, inline)
            return
        yield Token(UNKNOWN, token)

    def short_options(self, token: str) -> Iterator[Token]:
        match = self.table.get(token)
        if match is not None:
            yield self.option(token, match)
            return
        if token[:2] not in self.table:
            yield Token(UNKNOWN, token)
            return
        # -abc cluster, or -pVALUE when a value-taking flag is reached
        rest = token[1:]
        while rest:
            flag, rest = f"-{rest[0]}", rest[1:]
            match = self.table.get(flag)
            if match is None:
                yield Token(UNKNOWN, flag)
                continue
            if match.spec.takes_value:
                yield self.option(flag, match, rest or None)
                return
            yield self.option(flag, match)

    def __iter__(self) -> Iterator[Token]:
        while self.pos < len(self.args):
            token = self.args[self.pos]
            self.pos += 1
            if self.literal:
                yield Token(ARGUMENT, token)
            elif token == LITERAL_SEPARATOR:
                log.debug("Literal mode from argument %d", self.pos)
                self.literal = True
            elif token.startswith("--"):
                yield from self.long_option(token)
            elif is_flag_like(token):
                yield from self.short_options(token)
            else:
                if self.in_order:
                    log.debug("First positional %r ends option scanning", token)
                    self.literal = True
                yield Token(ARGUMENT, token)


def tokenize(
    args: Sequence[str],
    table: dict[str, FlagMatch],
    *,
    in_order: bool = False,
) -> Iterator[Token]:
    """Classify args left to right against the flag table.

    With in_order=True the first positional argument switches to literal mode,
    so options after it are passed through untouched.
    """
    return iter(_Scanner(args, table, in_order))
