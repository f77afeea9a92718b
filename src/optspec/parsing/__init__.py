"""Declarative option parsing: specs in, options/arguments/errors/summary out."""

from .errors import ParseError, SpecError
from .parser import ParseResult, parse_opts
from .spec import NO_DEFAULT, OptionSpec, compile_specs, default_options, derive_id
from .summary import summarize
from .tokens import build_flag_table, tokenize

__all__ = [
    "NO_DEFAULT",
    "OptionSpec",
    "ParseError",
    "ParseResult",
    "SpecError",
    "build_flag_table",
    "compile_specs",
    "default_options",
    "derive_id",
    "parse_opts",
    "summarize",
    "tokenize",
]
