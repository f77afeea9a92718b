"""optspec: declarative command-line option parsing.

Declare options as OptionSpec records (or in a YAML spec file) and call
parse_opts(args, specs) to get options, positional arguments, errors and a
help summary back.
"""

from optspec.parsing import (
    NO_DEFAULT,
    OptionSpec,
    ParseError,
    ParseResult,
    SpecError,
    compile_specs,
    parse_opts,
    summarize,
)

__all__ = [
    "NO_DEFAULT",
    "OptionSpec",
    "ParseError",
    "ParseResult",
    "SpecError",
    "compile_specs",
    "parse_opts",
    "summarize",
]

__version__ = "0.1.0"
