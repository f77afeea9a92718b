"""Tests for optspec.parsing.tokens."""

from optspec.parsing import OptionSpec, build_flag_table, compile_specs, tokenize
from optspec.parsing.tokens import ARGUMENT, OPTION, UNKNOWN, names_known_flag


def _table():
    return build_flag_table(
        compile_specs(
            [
                OptionSpec("--port", "-p", "PORT"),
                OptionSpec("--verbose", "-v"),
                OptionSpec("--[no-]color"),
            ]
        )
    )


def _kinds(args, **kwargs):
    return [(t.kind, t.text, t.value) for t in tokenize(args, _table(), **kwargs)]


class TestBuildFlagTable:
    def test_contains_short_long_and_negated_aliases(self) -> None:
        table = _table()
        assert set(table) == {"-p", "--port", "-v", "--verbose", "--color", "--no-color"}
        assert table["--no-color"].negated is True
        assert table["--color"].negated is False
        assert table["-p"].spec is table["--port"].spec


class TestNamesKnownFlag:
    def test_recognises_flag_shapes(self) -> None:
        table = _table()
        assert names_known_flag("-p", table)
        assert names_known_flag("--port=1", table)
        assert names_known_flag("-p80", table)
        assert names_known_flag("--", table)

    def test_rejects_other_tokens(self) -> None:
        table = _table()
        assert not names_known_flag("-5", table)
        assert not names_known_flag("--bogus", table)
        assert not names_known_flag("value", table)
        assert not names_known_flag("-x80", table)


class TestTokenize:
    def test_option_with_following_value(self) -> None:
        assert _kinds(["-p", "80", "file"]) == [
            (OPTION, "-p", "80"),
            (ARGUMENT, "file", None),
        ]

    def test_inline_and_attached_values(self) -> None:
        assert _kinds(["--port=81", "-p82"]) == [(OPTION, "--port", "81"), (OPTION, "-p", "82")]

    def test_missing_value_has_none(self) -> None:
        assert _kinds(["--port"]) == [(OPTION, "--port", None)]

    def test_separator_not_emitted(self) -> None:
        assert _kinds(["--", "-v"]) == [(ARGUMENT, "-v", None)]

    def test_unknown_tokens(self) -> None:
        assert _kinds(["--what", "-z"]) == [(UNKNOWN, "--what", None), (UNKNOWN, "-z", None)]

    def test_negated_flag(self) -> None:
        tokens = list(tokenize(["--no-color"], _table()))
        assert tokens[0].negated is True
        assert tokens[0].spec.id == "color"

    def test_in_order(self) -> None:
        assert _kinds(["x", "-v"], in_order=True) == [(ARGUMENT, "x", None), (ARGUMENT, "-v", None)]

    def test_is_lazy_iterator(self) -> None:
        it = tokenize(["-v", "-v"], _table())
        assert next(it).text == "-v"
