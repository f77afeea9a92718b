"""Tests for optspec.parsing.spec (OptionSpec, compile_specs)."""

import pytest

from optspec.parsing import NO_DEFAULT, OptionSpec, SpecError, compile_specs, default_options, derive_id


class TestDeriveId:
    def test_plain(self) -> None:
        assert derive_id("--port") == "port"

    def test_hyphens_become_underscores(self) -> None:
        assert derive_id("--dry-run") == "dry_run"

    def test_negatable(self) -> None:
        assert derive_id("--[no-]daemon") == "daemon"

    def test_invalid(self) -> None:
        with pytest.raises(SpecError):
            derive_id("port")


class TestOptionSpec:
    def test_properties(self) -> None:
        spec = OptionSpec("--[no-]color", description="Colour output")
        assert spec.negatable
        assert spec.name == "color"
        assert spec.long_names == ("--color", "--no-color")
        assert not spec.takes_value
        assert not spec.has_default
        assert spec.default is NO_DEFAULT

    def test_none_is_a_real_default(self) -> None:
        spec = OptionSpec("--out", placeholder="FILE", default=None)
        assert spec.has_default
        assert spec.initial_value() is None

    def test_none_default_wins_over_default_fn(self) -> None:
        spec = OptionSpec("--out", placeholder="FILE", default=None, default_fn=list)
        assert spec.initial_value() is None

    def test_checks_order(self) -> None:
        first = (lambda v: True, "a")
        spec = OptionSpec("--x", placeholder="X", validate_fn=bool, validate_msg="m", validators=[first])
        assert spec.checks() == [(bool, "m"), first]


class TestCompileSpecs:
    def test_fills_ids(self) -> None:
        specs = compile_specs([OptionSpec("--dry-run"), OptionSpec("--port", id="p")])
        assert [s.id for s in specs] == ["dry_run", "p"]

    def test_accepts_mappings(self) -> None:
        (spec,) = compile_specs([{"long_flag": "--port", "short_flag": "-p"}])
        assert spec.id == "port"
        assert spec.short_flag == "-p"

    def test_empty_list(self) -> None:
        assert compile_specs([]) == []

    @pytest.mark.parametrize(
        ("specs", "message"),
        [
            ([OptionSpec("--a", id="x"), OptionSpec("--b", id="x")], "Duplicate option id 'x'"),
            ([OptionSpec("--a", "-a"), OptionSpec("--b", "-a")], "Duplicate flag -a"),
            ([OptionSpec("--a"), OptionSpec("--a", id="b")], "Duplicate flag --a"),
            ([OptionSpec("--[no-]a"), OptionSpec("--no-a")], "Duplicate flag --no-a"),
        ],
    )
    def test_duplicates_raise(self, specs, message) -> None:
        with pytest.raises(SpecError, match=message):
            compile_specs(specs)

    @pytest.mark.parametrize(
        "spec",
        [
            OptionSpec("port"),
            OptionSpec("-p"),
            OptionSpec("--port", "p"),
            OptionSpec("--port", "-pp"),
            OptionSpec("--[no-]port", placeholder="PORT"),
            OptionSpec("--n", placeholder="N", assoc_fn=max, update_fn=abs),
        ],
    )
    def test_malformed_raise(self, spec) -> None:
        with pytest.raises(SpecError):
            compile_specs([spec])

    @pytest.mark.parametrize(
        ("spec", "field"),
        [
            (OptionSpec("--port", -5), "short_flag"),
            (OptionSpec("--port", placeholder=8080), "placeholder"),
            (OptionSpec("--port", id=1), "id"),
            (OptionSpec("--port", description=2024), "description"),
            (OptionSpec("--port", default_desc=80), "default_desc"),
            (OptionSpec("--port", required=True), "required"),
        ],
    )
    def test_non_string_text_fields_raise(self, spec, field) -> None:
        with pytest.raises(SpecError, match=f"{field} must be a string"):
            compile_specs([spec])

    def test_parse_fn_allowed_on_boolean_flag(self) -> None:
        (spec,) = compile_specs([OptionSpec("--flag", parse_fn=int)])
        assert not spec.takes_value

    def test_mapping_with_unknown_field(self) -> None:
        with pytest.raises(SpecError, match="unknown field"):
            compile_specs([{"long_flag": "--a", "shorty": "-a"}])

    def test_mapping_without_long_flag(self) -> None:
        with pytest.raises(SpecError, match="long_flag is required"):
            compile_specs([{"short_flag": "-a"}])

    def test_rejects_other_types(self) -> None:
        with pytest.raises(SpecError, match="expected OptionSpec"):
            compile_specs(["--port"])


class TestDefaultOptions:
    def test_only_specs_with_defaults(self) -> None:
        specs = compile_specs(
            [
                OptionSpec("--a", placeholder="A", default=1),
                OptionSpec("--b"),
                OptionSpec("--c", placeholder="C", default_fn=list),
            ]
        )
        assert default_options(specs) == {"a": 1, "c": []}
