"""Tests for flag derivation and argv parsing."""

import pytest

from workscript.framework.flags import build_command, derive_flags, parse_argv
from workscript.framework.unit import InputDef


def _inputs(**examples):
    return {name: InputDef(name=name, example=example) for name, example in examples.items()}


class TestDeriveFlags:
    def test_long_and_short_flags(self):
        flags = derive_flags(_inputs(name="Ada", count=1))
        assert [(f.long, f.short) for f in flags] == [("--name", "-n"), ("--count", "-c")]

    def test_first_declared_input_wins_the_shortcut(self):
        flags = derive_flags(_inputs(path="/tmp", port=80))
        assert flags[0].short == "-p"
        assert flags[1].short is None
        assert flags[1].long == "--port"

    def test_letter_stays_claimed_after_first_attempt(self):
        flags = derive_flags(_inputs(path="a", port=1, pid=2))
        assert [f.short for f in flags] == ["-p", None, None]

    def test_help_letter_is_reserved(self):
        flags = derive_flags(_inputs(host="localhost"))
        assert flags[0].short is None
        assert flags[0].long == "--host"

    def test_non_alphanumeric_first_letter_gets_no_shortcut(self):
        flags = derive_flags(_inputs(_private="x"))
        assert flags[0].short is None

    def test_description_lowercases_first_character_only(self):
        inputs = {
            "name": InputDef(name="name", example="", description="The Name of the user"),
            "age": InputDef(name="age", example=1, friendly_name="Age In Years"),
            "bare": InputDef(name="bare", example=""),
        }
        flags = derive_flags(inputs)
        assert [f.description for f in flags] == ["the Name of the user", "age In Years", ""]

    def test_description_prefers_description_over_friendly_name(self):
        inputs = {"x": InputDef(name="x", description="Desc", friendly_name="Friendly")}
        assert derive_flags(inputs)[0].description == "desc"

    def test_boolean_inputs_are_marked(self):
        flags = derive_flags(_inputs(verbose=False, name="x"))
        assert [f.is_boolean for f in flags] == [True, False]

    def test_usage(self):
        flags = derive_flags(_inputs(path="a", port=1))
        assert [f.usage for f in flags] == ["-p, --path", "--port"]


class TestParseArgv:
    def test_long_flags(self):
        flags = derive_flags(_inputs(name="Ada", count=1))
        parsed = parse_argv(flags, ["--name", "Grace", "--count", "42"])
        assert parsed.options == {"name": "Grace", "count": "42"}
        assert parsed.positionals == []

    def test_short_flags(self):
        flags = derive_flags(_inputs(name="Ada"))
        assert parse_argv(flags, ["-n", "Grace"]).options == {"name": "Grace"}

    def test_equals_syntax(self):
        flags = derive_flags(_inputs(name="Ada"))
        assert parse_argv(flags, ["--name=Grace"]).options == {"name": "Grace"}

    def test_only_supplied_flags_are_reported(self):
        flags = derive_flags(_inputs(name="Ada", count=1))
        assert parse_argv(flags, ["--count", "3"]).options == {"count": "3"}

    def test_positionals_are_preserved(self):
        flags = derive_flags(_inputs(name="Ada"))
        parsed = parse_argv(flags, ["a", "--name", "Grace", "b"])
        assert parsed.options == {"name": "Grace"}
        assert parsed.positionals == ["a", "b"]

    def test_bare_boolean_flag_reads_as_true(self):
        flags = derive_flags(_inputs(verbose=False, name="x"))
        assert parse_argv(flags, ["--verbose"]).options == {"verbose": "true"}
        assert parse_argv(flags, ["--verbose", "--name", "y"]).options == {"verbose": "true", "name": "y"}

    def test_boolean_flag_with_value(self):
        flags = derive_flags(_inputs(verbose=False))
        assert parse_argv(flags, ["--verbose", "false"]).options == {"verbose": "false"}

    def test_camel_case_input_names(self):
        flags = derive_flags(_inputs(dryRun=False, maxItems=10))
        parsed = parse_argv(flags, ["--dryRun", "--maxItems", "5"])
        assert parsed.options == {"dryRun": "true", "maxItems": "5"}

    def test_unknown_flag_is_rejected(self, capsys):
        flags = derive_flags(_inputs(name="Ada"))
        with pytest.raises(SystemExit) as exc_info:
            parse_argv(flags, ["--nope", "x"], prog_name="greet")
        assert exc_info.value.code == 2
        assert "--nope" in capsys.readouterr().err

    def test_missing_value_is_rejected(self):
        flags = derive_flags(_inputs(name="Ada"))
        with pytest.raises(SystemExit) as exc_info:
            parse_argv(flags, ["--name"])
        assert exc_info.value.code == 2

    def test_help_lists_flags(self, capsys):
        inputs = {"path": InputDef(name="path", example="", description="Where to look")}
        with pytest.raises(SystemExit) as exc_info:
            parse_argv(derive_flags(inputs), ["--help"], prog_name="finder", help_text="Find things.")
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "Usage: finder [options]" in out
        assert "-p, --path" in out
        assert "where to look" in out
        assert "Find things." in out


class TestBuildCommand:
    def test_parser_is_built_per_call(self):
        flags = derive_flags(_inputs(name="Ada"))
        assert build_command(flags) is not build_command(flags)
