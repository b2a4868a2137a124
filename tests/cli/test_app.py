"""Tests for workscript.cli.app: launcher smoke tests via CliRunner."""

from __future__ import annotations

import textwrap

import pytest
from typer.testing import CliRunner

from workscript import __version__
from workscript.cli.app import app

runner = CliRunner()

GREET = textwrap.dedent(
    """
    def fn(inputs):
        return " ".join(["Hello, " + inputs["name"] + "!"] * inputs.get("times", 1))

    unit = {
        "friendlyName": "Greet",
        "description": "Say hello.",
        "inputs": {
            "name": {"example": "Ada", "description": "Who to greet", "required": True},
            "times": {"example": 1, "defaultsTo": 1},
        },
        "exits": {"success": {"example": "Hello, Ada!"}},
        "fn": fn,
    }
    """
)


@pytest.fixture
def greet_file(tmp_path):
    path = tmp_path / "greet.py"
    path.write_text(GREET)
    return str(path)


# ─── Root options ────────────────────────────────────────────────────────


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"workscript {__version__}" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "run" in result.output
        assert "describe" in result.output


# ─── run ─────────────────────────────────────────────────────────────────


class TestRun:
    def test_run_with_flags(self, greet_file):
        result = runner.invoke(app, ["run", greet_file, "--name", "Ada", "-t", "2"])
        assert result.exit_code == 0, result.output
        assert "Hello, Ada! Hello, Ada!" in result.output

    def test_run_reads_environment(self, greet_file, monkeypatch):
        monkeypatch.setenv("___name", "Grace")
        result = runner.invoke(app, ["run", greet_file])
        assert result.exit_code == 0, result.output
        assert "Hello, Grace!" in result.output

    def test_run_failure_exits_one(self, tmp_path):
        path = tmp_path / "fails.py"
        path.write_text("def fn(inputs):\n    raise RuntimeError('boom')\n\nunit = {'fn': fn}\n")

        result = runner.invoke(app, ["run", str(path)])
        assert result.exit_code == 1
        assert "Something went wrong:" in result.output

    def test_run_missing_required_input(self, greet_file):
        result = runner.invoke(app, ["run", greet_file])
        assert result.exit_code == 1
        assert "Something went wrong:" in result.output

    def test_run_unit_help(self, greet_file):
        result = runner.invoke(app, ["run", greet_file, "--help"])
        assert result.exit_code == 0
        assert "Say hello." in result.output
        assert "-n, --name" in result.output

    def test_run_unknown_flag(self, greet_file):
        result = runner.invoke(app, ["run", greet_file, "--nope", "1"])
        assert result.exit_code == 2

    def test_run_function_target(self, tmp_path):
        path = tmp_path / "funcs.py"
        path.write_text("def double(n=1):\n    return {'doubled': n * 2}\n")

        result = runner.invoke(app, ["run", f"{path}:double", "--n", "21"])
        assert result.exit_code == 0, result.output
        assert "'doubled': 42" in result.output

    def test_run_already_wrapped(self, tmp_path):
        path = tmp_path / "wrapped.py"
        path.write_text(
            "from workscript import as_script\n"
            "invocation = as_script({'fn': lambda inputs: None}, argv=[], environ={})\n"
        )

        result = runner.invoke(app, ["run", str(path)])
        assert result.exit_code == 0, result.output
        assert "OK." in result.output

    def test_run_missing_target(self):
        result = runner.invoke(app, ["run", "does_not_exist.py"])
        assert result.exit_code == 1
        assert "No such file" in result.output
        assert "(DEFINITION)" in result.output

    def test_run_target_failing_on_import(self, tmp_path):
        path = tmp_path / "broken.py"
        path.write_text("raise ValueError('bad setting')\n")

        result = runner.invoke(app, ["run", str(path)])
        assert result.exit_code == 1
        assert "(VALIDATION)" in result.output
        assert "ValueError: bad setting" in result.output


# ─── describe ────────────────────────────────────────────────────────────


class TestDescribe:
    def test_describe_lists_flags(self, greet_file):
        result = runner.invoke(app, ["describe", greet_file])
        assert result.exit_code == 0, result.output
        assert "--name" in result.output
        assert "--times" in result.output
        assert "a number" in result.output
        assert "who to greet" in result.output
