"""Tests for workscript.cli.loader: resolving launcher targets."""

from __future__ import annotations

import pytest

from workscript.cli.loader import import_target_module, load_target, split_target
from workscript.core.errors import DefinitionError


class TestSplitTarget:
    @pytest.mark.parametrize(
        "target,expected",
        [
            ("pkg.mod:unit", ("pkg.mod", "unit")),
            ("pkg.mod", ("pkg.mod", None)),
            ("scripts/greet.py:greet", ("scripts/greet.py", "greet")),
            ("scripts/greet.py", ("scripts/greet.py", None)),
            ("pkg.mod:", ("pkg.mod:", None)),
        ],
    )
    def test_split(self, target, expected):
        assert split_target(target) == expected


class TestLoadTarget:
    def test_file_with_default_attr(self, tmp_path):
        path = tmp_path / "unit_file.py"
        path.write_text('machine = {"identity": "from-file"}\n')

        assert load_target(str(path)) == {"identity": "from-file"}

    def test_default_attr_order(self, tmp_path):
        path = tmp_path / "both.py"
        path.write_text('definition = "second"\nunit = "first"\n')

        assert load_target(str(path)) == "first"

    def test_explicit_attr(self, tmp_path):
        path = tmp_path / "named.py"
        path.write_text("def greet(name=''):\n    return name\n")

        assert callable(load_target(f"{path}:greet"))

    def test_dotted_module(self):
        assert callable(load_target("workscript.adapter:as_script"))

    def test_missing_attr(self, tmp_path):
        path = tmp_path / "empty.py"
        path.write_text("x = 1\n")

        with pytest.raises(DefinitionError, match="tried: unit, machine"):
            load_target(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(DefinitionError, match="No such file"):
            import_target_module(str(tmp_path / "nope.py"))

    def test_missing_module(self):
        with pytest.raises(DefinitionError, match="Cannot import module"):
            import_target_module("workscript_no_such_module")
