"""
Shared pytest fixtures and configuration for workscript tests.

This module provides:
- Logging configured once, quietly, for the whole session
- Log context and settings cache cleanup for test isolation
- Sample work unit definitions

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_something(greet_definition):
        ...
"""

import sys
from pathlib import Path
from typing import Any, Generator

import pytest

# Ensure workscript package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from workscript.framework.logging import clear_context, configure_logging
from workscript.framework.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_logging() -> None:
    """Configure structlog once so log lines never land on stdout."""
    configure_logging(level="WARNING", format="console", force=True)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset log context and settings cache around each test."""
    for key in ("WORKSCRIPT_ENV_VAR_NAMESPACE", "WORKSCRIPT_PROG_NAME"):
        monkeypatch.delenv(key, raising=False)
    clear_context()
    clear_settings_cache()
    yield
    clear_context()
    clear_settings_cache()


# =============================================================================
# Sample Work Units
# =============================================================================


@pytest.fixture
def greet_definition() -> dict[str, Any]:
    """Unit with a string, a number and a boolean input."""

    def fn(inputs: dict[str, Any]) -> str:
        greeting = "Hello" if not inputs.get("shout") else "HELLO"
        return " ".join([f"{greeting}, {inputs['name']}!"] * inputs.get("times", 1))

    return {
        "friendlyName": "Greet someone",
        "description": "Say hello to someone.",
        "inputs": {
            "name": {"example": "Ada", "description": "Who to greet", "required": True},
            "times": {"example": 1, "description": "How many times", "defaultsTo": 1},
            "shout": {"example": False, "friendlyName": "Shout it"},
        },
        "exits": {
            "success": {"example": "Hello, Ada!"},
        },
        "fn": fn,
    }


@pytest.fixture
def failing_definition() -> dict[str, Any]:
    """Unit whose body always raises."""

    def fn(inputs: dict[str, Any]) -> None:
        raise RuntimeError("boom")

    return {"identity": "always-fails", "inputs": {}, "fn": fn}
