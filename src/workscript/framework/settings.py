"""Settings for workscript.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.
    The few knobs workscript has (where unit inputs are looked up in the
    environment, how loud logging is) are declared once here so the
    adapter and the launcher read them the same way.

Features:
    - **ScriptSettings:** env_var_namespace, log_level, log_format, prog_name
    - **env_prefix:** ``WORKSCRIPT_`` for every field
    - **.env file support:** Automatic loading via pydantic-settings
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> import os
    >>> os.environ["WORKSCRIPT_ENV_VAR_NAMESPACE"] = "MYAPP_"
    >>> get_settings(_force_reload=True).env_var_namespace
    'MYAPP_'

Tags:
    settings, configuration, pydantic, environment, workscript

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENV_VAR_NAMESPACE = "___"


class ScriptSettings(BaseSettings):
    """Settings shared by the adapter and the ``workscript`` launcher.

    Fields
    ──────
    env_var_namespace : Prefix prepended to an input name to find its env var
    log_level         : Structlog log level
    log_format        : ``console`` for humans, ``json`` for aggregation
    prog_name         : Program name shown in generated help text
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKSCRIPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env_var_namespace: str = Field(
        default=DEFAULT_ENV_VAR_NAMESPACE,
        description="Prefix used to look up input values in the environment",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["json", "console"] = "console"

    # ── Help text ────────────────────────────────────────────────
    prog_name: str | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


_settings_cache: dict[str, ScriptSettings] = {}


def get_settings(*, _force_reload: bool = False) -> ScriptSettings:
    """Load, validate, and cache a :class:`ScriptSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = ScriptSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
