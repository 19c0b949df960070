"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``SLASHROUTE_*`` prefix (``__`` for nesting)
  3. TOML file: ``slashroute.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses ``resolve_config_path`` (explicit path or walk-up discovery) from
:mod:`slashroute.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from functools import cached_property
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from slashroute.config.callbacks import ResolvedCallbackConfig, resolve_callback_config
from slashroute.config.discovery import load_toml, resolve_config_path
from slashroute.config.errors import ConfigDiagnostic, ConfigurationError
from slashroute.config.models import CallbackConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``slashroute.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = load_toml(toml_path)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigurationError(
                    [
                        ConfigDiagnostic(
                            message=f"Invalid TOML in {toml_path}: {exc}",
                            context={"path": str(toml_path)},
                            suggestions=("Fix the TOML syntax error reported above",),
                            examples=('[callbacks]\nprofile = "production"',),
                        )
                    ]
                ) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RouterSettings(BaseSettings):
    """Unified settings for the router, its consumer, and the CLI.

    Attributes:
        environment: Deployment environment; picks the default callback
            profile (prod, dev, test, anything else means full).
        slow_threshold_ms: Routing calls slower than this are logged as slow.
        callbacks: The ``[callbacks]`` table.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SLASHROUTE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    environment: str = "dev"
    slow_threshold_ms: int = 1000

    # --- TOML sections ---
    callbacks: CallbackConfig = Field(default_factory=CallbackConfig)

    @cached_property
    def callback_config(self) -> ResolvedCallbackConfig:
        """Callback resolution for these settings, computed on first access."""
        return resolve_callback_config(self.callbacks, environment=self.environment)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> RouterSettings:
        """Construct settings from a CLI invocation.

        Discovers ``slashroute.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides.
        """
        toml_path = resolve_config_path(config_path, start)
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
