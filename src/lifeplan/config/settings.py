"""Unified settings: init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: overrides passed by the embedding application
  2. Env vars: ``LIFEPLAN_*`` prefix, ``__`` for nested sections
  3. TOML file: ``lifeplan.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`lifeplan.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from lifeplan.config.discovery import find_config, read_toml
from lifeplan.config.models import CalendarConfig, LimitsConfig

DEFAULT_DATABASE_URL = "sqlite:///lifeplan.db"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``lifeplan.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class LifeplanSettings(BaseSettings):
    """Settings for the validation engine and its SQL adapter.

    Merges init overrides, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        database_url: SQLAlchemy URL of the backing database.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LIFEPLAN_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- Runtime flags ---
    verbose: bool = False
    log_json: bool = False
    database_url: str = DEFAULT_DATABASE_URL

    # --- TOML sections (reuse frozen models) ---
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

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
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        root: Path | None = None,
        **overrides: Any,
    ) -> LifeplanSettings:
        """Construct settings, discovering ``lifeplan.toml`` from *root*.

        An explicit *config_path* wins over discovery; a path that does
        not exist is ignored. *overrides* take the highest priority.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
