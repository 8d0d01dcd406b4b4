"""LayerforgeSettings: CLI flags, env vars and ``layerforge.toml`` in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``LAYERFORGE_*``, nested sections via ``__``
  3. TOML file    — ``layerforge.toml`` found by :func:`find_config`
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from layerforge.config.discovery import find_config, read_config
from layerforge.config.models import (
    CatalogConfig,
    DependenciesConfig,
    RegistryConfig,
    SkullConfig,
)

# Config file chosen by ``from_cli`` for the settings object being built.
_config_file: ContextVar[Path | None] = ContextVar("_config_file", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the sections set in one TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._sections = read_config(path) if path is not None and path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._sections.get(field_name), field_name, field_name in self._sections

    def __call__(self) -> dict[str, Any]:
        return dict(self._sections)


class LayerforgeSettings(BaseSettings):
    """Everything a CLI run or an embedding caller needs to build a store.

    Attributes:
        root: Directory holding ``.layerforge/`` (the config file's parent,
            or CWD when there is no config).
        config_path: Config file in effect, or None on pure defaults.
        in_memory: Keep state in memory only; nothing touches SQLite.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LAYERFORGE_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    in_memory: bool = False

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    dependencies: DependenciesConfig = Field(default_factory=DependenciesConfig)
    skull: SkullConfig = Field(default_factory=SkullConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init kwargs, then env vars, then the TOML file; no dotenv or secrets."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _config_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> LayerforgeSettings:
        """Build settings for one invocation.

        An explicit *config_path* that does not exist means "no config",
        never a fallback to discovery. Without *root*, the config file's
        directory (or CWD) becomes the root.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path is not None else Path.cwd()

        token = _config_file.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _config_file.reset(token)
