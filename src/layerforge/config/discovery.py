"""Locate and read ``layerforge.toml``.

Lookup order: ``LAYERFORGE_CONFIG`` when set (a missing file there means
no config at all), otherwise the nearest ``layerforge.toml`` in the start
directory or one of its parents.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from layerforge.config.models import LayerforgeConfig

CONFIG_FILENAME = "layerforge.toml"
CONFIG_ENV_VAR = "LAYERFORGE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), if any."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse and validate *path*, returning only the keys it sets.

    The sparse result lets env vars and defaults fill everything the file
    leaves out.

    Raises:
        click.ClickException: The file is not valid TOML, names an unknown
            section or key, or holds a value a section model rejects.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
    try:
        config = LayerforgeConfig.model_validate(data)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid config in {path}: {exc}") from exc
    return config.model_dump(exclude_unset=True)
