"""Shared pytest fixtures and test helpers for layerforge tests."""

from __future__ import annotations

import logging
from collections.abc import Generator, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner

from layerforge.config.settings import LayerforgeSettings
from layerforge.domain.layers import CategoryInfo, VariantInfo
from layerforge.domain.registry import Registry
from layerforge.infrastructure.store import TraitStore
from layerforge.services.telemetry import disable_telemetry

# Index layout of the sample collection used across tests:
#   0 Background (skip)  Background.Blue, Background.Red
#   1 Eye Type           EyeType.Normal, EyeType.Cyclops
#   2 Jaw Type           JawType.Square, None
#   3 Nose               Nose.Small, Nose.None
#   4 Mouth              Mouth.Smile, Mouth.None
SAMPLE_CATEGORIES: list[tuple[str, bool, list[str]]] = [
    ("Background", True, ["Background.Blue", "Background.Red"]),
    ("Eye Type", False, ["EyeType.Normal", "EyeType.Cyclops"]),
    ("Jaw Type", False, ["JawType.Square", "None"]),
    ("Nose", False, ["Nose.Small", "Nose.None"]),
    ("Mouth", False, ["Mouth.Smile", "Mouth.None"]),
]


def category_info(name: str, variants: Sequence[str] = (), *, skip: bool = False) -> CategoryInfo:
    """Build a CategoryInfo whose variants display as their own names."""
    return CategoryInfo(
        name=name,
        skip=skip,
        variants=[VariantInfo(name=v, display_name=v.split(".")[-1]) for v in variants],
    )


def sample_infos() -> list[CategoryInfo]:
    return [category_info(name, variants, skip=skip) for name, skip, variants in SAMPLE_CATEGORIES]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate each test from ambient env vars and global logging state."""
    monkeypatch.delenv("LAYERFORGE_CONFIG", raising=False)
    yield
    disable_telemetry()
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == "layerforge"]:
        root.removeHandler(handler)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> Registry:
    """Registry preloaded with the sample collection."""
    reg = Registry()
    reg.add_categories(sample_infos())
    return reg


@pytest.fixture
def store(tmp_path: Path) -> Generator[TraitStore]:
    """Empty in-memory store (no database)."""
    settings = LayerforgeSettings.from_cli(root=tmp_path, in_memory=True)
    s = TraitStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def seeded_store(store: TraitStore) -> TraitStore:
    """In-memory store holding the sample collection."""
    with store.transaction() as state:
        state.registry.add_categories(sample_infos())
    return store


@pytest.fixture
def disk_store(tmp_path: Path) -> Generator[TraitStore]:
    """SQLite-backed store under ``tmp_path/.layerforge``."""
    settings = LayerforgeSettings.from_cli(root=tmp_path)
    s = TraitStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)
