"""Tests for whole-state snapshot I/O."""

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from layerforge.domain.dependencies import DependencyGraph
from layerforge.domain.layers import StoredDependency, StoredLayerId
from layerforge.domain.registry import Registry
from layerforge.domain.skull import SkullTypeSentinels
from layerforge.domain.state import TraitState
from layerforge.infrastructure.database import (
    categories,
    dependency_members,
    init_database,
    read_snapshot,
    write_snapshot,
)


def L(category: int, variant: int) -> StoredLayerId:  # noqa: N802
    return StoredLayerId(category=category, variant=variant)


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


class TestSnapshot:
    def test_empty_database(self, db_engine: Engine) -> None:
        with db_engine.connect() as conn:
            state = read_snapshot(conn)
        assert state.registry.category_count == 0
        assert state.graph.count == 0
        assert state.sentinels is None

    def test_round_trip(self, db_engine: Engine, registry: Registry) -> None:
        graph = DependencyGraph(
            [
                StoredDependency(id=L(3, 1), correlated=[L(4, 1)]),
                StoredDependency(id=L(1, 1), correlated=[L(2, 1), L(3, 1)]),
            ]
        )
        sentinels = SkullTypeSentinels(cyclops=L(1, 1), jawless=L(2, 1))
        state = TraitState(registry=registry, graph=graph, sentinels=sentinels)
        with db_engine.begin() as conn:
            write_snapshot(conn, state)
        with db_engine.connect() as conn:
            loaded = read_snapshot(conn)

        assert loaded.registry.category_names == registry.category_names
        assert loaded.registry.skip_indices == [0]
        assert loaded.registry.variant(L(2, 1)).name == "None"
        assert loaded.graph.entries() == graph.entries()
        assert loaded.sentinels == sentinels

    def test_rewrite_replaces_rows(self, db_engine: Engine, registry: Registry) -> None:
        graph = DependencyGraph([StoredDependency(id=L(1, 1), correlated=[L(2, 1), L(3, 1)])])
        with db_engine.begin() as conn:
            write_snapshot(conn, TraitState(registry=registry, graph=graph))
        graph.remove([StoredDependency(id=L(1, 1), correlated=[L(3, 1)])])
        with db_engine.begin() as conn:
            write_snapshot(conn, TraitState(registry=registry, graph=graph))
        with db_engine.connect() as conn:
            assert conn.execute(select(func.count()).select_from(categories)).scalar() == 5
            assert conn.execute(select(func.count()).select_from(dependency_members)).scalar() == 1
