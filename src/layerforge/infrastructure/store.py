"""TraitStore — owner of engine state with all-or-nothing transactions.

The TraitStore is the single dependency injected into every service. It
lazily loads a :class:`TraitState` snapshot from SQLite (or starts empty
when running in memory) and serializes every mutation through
:meth:`transaction`:

- the caller mutates a private working copy of the state;
- on success the copy is written to the database in one SQL transaction
  and then becomes the live state;
- on any exception the copy is discarded, leaving memory and database
  untouched.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from layerforge.domain.state import TraitState
from layerforge.infrastructure.database.engine import init_database
from layerforge.infrastructure.database.snapshot import read_snapshot, write_snapshot

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

    from layerforge.config.settings import LayerforgeSettings
    from layerforge.domain.dependencies import DependencyGraph
    from layerforge.domain.registry import Registry

logger = logging.getLogger(__name__)


class TraitStore:
    """Lazy-loading, transactional holder of registry and dependency state."""

    def __init__(self, settings: LayerforgeSettings) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        if not settings.in_memory:
            self._engine = init_database(settings.root)
        self._state: TraitState | None = None

    @property
    def settings(self) -> LayerforgeSettings:
        return self._settings

    @property
    def engine(self) -> Engine | None:
        """SQLite engine, or None for an in-memory store."""
        return self._engine

    @property
    def state(self) -> TraitState:
        """The live state, loaded from the database on first access."""
        if self._state is None:
            self._state = self._load()
        return self._state

    @property
    def registry(self) -> Registry:
        return self.state.registry

    @property
    def graph(self) -> DependencyGraph:
        return self.state.graph

    def _load(self) -> TraitState:
        if self._engine is None:
            return TraitState()
        with self._engine.connect() as conn:
            state = read_snapshot(conn)
        logger.debug(
            "Loaded registry %r: %d categories, %d dependencies",
            self._settings.registry.name,
            state.registry.category_count,
            state.graph.count,
        )
        return state

    def reload(self) -> None:
        """Drop the cached state, forcing a reload on next access."""
        self._state = None

    @contextmanager
    def transaction(self) -> Iterator[TraitState]:
        """Yield a working copy; commit it only if the block completes."""
        working = self.state.copy()
        yield working
        if self._engine is not None:
            with self._engine.begin() as conn:
                write_snapshot(conn, working)
        self._state = working

    def close(self) -> None:
        """Dispose of the database engine."""
        if self._engine is not None:
            self._engine.dispose()
