"""DependencyService — admin mutations of the dependency graph.

Every LayerId in a request is resolved before the graph is touched, so an
unknown name rejects the whole batch. Cycles are accepted (expansion is
bounded) but reported as warnings since no collection is expected to
need one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from layerforge.domain.errors import EngineError, NotFoundError
from layerforge.domain.layers import Dependency, StoredDependency
from layerforge.domain.registry import Registry
from layerforge.domain.state import TraitState
from layerforge.services.base import BaseService
from layerforge.services.result import ServiceResult
from layerforge.services.telemetry import traced

logger = logging.getLogger(__name__)


def _resolve(registry: Registry, dependencies: Sequence[Dependency]) -> list[StoredDependency]:
    return [
        StoredDependency(
            id=registry.resolve(dep.id),
            correlated=registry.resolve_all(dep.correlated),
        )
        for dep in dependencies
    ]


def _cycle_warnings(state: TraitState) -> list[str]:
    cycle = state.graph.find_cycle()
    if cycle is None:
        return []
    path = " -> ".join(str(layer) for layer in state.registry.display_all(cycle))
    logger.warning("Dependency cycle present: %s", path)
    return [f"Dependency cycle present: {path}"]


class DependencyService(BaseService):
    """Handles add/remove/replace of dependency entries."""

    @traced
    def add_dependencies(self, dependencies: Sequence[Dependency]) -> ServiceResult:
        """Union each entry's correlated layers into the graph."""
        op = "add_dependencies"
        try:
            with self._store.transaction() as state:
                state.graph.add(_resolve(state.registry, dependencies))
                warnings = _cycle_warnings(state)
                count = state.graph.count
        except EngineError as exc:
            return self._failure(op, exc)

        return ServiceResult(ok=True, op=op, data={"count": count}, warnings=warnings)

    @traced
    def remove_dependencies(self, dependencies: Sequence[Dependency]) -> ServiceResult:
        """Remove correlated layers; an empty correlated list drops the entry.

        Removals that match nothing are no-ops reported as warnings.
        """
        op = "remove_dependencies"
        warnings: list[str] = []
        try:
            with self._store.transaction() as state:
                missed = state.graph.remove(_resolve(state.registry, dependencies))
                for dep in missed:
                    layer = state.registry.display(dep.id)
                    if dep.correlated:
                        members = ", ".join(
                            str(m) for m in state.registry.display_all(dep.correlated)
                        )
                        warnings.append(f"{layer} does not depend on: {members}")
                    else:
                        warnings.append(f"No existing dependencies for {layer}")
                count = state.graph.count
        except EngineError as exc:
            return self._failure(op, exc)

        return ServiceResult(ok=True, op=op, data={"count": count}, warnings=warnings)

    @traced
    def modify_dependencies(self, dependencies: Sequence[Dependency]) -> ServiceResult:
        """Replace the correlated set of each existing entry wholesale."""
        op = "modify_dependencies"
        try:
            with self._store.transaction() as state:
                resolved = _resolve(state.registry, dependencies)
                for dep, stored in zip(dependencies, resolved, strict=True):
                    if not state.graph.has_entry(stored.id):
                        raise NotFoundError(
                            f"No existing dependencies for Variant: {dep.id.variant} "
                            f"in Category: {dep.id.category}",
                            category=dep.id.category,
                            variant=dep.id.variant,
                        )
                state.graph.modify(resolved)
                warnings = _cycle_warnings(state)
                count = state.graph.count
        except EngineError as exc:
            return self._failure(op, exc)

        return ServiceResult(ok=True, op=op, data={"count": count}, warnings=warnings)
