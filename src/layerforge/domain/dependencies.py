"""DependencyGraph — directed "selecting X forces Y" edges between layers.

Edges live in a NetworkX DiGraph keyed by :class:`StoredLayerId`; a
separate insertion-ordered index of dependency entries (layers with at
least one outgoing edge) drives paginated listing.

Correlation is strictly directional: ``A -> B`` says nothing about
``B -> A``. Acyclicity is never validated, so every transitive expansion
runs as a visited-set fixpoint with an explicit round bound.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import networkx as nx

from layerforge.domain.errors import NotFoundError
from layerforge.domain.layers import StoredDependency, StoredLayerId

type _Graph = nx.DiGraph


class DependencyGraph:
    """Adjacency list of layer dependencies with ordered entries."""

    def __init__(self, entries: Iterable[StoredDependency] = ()) -> None:
        self._graph: _Graph = nx.DiGraph()
        self._order: dict[StoredLayerId, None] = {}
        self.add(entries)

    def copy(self) -> DependencyGraph:
        """Return an independent copy (used as a transaction working set)."""
        clone = DependencyGraph()
        clone._graph = self._graph.copy()
        clone._order = dict(self._order)
        return clone

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def count(self) -> int:
        """Number of dependency entries."""
        return len(self._order)

    def has_entry(self, layer: StoredLayerId) -> bool:
        return layer in self._order

    def correlated(self, layer: StoredLayerId) -> list[StoredLayerId]:
        """Layers directly forced by *layer*, in insertion order."""
        if layer not in self._graph:
            return []
        return list(self._graph.successors(layer))

    def entries(self) -> list[StoredDependency]:
        return [
            StoredDependency(id=layer, correlated=self.correlated(layer)) for layer in self._order
        ]

    def window(self, start_at: int, limit: int) -> list[StoredDependency]:
        """Entries ``[start_at, start_at + limit)`` in insertion order."""
        layers = list(self._order)[start_at : start_at + limit]
        return [StoredDependency(id=layer, correlated=self.correlated(layer)) for layer in layers]

    def expand(
        self,
        seeds: Iterable[StoredLayerId],
        *,
        bound: int | None = None,
    ) -> list[StoredLayerId]:
        """Transitive closure of *seeds* under the forced-layer relation.

        Returns the seeds followed by every forced layer in discovery order.
        Each round must discover at least one new layer to continue, and no
        more than *bound* rounds run (default: number of layers in the graph).
        """
        found: dict[StoredLayerId, None] = dict.fromkeys(seeds)
        limit = self._graph.number_of_nodes() if bound is None else bound
        frontier = list(found)
        rounds = 0
        while frontier and rounds < limit:
            rounds += 1
            discovered: list[StoredLayerId] = []
            for layer in frontier:
                for member in self.correlated(layer):
                    if member not in found:
                        found[member] = None
                        discovered.append(member)
            frontier = discovered
        return list(found)

    def includes(self, layer: StoredLayerId, *, bound: int | None = None) -> list[StoredLayerId]:
        """Every layer transitively forced by *layer*, excluding itself."""
        return self.expand([layer], bound=bound)[1:]

    def find_cycle(self) -> list[StoredLayerId] | None:
        """Return the layers of one dependency cycle, or None if acyclic."""
        try:
            edges = nx.find_cycle(self._graph)
        except nx.NetworkXNoCycle:
            return None
        return [source for source, _target in edges]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, entries: Iterable[StoredDependency]) -> None:
        """Union each entry's correlated layers into the existing entry."""
        for dep in entries:
            new = [
                member
                for member in dict.fromkeys(dep.correlated)
                if not self._graph.has_edge(dep.id, member)
            ]
            if not new:
                continue
            self._order.setdefault(dep.id, None)
            self._graph.add_edges_from((dep.id, member) for member in new)

    def remove(self, entries: Sequence[StoredDependency]) -> list[StoredDependency]:
        """Remove correlated layers; an empty list removes the whole entry.

        Returns the requested removals that matched nothing (no entry for
        the id, or members not present), so callers can report them.
        """
        missed: list[StoredDependency] = []
        for dep in entries:
            if dep.id not in self._order:
                missed.append(dep)
                continue
            if not dep.correlated:
                self._drop(dep.id)
                continue
            present = [m for m in dep.correlated if self._graph.has_edge(dep.id, m)]
            absent = [m for m in dep.correlated if m not in present]
            self._graph.remove_edges_from((dep.id, m) for m in present)
            if absent:
                missed.append(StoredDependency(id=dep.id, correlated=absent))
            if self._graph.out_degree(dep.id) == 0:
                self._drop(dep.id)
        self._prune()
        return missed

    def modify(self, entries: Sequence[StoredDependency]) -> None:
        """Replace each existing entry's correlated set wholesale.

        The entry keeps its listing position; an empty replacement drops it.
        When a batch names the same id more than once, the last entry wins.
        """
        for dep in entries:
            if dep.id not in self._order:
                raise NotFoundError(
                    f"No existing dependencies for layer {dep.id}",
                    category_index=dep.id.category,
                    variant_index=dep.id.variant,
                )
        replacements = {dep.id: dep.correlated for dep in entries}
        for layer, correlated in replacements.items():
            self._graph.remove_edges_from(list(self._graph.out_edges(layer)))
            members = list(dict.fromkeys(correlated))
            if members:
                self._graph.add_edges_from((layer, member) for member in members)
            else:
                self._order.pop(layer, None)
        self._prune()

    def _drop(self, layer: StoredLayerId) -> None:
        self._graph.remove_edges_from(list(self._graph.out_edges(layer)))
        self._order.pop(layer, None)

    def _prune(self) -> None:
        """Drop layers that no longer take part in any edge."""
        isolated = [node for node, degree in self._graph.degree() if degree == 0]
        self._graph.remove_nodes_from(isolated)
