"""TraitState — the complete mutable engine state as one value."""

from __future__ import annotations

from dataclasses import dataclass, field

from layerforge.domain.dependencies import DependencyGraph
from layerforge.domain.registry import Registry
from layerforge.domain.skull import SkullTypeSentinels


@dataclass
class TraitState:
    """Registry, dependency graph and explicitly set skull-type sentinels."""

    registry: Registry = field(default_factory=Registry)
    graph: DependencyGraph = field(default_factory=DependencyGraph)
    sentinels: SkullTypeSentinels | None = None

    def copy(self) -> TraitState:
        """Independent working copy; sentinels are immutable and shared."""
        return TraitState(
            registry=self.registry.copy(),
            graph=self.graph.copy(),
            sentinels=self.sentinels,
        )
