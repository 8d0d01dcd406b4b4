"""Transmutation: apply requested layers to a composition, cascading dependencies.

A composition holds one variant index per category index. Transmuting
resolves the requested layers, expands them through the dependency graph
to a fixpoint, and overwrites exactly the categories the expanded set
touches. Everything else is copied unchanged.

INVARIANT: Pure and deterministic. Reads registry and graph state only;
never mutates the inputs and never stores the result.
"""

from __future__ import annotations

from collections.abc import Sequence

from layerforge.domain.dependencies import DependencyGraph
from layerforge.domain.errors import ConflictingDependencyError, InvalidCompositionError
from layerforge.domain.layers import LayerId, StoredLayerId
from layerforge.domain.registry import Registry


def validate_composition(registry: Registry, composition: Sequence[int]) -> None:
    """Check slot count and per-slot bounds against the registry."""
    expected = registry.category_count
    if len(composition) != expected:
        raise InvalidCompositionError(
            f"Composition has {len(composition)} slots, expected {expected}",
            length=len(composition),
            expected=expected,
        )
    for cat_idx, (value, count) in enumerate(
        zip(composition, registry.variant_counts(), strict=True)
    ):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < count:
            raise InvalidCompositionError(
                f"Slot {cat_idx} ({registry.category(cat_idx).name}) holds {value!r}, "
                f"expected an index below {count}",
                slot=cat_idx,
                value=value,
                variant_count=count,
            )


def forced_assignments(
    registry: Registry,
    graph: DependencyGraph,
    layers: Sequence[StoredLayerId],
) -> dict[int, int]:
    """Expand *layers* and map each touched category to its forced variant.

    Raises ConflictingDependencyError when two members of the expanded set
    name different variants of the same category.
    """
    expanded = graph.expand(layers, bound=registry.total_layers)
    assigned: dict[int, StoredLayerId] = {}
    for layer in expanded:
        prior = assigned.setdefault(layer.category, layer)
        if prior.variant != layer.variant:
            first, second = registry.display(prior), registry.display(layer)
            raise ConflictingDependencyError(
                f"Category {first.category} is assigned both {first.variant} "
                f"and {second.variant}",
                category=first.category,
                variants=[first.variant, second.variant],
            )
    return {cat_idx: layer.variant for cat_idx, layer in assigned.items()}


def transmute(
    registry: Registry,
    graph: DependencyGraph,
    current: Sequence[int],
    new_layers: Sequence[LayerId],
) -> list[int]:
    """Return *current* with *new_layers* (and everything they force) applied."""
    validate_composition(registry, current)
    requested = registry.resolve_all(new_layers)
    result = list(current)
    for cat_idx, var_idx in forced_assignments(registry, graph, requested).items():
        result[cat_idx] = var_idx
    return result
