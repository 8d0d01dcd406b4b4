"""CatalogService — read-only, paginated views of registry and dependencies.

Listings are always in index (creation) order. Every variant and
dependency row carries its ``includes`` expansion, the transitive set of
layers it forces, so consumers never query the graph separately.
"""

from __future__ import annotations

from layerforge.domain.errors import EngineError, InvalidRequestError
from layerforge.domain.layers import LayerId, StoredLayerId
from layerforge.domain.state import TraitState
from layerforge.services.base import BaseService
from layerforge.services.contracts import (
    BulkExportData,
    CategoryData,
    DependenciesData,
    DependencyEntry,
    StateData,
    VariantData,
    VariantEntry,
)
from layerforge.services.result import ServiceResult
from layerforge.services.telemetry import traced


def clamp_start(start_at: int | None, count: int) -> int:
    """Clamp a window start into ``[0, count)`` (0 for an empty list)."""
    if count == 0:
        return 0
    return min(max(start_at or 0, 0), count - 1)


def clamp_limit(limit: int | None, *, default: int, maximum: int) -> int:
    """Apply the default page size and cap it at *maximum*."""
    if limit is None:
        return min(default, maximum)
    return max(0, min(limit, maximum))


def _includes(state: TraitState, layer: StoredLayerId) -> list[LayerId]:
    forced = state.graph.includes(layer, bound=state.registry.total_layers)
    return state.registry.display_all(forced)


def _variant_entry(state: TraitState, layer: StoredLayerId, *, include_art: bool) -> VariantEntry:
    var = state.registry.variant(layer)
    return VariantEntry(
        index=layer.variant,
        name=var.name,
        display_name=var.display_name,
        art=var.art if include_art else None,
        includes=_includes(state, layer),
    )


class CatalogService(BaseService):
    """Handles category/variant/dependency listings and bulk export."""

    @traced
    def category(
        self,
        *,
        name: str | None = None,
        index: int | None = None,
        start_at: int | None = None,
        limit: int | None = None,
        include_art: bool = False,
    ) -> ServiceResult:
        """Display one category and a window of its variants.

        The category is selected by *name*, else *index*, else index 0.
        """
        op = "category"
        state = self._store.state
        cfg = self._store.settings.catalog
        try:
            if name is not None:
                cat_idx = state.registry.category_index(name)
            else:
                cat_idx = index or 0
            cat = state.registry.category(cat_idx)
            count = len(cat.variants)
            start = clamp_start(start_at, count)
            page = clamp_limit(
                limit,
                default=cfg.art_limit if include_art else cfg.default_limit,
                maximum=cfg.max_limit,
            )
            entries = [
                _variant_entry(
                    state, StoredLayerId(category=cat_idx, variant=var_idx), include_art=include_art
                )
                for var_idx in range(start, min(start + page, count))
            ]
        except EngineError as exc:
            return self._failure(op, exc)

        data = CategoryData(
            category_count=state.registry.category_count,
            index=cat_idx,
            name=cat.name,
            skip=cat.skip,
            variant_count=count,
            variants=entries,
        )
        return ServiceResult(ok=True, op=op, data=data.dump())

    @traced
    def variant(
        self,
        *,
        by_name: LayerId | None = None,
        by_index: StoredLayerId | None = None,
        include_art: bool = False,
    ) -> ServiceResult:
        """Display one variant addressed by indices (preferred) or names."""
        op = "variant"
        state = self._store.state
        try:
            if by_index is not None:
                layer = by_index
            elif by_name is not None:
                layer = state.registry.resolve(by_name)
            else:
                raise InvalidRequestError("Must specify a layer ID by either names or indices")
            entry = _variant_entry(state, layer, include_art=include_art)
        except EngineError as exc:
            return self._failure(op, exc)

        data = VariantData(category_index=layer.category, info=entry)
        return ServiceResult(ok=True, op=op, data=data.dump())

    @traced
    def dependencies(
        self,
        *,
        start_at: int | None = None,
        limit: int | None = None,
    ) -> ServiceResult:
        """List dependency entries in insertion order."""
        op = "dependencies"
        state = self._store.state
        cfg = self._store.settings.dependencies
        start = max(start_at or 0, 0)
        page = clamp_limit(limit, default=cfg.default_limit, maximum=cfg.max_limit)
        rows = [
            DependencyEntry(
                id=state.registry.display(dep.id),
                correlated=state.registry.display_all(dep.correlated),
                includes=_includes(state, dep.id),
            )
            for dep in state.graph.window(start, page)
        ]
        data = DependenciesData(count=state.graph.count, dependencies=rows)
        return ServiceResult(ok=True, op=op, data=data.dump())

    @traced
    def state(self) -> ServiceResult:
        """Category count and the names of categories skipped when rolling."""
        registry = self._store.registry
        data = StateData(
            category_count=registry.category_count,
            skip=[registry.category(idx).name for idx in registry.skip_indices],
        )
        return ServiceResult(ok=True, op="state", data=data.dump())

    @traced
    def bulk_export(self) -> ServiceResult:
        """Index-based export for high-volume consumers (no name resolution)."""
        state = self._store.state
        data = BulkExportData(
            category_names=state.registry.category_names,
            dependencies=state.graph.entries(),
            skip=state.registry.skip_indices,
        )
        return ServiceResult(ok=True, op="serve_bulk_export", data=data.dump())
