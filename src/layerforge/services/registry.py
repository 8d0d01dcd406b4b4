"""RegistryService — admin mutations of categories, variants and sentinels.

Pipeline: VALIDATE → APPLY (on a working copy) → COMMIT → RESPOND.
A rejected operation never reaches COMMIT, so the live registry is
unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from layerforge.domain.errors import EngineError
from layerforge.domain.layers import CategoryInfo, StoredLayerId, VariantInfo, VariantModification
from layerforge.domain.skull import SkullTypeSentinels
from layerforge.services.base import BaseService
from layerforge.services.contracts import SkullTypeLayerIdsData
from layerforge.services.result import ServiceResult
from layerforge.services.telemetry import traced

logger = logging.getLogger(__name__)


class RegistryService(BaseService):
    """Handles append-only category/variant creation and in-place edits."""

    @traced
    def add_categories(self, categories: Sequence[CategoryInfo]) -> ServiceResult:
        """Append categories (with initial variants) at the next free indices."""
        op = "add_categories"
        try:
            with self._store.transaction() as state:
                first = state.registry.category_count
                count = state.registry.add_categories(categories)
        except EngineError as exc:
            return self._failure(op, exc)

        logger.info("Added categories %s", [c.name for c in categories])
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": count,
                "added": [
                    {"index": first + offset, "name": info.name}
                    for offset, info in enumerate(categories)
                ],
            },
        )

    @traced
    def add_variants(self, category_name: str, variants: Sequence[VariantInfo]) -> ServiceResult:
        """Append variants to an existing category."""
        op = "add_variants"
        try:
            with self._store.transaction() as state:
                cat_idx = state.registry.category_index(category_name)
                first = len(state.registry.category(cat_idx).variants)
                count = state.registry.add_variants(category_name, variants)
        except EngineError as exc:
            return self._failure(op, exc)

        logger.info("Added %d variants to %s", len(variants), category_name)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "category": category_name,
                "category_index": cat_idx,
                "variant_count": count,
                "added": [
                    {"index": first + offset, "name": info.name}
                    for offset, info in enumerate(variants)
                ],
            },
        )

    @traced
    def modify_category(
        self,
        name: str,
        *,
        new_name: str | None = None,
        new_skip: bool | None = None,
    ) -> ServiceResult:
        """Rename a category and/or change its skip flag."""
        op = "modify_category"
        try:
            with self._store.transaction() as state:
                changed = state.registry.modify_category(name, new_name=new_name, new_skip=new_skip)
                cat_idx = state.registry.category_index(
                    new_name if new_name is not None else name
                )
                cat = state.registry.category(cat_idx)
        except EngineError as exc:
            return self._failure(op, exc)

        warnings = [] if changed else [f"Category {name} already matches the requested values"]
        return ServiceResult(
            ok=True,
            op=op,
            data={"index": cat_idx, "name": cat.name, "skip": cat.skip, "changed": changed},
            warnings=warnings,
        )

    @traced
    def modify_variants(
        self, category: str, modifications: Sequence[VariantModification]
    ) -> ServiceResult:
        """Replace display data (and possibly names) of existing variants."""
        op = "modify_variants"
        try:
            with self._store.transaction() as state:
                modified = state.registry.modify_variants(category, modifications)
        except EngineError as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"category": category, "modified": modified},
        )

    @traced
    def set_skull_type_layers(
        self, cyclops: StoredLayerId, jawless: StoredLayerId
    ) -> ServiceResult:
        """Designate the cyclops and jawless sentinel layers explicitly."""
        op = "set_skull_type_layers"
        try:
            with self._store.transaction() as state:
                state.registry.variant(cyclops)
                state.registry.variant(jawless)
                state.sentinels = SkullTypeSentinels(cyclops=cyclops, jawless=jawless)
        except EngineError as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data=SkullTypeLayerIdsData(cyclops=cyclops, jawless=jawless).dump(),
        )
