"""Typed payload contracts for service and adapter boundaries.

Services build these models and dump them into ``ServiceResult.data`` so
payload shapes (``variants`` vs ``items``, ``composition`` vs ``image``)
are fixed in one place and checked at construction time.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from layerforge.domain.layers import LayerId, StoredDependency, StoredLayerId


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True)

    def dump(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class VariantEntry(_Payload):
    """One catalog row: a variant with its index and forced layers."""

    index: int
    name: str
    display_name: str
    art: str | None = None
    includes: list[LayerId]


class CategoryData(_Payload):
    """Payload contract for ``CatalogService.category``."""

    category_count: int
    index: int
    name: str
    skip: bool
    variant_count: int
    variants: list[VariantEntry]


class VariantData(_Payload):
    """Payload contract for ``CatalogService.variant``."""

    category_index: int
    info: VariantEntry


class DependencyEntry(_Payload):
    """One dependency listing row, name-addressed for display."""

    id: LayerId
    correlated: list[LayerId]
    includes: list[LayerId]


class DependenciesData(_Payload):
    """Payload contract for ``CatalogService.dependencies``."""

    count: int
    dependencies: list[DependencyEntry]


class StateData(_Payload):
    """Payload contract for ``CatalogService.state``."""

    category_count: int
    skip: list[str]


class BulkExportData(_Payload):
    """Payload contract for ``CatalogService.bulk_export``."""

    category_names: list[str]
    dependencies: list[StoredDependency]
    skip: list[int]


class TransmuteData(_Payload):
    """Payload contract for ``ComposeService.transmute``."""

    composition: list[int]


class SkullTypeData(_Payload):
    """Payload contract for ``ComposeService.skull_type``."""

    is_cyclops: bool
    is_jawless: bool


class SkullTypeLayerIdsData(_Payload):
    """Payload contract for ``ComposeService.skull_type_layer_ids``."""

    cyclops: StoredLayerId
    jawless: StoredLayerId
