"""Dispatcher — route decoded operations to the owning service.

The dispatcher is the single seam between wire documents and services:
``dispatch_document`` decodes, ``dispatch`` consults the optional
authorization gate and then matches the operation type exhaustively.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, assert_never

from layerforge.domain.errors import InvalidRequestError, UnauthorizedError
from layerforge.domain.messages import (
    AddCategoriesOp,
    AddDependenciesOp,
    AddVariantsOp,
    CategoryOp,
    DependenciesOp,
    ModifyCategoryOp,
    ModifyDependenciesOp,
    ModifyVariantsOp,
    Operation,
    RemoveDependenciesOp,
    ServeBulkExportOp,
    SetSkullTypeLayersOp,
    SkullTypeLayerIdsOp,
    SkullTypeOp,
    StateOp,
    TransmuteOp,
    VariantOp,
    decode_operation,
    is_mutating,
)
from layerforge.services.base import BaseService
from layerforge.services.catalog import CatalogService
from layerforge.services.compose import ComposeService
from layerforge.services.dependency import DependencyService
from layerforge.services.registry import RegistryService
from layerforge.services.result import ServiceResult

if TYPE_CHECKING:
    from layerforge.infrastructure.store import TraitStore

logger = logging.getLogger(__name__)

type AuthorizeFn = Callable[[Operation], bool]


class Dispatcher:
    """Run operations against a store.

    Args:
        store: The trait store every service shares.
        authorize: Optional gate; returning False rejects the operation
            with ``UNAUTHORIZED`` before any service runs.
    """

    def __init__(self, store: TraitStore, authorize: AuthorizeFn | None = None) -> None:
        self._store = store
        self._authorize = authorize
        self.registry = RegistryService(store)
        self.dependency = DependencyService(store)
        self.compose = ComposeService(store)
        self.catalog = CatalogService(store)

    def dispatch_document(self, document: dict[str, Any] | str | bytes) -> ServiceResult:
        """Decode a wire document and dispatch it."""
        try:
            operation = decode_operation(document)
        except InvalidRequestError as exc:
            op = document.get("op", "decode") if isinstance(document, dict) else "decode"
            return BaseService._failure(str(op), exc)
        return self.dispatch(operation)

    def dispatch(self, operation: Operation) -> ServiceResult:
        """Authorize and run one decoded operation."""
        if self._authorize is not None and not self._authorize(operation):
            kind = "mutating" if is_mutating(operation) else "query"
            logger.warning("Rejected %s operation %s", kind, operation.op)
            return BaseService._failure(
                operation.op,
                UnauthorizedError(
                    f"Not authorized to run {operation.op}",
                    op=operation.op,
                ),
            )

        match operation:
            case AddCategoriesOp(categories=categories):
                return self.registry.add_categories(categories)
            case AddVariantsOp(category_name=name, variants=variants):
                return self.registry.add_variants(name, variants)
            case ModifyCategoryOp(name=name, new_name=new_name, new_skip=new_skip):
                return self.registry.modify_category(name, new_name=new_name, new_skip=new_skip)
            case ModifyVariantsOp(category=category, modifications=modifications):
                return self.registry.modify_variants(category, modifications)
            case AddDependenciesOp(dependencies=deps):
                return self.dependency.add_dependencies(deps)
            case RemoveDependenciesOp(dependencies=deps):
                return self.dependency.remove_dependencies(deps)
            case ModifyDependenciesOp(dependencies=deps):
                return self.dependency.modify_dependencies(deps)
            case SetSkullTypeLayersOp(cyclops=cyclops, jawless=jawless):
                return self.registry.set_skull_type_layers(cyclops, jawless)
            case CategoryOp():
                return self.catalog.category(
                    name=operation.name,
                    index=operation.index,
                    start_at=operation.start_at,
                    limit=operation.limit,
                    include_art=operation.include_art,
                )
            case VariantOp(by_name=by_name, by_index=by_index, include_art=include_art):
                return self.catalog.variant(
                    by_name=by_name, by_index=by_index, include_art=include_art
                )
            case DependenciesOp(start_at=start_at, limit=limit):
                return self.catalog.dependencies(start_at=start_at, limit=limit)
            case TransmuteOp(current=current, new_layers=new_layers):
                return self.compose.transmute(current, new_layers)
            case SkullTypeOp(composition=composition):
                return self.compose.skull_type(composition)
            case SkullTypeLayerIdsOp():
                return self.compose.skull_type_layer_ids()
            case ServeBulkExportOp():
                return self.catalog.bulk_export()
            case StateOp():
                return self.catalog.state()
            case _:
                assert_never(operation)
