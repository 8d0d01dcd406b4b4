"""Closed tagged union of every engine operation.

Wire documents carry an ``op`` discriminator and are decoded exactly once,
at the boundary, by :func:`decode_operation`. Past that point callers
match on the concrete model types; there is no string-keyed dispatch.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from layerforge.domain.errors import InvalidRequestError
from layerforge.domain.layers import (
    U8,
    U16,
    CategoryInfo,
    Dependency,
    LayerId,
    Name,
    StoredLayerId,
    VariantInfo,
    VariantModification,
)


class _Op(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# --- Mutating operations ---


class AddCategoriesOp(_Op):
    op: Literal["add_categories"] = "add_categories"
    categories: list[CategoryInfo]


class AddVariantsOp(_Op):
    op: Literal["add_variants"] = "add_variants"
    category_name: Name
    variants: list[VariantInfo]


class ModifyCategoryOp(_Op):
    op: Literal["modify_category"] = "modify_category"
    name: Name
    new_name: Name | None = None
    new_skip: bool | None = None


class ModifyVariantsOp(_Op):
    op: Literal["modify_variants"] = "modify_variants"
    category: Name
    modifications: list[VariantModification]


class AddDependenciesOp(_Op):
    op: Literal["add_dependencies"] = "add_dependencies"
    dependencies: list[Dependency]


class RemoveDependenciesOp(_Op):
    op: Literal["remove_dependencies"] = "remove_dependencies"
    dependencies: list[Dependency]


class ModifyDependenciesOp(_Op):
    op: Literal["modify_dependencies"] = "modify_dependencies"
    dependencies: list[Dependency]


class SetSkullTypeLayersOp(_Op):
    op: Literal["set_skull_type_layers"] = "set_skull_type_layers"
    cyclops: StoredLayerId
    jawless: StoredLayerId


# --- Read-only operations ---


class CategoryOp(_Op):
    op: Literal["category"] = "category"
    name: str | None = None
    index: U8 | None = None
    start_at: U8 | None = None
    limit: U8 | None = None
    include_art: bool = False


class VariantOp(_Op):
    op: Literal["variant"] = "variant"
    by_name: LayerId | None = None
    by_index: StoredLayerId | None = None
    include_art: bool = False


class DependenciesOp(_Op):
    op: Literal["dependencies"] = "dependencies"
    start_at: U16 | None = None
    limit: U16 | None = None


class TransmuteOp(_Op):
    op: Literal["transmute"] = "transmute"
    current: list[int]
    new_layers: list[LayerId]


class SkullTypeOp(_Op):
    op: Literal["skull_type"] = "skull_type"
    composition: list[int]


class SkullTypeLayerIdsOp(_Op):
    op: Literal["skull_type_layer_ids"] = "skull_type_layer_ids"


class ServeBulkExportOp(_Op):
    op: Literal["serve_bulk_export"] = "serve_bulk_export"


class StateOp(_Op):
    op: Literal["state"] = "state"


Operation = Annotated[
    AddCategoriesOp
    | AddVariantsOp
    | ModifyCategoryOp
    | ModifyVariantsOp
    | AddDependenciesOp
    | RemoveDependenciesOp
    | ModifyDependenciesOp
    | SetSkullTypeLayersOp
    | CategoryOp
    | VariantOp
    | DependenciesOp
    | TransmuteOp
    | SkullTypeOp
    | SkullTypeLayerIdsOp
    | ServeBulkExportOp
    | StateOp,
    Field(discriminator="op"),
]

MUTATING_OPS: frozenset[type[_Op]] = frozenset(
    {
        AddCategoriesOp,
        AddVariantsOp,
        ModifyCategoryOp,
        ModifyVariantsOp,
        AddDependenciesOp,
        RemoveDependenciesOp,
        ModifyDependenciesOp,
        SetSkullTypeLayersOp,
    }
)

_ADAPTER: TypeAdapter[Operation] = TypeAdapter(Operation)


def is_mutating(operation: BaseModel) -> bool:
    """True if *operation* changes registry or dependency state."""
    return type(operation) in MUTATING_OPS


def decode_operation(document: dict[str, Any] | str | bytes) -> Operation:
    """Decode a wire document (mapping or JSON text) into an operation model.

    Raises InvalidRequestError describing every validation failure.
    """
    try:
        if isinstance(document, (str, bytes)):
            return _ADAPTER.validate_json(document)
        return _ADAPTER.validate_python(document)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise InvalidRequestError(
            f"Invalid operation document: {'; '.join(problems)}",
            errors=problems,
        ) from exc
