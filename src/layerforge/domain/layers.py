"""Layer identifiers and trait payload models.

Two ways to address a layer:

- :class:`LayerId` uses names and is what travels on the wire.
- :class:`StoredLayerId` uses single-byte indices and is what the engine
  stores and computes with.

INVARIANT: indices are dense, zero-based and never reused, so a
StoredLayerId stays valid across renames.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Single-byte index space for categories and for variants within a category.
MAX_ENTRIES = 256

U8 = Annotated[int, Field(ge=0, le=MAX_ENTRIES - 1)]
U16 = Annotated[int, Field(ge=0, le=0xFFFF)]
Name = Annotated[str, Field(min_length=1)]

LAYER_SEPARATOR = ":"


class LayerId(BaseModel):
    """Name-based reference to a (category, variant) pair."""

    model_config = ConfigDict(frozen=True)

    category: Name
    variant: Name

    @classmethod
    def parse(cls, text: str) -> LayerId:
        """Parse ``CATEGORY:VARIANT`` (split on the first separator)."""
        category, sep, variant = text.partition(LAYER_SEPARATOR)
        if not sep:
            msg = f"Expected CATEGORY{LAYER_SEPARATOR}VARIANT, got {text!r}"
            raise ValueError(msg)
        return cls(category=category, variant=variant)

    def __str__(self) -> str:
        return f"{self.category}{LAYER_SEPARATOR}{self.variant}"


class StoredLayerId(BaseModel):
    """Compact index-based reference to a (category, variant) pair."""

    model_config = ConfigDict(frozen=True)

    category: U8
    variant: U8

    def __str__(self) -> str:
        return f"{self.category}{LAYER_SEPARATOR}{self.variant}"


class VariantInfo(BaseModel):
    """Display data for one trait variant."""

    model_config = ConfigDict(frozen=True)

    name: Name
    display_name: str
    art: str | None = None


class CategoryInfo(BaseModel):
    """A new trait category with its initial variants."""

    model_config = ConfigDict(frozen=True)

    name: Name
    skip: bool = False
    variants: list[VariantInfo] = Field(default_factory=list)


class VariantModification(BaseModel):
    """Replacement display data (possibly a rename) for an existing variant."""

    model_config = ConfigDict(frozen=True)

    name: Name
    modified_variant: VariantInfo


class Dependency(BaseModel):
    """Name-based dependency: selecting ``id`` forces every ``correlated`` layer."""

    model_config = ConfigDict(frozen=True)

    id: LayerId
    correlated: list[LayerId] = Field(default_factory=list)


class StoredDependency(BaseModel):
    """Index-based dependency as held by the dependency graph."""

    model_config = ConfigDict(frozen=True)

    id: StoredLayerId
    correlated: list[StoredLayerId] = Field(default_factory=list)
