"""Registry: trait categories and their ordered variants.

The registry is an owned store keyed by stable integer index. Names are
resolved through lookup tables that are rebuilt after every structural
mutation; a name is never a storage key.

INVARIANT: Categories and variants are append-only. Indices are dense,
zero-based, capped at :data:`MAX_ENTRIES` and never reused.
INVARIANT: Every mutating method validates its whole batch before the
first write, so a raised :class:`EngineError` leaves the registry as it was.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from layerforge.domain.errors import (
    DuplicateError,
    InvalidRequestError,
    NotFoundError,
    OverflowLimitError,
)
from layerforge.domain.layers import (
    MAX_ENTRIES,
    CategoryInfo,
    LayerId,
    StoredLayerId,
    VariantInfo,
    VariantModification,
)

logger = logging.getLogger(__name__)


@dataclass
class Variant:
    """One concrete choice within a category."""

    name: str
    display_name: str
    art: str | None = None

    @classmethod
    def from_info(cls, info: VariantInfo) -> Variant:
        return cls(name=info.name, display_name=info.display_name, art=info.art)


@dataclass
class Category:
    """A named axis of trait variation."""

    name: str
    skip: bool = False
    variants: list[Variant] = field(default_factory=list)


class Registry:
    """Index-keyed store of categories and variants with name resolution."""

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        self._categories: list[Category] = list(categories)
        self._category_lookup: dict[str, int] = {}
        self._variant_lookup: list[dict[str, int]] = []
        self._rebuild_lookup()

    # ------------------------------------------------------------------
    # Lookup maintenance
    # ------------------------------------------------------------------

    def _rebuild_lookup(self) -> None:
        self._category_lookup = {cat.name: idx for idx, cat in enumerate(self._categories)}
        self._variant_lookup = [
            {var.name: idx for idx, var in enumerate(cat.variants)} for cat in self._categories
        ]

    def copy(self) -> Registry:
        """Return an independent deep copy (used as a transaction working set)."""
        return copy.deepcopy(self)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._categories)

    @property
    def category_count(self) -> int:
        return len(self._categories)

    @property
    def total_layers(self) -> int:
        """Number of (category, variant) pairs in the registry."""
        return sum(len(cat.variants) for cat in self._categories)

    @property
    def category_names(self) -> list[str]:
        return [cat.name for cat in self._categories]

    @property
    def skip_indices(self) -> list[int]:
        """Indices of categories excluded from weighted rolling."""
        return [idx for idx, cat in enumerate(self._categories) if cat.skip]

    def variant_counts(self) -> list[int]:
        return [len(cat.variants) for cat in self._categories]

    def category_index(self, name: str) -> int:
        """Resolve a category name to its index."""
        idx = self._category_lookup.get(name)
        if idx is None:
            raise NotFoundError(f"Category name: {name} does not exist", category=name)
        return idx

    def category(self, index: int) -> Category:
        """Return the category at *index*."""
        if not 0 <= index < len(self._categories):
            raise NotFoundError(
                f"There are only {len(self._categories)} categories",
                category_index=index,
            )
        return self._categories[index]

    def variant(self, layer: StoredLayerId) -> Variant:
        """Return the variant addressed by *layer*."""
        cat = self.category(layer.category)
        if layer.variant >= len(cat.variants):
            raise NotFoundError(
                f"Category {cat.name} has only {len(cat.variants)} variants",
                category=cat.name,
                variant_index=layer.variant,
            )
        return cat.variants[layer.variant]

    def resolve(self, layer: LayerId) -> StoredLayerId:
        """Map a name-based LayerId to its StoredLayerId."""
        cat_idx = self.category_index(layer.category)
        var_idx = self._variant_lookup[cat_idx].get(layer.variant)
        if var_idx is None:
            raise NotFoundError(
                f"Category {layer.category} does not have a variant named {layer.variant}",
                category=layer.category,
                variant=layer.variant,
            )
        return StoredLayerId(category=cat_idx, variant=var_idx)

    def resolve_all(self, layers: Iterable[LayerId]) -> list[StoredLayerId]:
        return [self.resolve(layer) for layer in layers]

    def display(self, layer: StoredLayerId) -> LayerId:
        """Map a StoredLayerId back to its names."""
        var = self.variant(layer)
        return LayerId(category=self._categories[layer.category].name, variant=var.name)

    def display_all(self, layers: Iterable[StoredLayerId]) -> list[LayerId]:
        return [self.display(layer) for layer in layers]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_categories(self, categories: Sequence[CategoryInfo]) -> int:
        """Append new categories (with their variants). Returns the new count."""
        if len(self._categories) + len(categories) > MAX_ENTRIES:
            raise OverflowLimitError(
                "Reached maximum number of trait categories",
                limit=MAX_ENTRIES,
                requested=len(categories),
            )
        taken = set(self._category_lookup)
        for info in categories:
            if info.name in taken:
                raise DuplicateError(
                    f"Category name: {info.name} already exists", category=info.name
                )
            taken.add(info.name)
            _check_new_variants(info.name, set(), 0, info.variants)

        for info in categories:
            self._categories.append(
                Category(
                    name=info.name,
                    skip=info.skip,
                    variants=[Variant.from_info(v) for v in info.variants],
                )
            )
        self._rebuild_lookup()
        logger.debug("Added %d categories (total %d)", len(categories), len(self._categories))
        return len(self._categories)

    def add_variants(self, category_name: str, variants: Sequence[VariantInfo]) -> int:
        """Append variants to an existing category. Returns its new variant count."""
        cat_idx = self.category_index(category_name)
        cat = self._categories[cat_idx]
        _check_new_variants(
            cat.name, set(self._variant_lookup[cat_idx]), len(cat.variants), variants
        )
        cat.variants.extend(Variant.from_info(v) for v in variants)
        self._rebuild_lookup()
        logger.debug("Added %d variants to %s", len(variants), cat.name)
        return len(cat.variants)

    def modify_category(
        self,
        name: str,
        *,
        new_name: str | None = None,
        new_skip: bool | None = None,
    ) -> bool:
        """Rename a category and/or change its skip flag. Returns True if changed."""
        if new_name is not None and not new_name:
            raise InvalidRequestError("Category name must not be empty", category=name)
        cat_idx = self.category_index(name)
        cat = self._categories[cat_idx]
        rename = new_name is not None and new_name != name
        if rename and new_name in self._category_lookup:
            raise DuplicateError(f"Category name: {new_name} already exists", category=new_name)

        changed = False
        if rename and new_name is not None:
            cat.name = new_name
            changed = True
        if new_skip is not None and new_skip != cat.skip:
            cat.skip = new_skip
            changed = True
        if changed:
            self._rebuild_lookup()
        return changed

    def modify_variants(
        self, category: str, modifications: Sequence[VariantModification]
    ) -> int:
        """Replace display data (and possibly names) of existing variants.

        Modifications apply in order, so a later entry may address a variant
        by the name an earlier entry gave it. Returns the number applied.
        """
        cat_idx = self.category_index(category)
        cat = self._categories[cat_idx]
        names = dict(self._variant_lookup[cat_idx])
        planned: list[tuple[int, VariantInfo]] = []
        for mod in modifications:
            var_idx = names.get(mod.name)
            if var_idx is None:
                raise NotFoundError(
                    f"Category {category} does not have a variant named {mod.name}",
                    category=category,
                    variant=mod.name,
                )
            new_name = mod.modified_variant.name
            if new_name != mod.name:
                if new_name in names:
                    raise DuplicateError(
                        f"Variant name: {new_name} already exists under category: {category}",
                        category=category,
                        variant=new_name,
                    )
                del names[mod.name]
                names[new_name] = var_idx
            planned.append((var_idx, mod.modified_variant))

        for var_idx, info in planned:
            cat.variants[var_idx] = Variant.from_info(info)
        self._rebuild_lookup()
        return len(planned)


def _check_new_variants(
    category: str,
    existing: set[str],
    existing_count: int,
    variants: Sequence[VariantInfo],
) -> None:
    """Validate a batch of new variants against cap and name collisions."""
    if existing_count + len(variants) > MAX_ENTRIES:
        raise OverflowLimitError(
            f"Reached maximum number of variants for category: {category}",
            category=category,
            limit=MAX_ENTRIES,
        )
    taken = set(existing)
    for info in variants:
        if info.name in taken:
            raise DuplicateError(
                f"Variant name: {info.name} already exists under category: {category}",
                category=category,
                variant=info.name,
            )
        taken.add(info.name)
