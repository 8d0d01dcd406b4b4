"""Whole-state snapshot I/O between SQLite tables and :class:`TraitState`.

The caller owns the transaction — pass a ``Connection`` obtained from
``engine.begin()`` so a snapshot write is a single atomic replace.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select

from layerforge.domain.dependencies import DependencyGraph
from layerforge.domain.layers import StoredDependency, StoredLayerId
from layerforge.domain.registry import Category, Registry, Variant
from layerforge.domain.skull import SkullTypeSentinels
from layerforge.domain.state import TraitState
from layerforge.infrastructure.database.schema import (
    categories,
    dependencies,
    dependency_members,
    skull_sentinels,
    variants,
)

if TYPE_CHECKING:
    from sqlalchemy import Connection


def read_snapshot(conn: Connection) -> TraitState:
    """Load categories, variants, dependencies and sentinels in index order."""
    cats: list[Category] = [
        Category(name=row.name, skip=bool(row.skip))
        for row in conn.execute(select(categories).order_by(categories.c.idx))
    ]
    for row in conn.execute(select(variants).order_by(variants.c.category_idx, variants.c.idx)):
        cats[row.category_idx].variants.append(
            Variant(name=row.name, display_name=row.display_name, art=row.art)
        )

    members: dict[int, list[StoredLayerId]] = {}
    for row in conn.execute(
        select(dependency_members).order_by(
            dependency_members.c.dependency_position, dependency_members.c.position
        )
    ):
        members.setdefault(row.dependency_position, []).append(
            StoredLayerId(category=row.category_idx, variant=row.variant_idx)
        )
    entries = [
        StoredDependency(
            id=StoredLayerId(category=row.category_idx, variant=row.variant_idx),
            correlated=members.get(row.position, []),
        )
        for row in conn.execute(select(dependencies).order_by(dependencies.c.position))
    ]

    sentinel_rows = {
        row.kind: StoredLayerId(category=row.category_idx, variant=row.variant_idx)
        for row in conn.execute(select(skull_sentinels))
    }
    sentinels = None
    if {"cyclops", "jawless"} <= sentinel_rows.keys():
        sentinels = SkullTypeSentinels(
            cyclops=sentinel_rows["cyclops"], jawless=sentinel_rows["jawless"]
        )

    return TraitState(
        registry=Registry(cats),
        graph=DependencyGraph(entries),
        sentinels=sentinels,
    )


def write_snapshot(conn: Connection, state: TraitState) -> None:
    """Replace every stored row with the contents of *state*."""
    # Children first so foreign keys never dangle mid-write.
    for table in (dependency_members, dependencies, skull_sentinels, variants, categories):
        conn.execute(delete(table))

    cat_rows: list[dict[str, Any]] = []
    var_rows: list[dict[str, Any]] = []
    for cat_idx, cat in enumerate(state.registry.categories):
        cat_rows.append({"idx": cat_idx, "name": cat.name, "skip": cat.skip})
        var_rows.extend(
            {
                "category_idx": cat_idx,
                "idx": var_idx,
                "name": var.name,
                "display_name": var.display_name,
                "art": var.art,
            }
            for var_idx, var in enumerate(cat.variants)
        )
    if cat_rows:
        conn.execute(insert(categories), cat_rows)
    if var_rows:
        conn.execute(insert(variants), var_rows)

    dep_rows: list[dict[str, Any]] = []
    member_rows: list[dict[str, Any]] = []
    for position, dep in enumerate(state.graph.entries()):
        dep_rows.append(
            {
                "position": position,
                "category_idx": dep.id.category,
                "variant_idx": dep.id.variant,
            }
        )
        member_rows.extend(
            {
                "dependency_position": position,
                "position": member_pos,
                "category_idx": member.category,
                "variant_idx": member.variant,
            }
            for member_pos, member in enumerate(dep.correlated)
        )
    if dep_rows:
        conn.execute(insert(dependencies), dep_rows)
    if member_rows:
        conn.execute(insert(dependency_members), member_rows)

    if state.sentinels is not None:
        conn.execute(
            insert(skull_sentinels),
            [
                {
                    "kind": kind,
                    "category_idx": layer.category,
                    "variant_idx": layer.variant,
                }
                for kind, layer in (
                    ("cyclops", state.sentinels.cyclops),
                    ("jawless", state.sentinels.jawless),
                )
            ],
        )
