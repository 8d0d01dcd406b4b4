"""Skull-type classification from two designated composition slots.

Calling services roll traits from different weight columns (normal,
jawless, cyclops). The classification they need is derived here from the
eye-configuration and jaw slots of a composition.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from layerforge.domain.layers import LayerId, StoredLayerId
from layerforge.domain.registry import Registry


class SkullTypeSentinels(BaseModel):
    """The layers that mark a skull as cyclops and as jawless."""

    model_config = ConfigDict(frozen=True)

    cyclops: StoredLayerId
    jawless: StoredLayerId


class SkullType(BaseModel):
    """Independent classification flags for one composition."""

    model_config = ConfigDict(frozen=True)

    is_cyclops: bool
    is_jawless: bool


def _occupies(composition: Sequence[int], layer: StoredLayerId) -> bool:
    if layer.category >= len(composition):
        return False
    return composition[layer.category] == layer.variant


def classify_skull(composition: Sequence[int], sentinels: SkullTypeSentinels) -> SkullType:
    """Flag each axis whose slot holds the sentinel variant."""
    return SkullType(
        is_cyclops=_occupies(composition, sentinels.cyclops),
        is_jawless=_occupies(composition, sentinels.jawless),
    )


def resolve_sentinels(
    registry: Registry,
    *,
    eye_category: str,
    cyclops_variant: str,
    jaw_category: str,
    jawless_variant: str,
) -> SkullTypeSentinels:
    """Find the sentinel layers by name (raises NotFoundError if absent)."""
    return SkullTypeSentinels(
        cyclops=registry.resolve(LayerId(category=eye_category, variant=cyclops_variant)),
        jawless=registry.resolve(LayerId(category=jaw_category, variant=jawless_variant)),
    )
