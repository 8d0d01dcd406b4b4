"""ComposeService — read-only composition queries for satellite services.

``transmute`` computes a new dependency-consistent composition;
``skull_type`` classifies one. Neither touches stored state, so both are
safe to call repeatedly and in any order.
"""

from __future__ import annotations

from collections.abc import Sequence

from layerforge.domain.errors import EngineError
from layerforge.domain.layers import LayerId
from layerforge.domain.skull import SkullTypeSentinels, classify_skull, resolve_sentinels
from layerforge.domain.state import TraitState
from layerforge.domain.transmute import transmute, validate_composition
from layerforge.services.base import BaseService
from layerforge.services.contracts import SkullTypeData, SkullTypeLayerIdsData, TransmuteData
from layerforge.services.result import ServiceResult
from layerforge.services.telemetry import trace_span, traced


class ComposeService(BaseService):
    """Handles transmutation and skull-type classification."""

    def _sentinels(self, state: TraitState) -> SkullTypeSentinels:
        """Explicitly set sentinels, else the configured names resolved now."""
        if state.sentinels is not None:
            return state.sentinels
        cfg = self._store.settings.skull
        return resolve_sentinels(
            state.registry,
            eye_category=cfg.eye_category,
            cyclops_variant=cfg.cyclops_variant,
            jaw_category=cfg.jaw_category,
            jawless_variant=cfg.jawless_variant,
        )

    @traced
    def transmute(self, current: Sequence[int], new_layers: Sequence[LayerId]) -> ServiceResult:
        """Apply *new_layers* and everything they force to *current*.

        Args:
            current: Existing composition, one variant index per category.
            new_layers: Requested layers, by name.
        """
        op = "transmute"
        state = self._store.state
        try:
            with trace_span("transmute") as span:
                composition = transmute(state.registry, state.graph, current, new_layers)
                if span:
                    span.annotate("requested", len(new_layers))
                    span.annotate(
                        "changed", sum(a != b for a, b in zip(current, composition, strict=True))
                    )
        except EngineError as exc:
            return self._failure(op, exc)

        return ServiceResult(ok=True, op=op, data=TransmuteData(composition=composition).dump())

    @traced
    def skull_type(self, composition: Sequence[int]) -> ServiceResult:
        """Report whether *composition* is a cyclops and/or jawless skull."""
        op = "skull_type"
        state = self._store.state
        try:
            validate_composition(state.registry, composition)
            skull = classify_skull(composition, self._sentinels(state))
        except EngineError as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data=SkullTypeData(is_cyclops=skull.is_cyclops, is_jawless=skull.is_jawless).dump(),
        )

    @traced
    def skull_type_layer_ids(self) -> ServiceResult:
        """Return the effective cyclops and jawless sentinel layers."""
        op = "skull_type_layer_ids"
        try:
            sentinels = self._sentinels(self._store.state)
        except EngineError as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data=SkullTypeLayerIdsData(
                cyclops=sentinels.cyclops, jawless=sentinels.jawless
            ).dump(),
        )
