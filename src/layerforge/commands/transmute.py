"""Command: transmute a composition with requested layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerforge.commands._base import LayerCommand, parse_composition, parse_layer
from layerforge.services.compose import ComposeService

if TYPE_CHECKING:
    from layerforge.commands._context import AppContext


@click.command(
    cls=LayerCommand,
    examples="""\
  layerforge transmute 0,0,0 --layer "Eye Type:EyeType.Cyclops"
  layerforge -q transmute 3,1,4,1 --layer Background:Background.Red --layer Nose:Nose.None""",
)
@click.argument("composition")
@click.option(
    "--layer",
    "layers",
    multiple=True,
    required=True,
    help="Requested layer as CATEGORY:VARIANT (repeatable).",
)
@click.pass_obj
def transmute(app: AppContext, composition: str, layers: tuple[str, ...]) -> None:
    """Apply layers (and everything they force) to COMPOSITION.

    COMPOSITION is a comma-separated list of variant indices, one per
    category.
    """
    current = parse_composition(composition)
    requested = [parse_layer(text) for text in layers]
    app.emit(ComposeService(app.store).transmute(current, requested))
