"""Command group: skull-type classification and sentinel layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerforge.commands._base import LayerGroup, parse_composition, parse_stored_layer
from layerforge.services.compose import ComposeService
from layerforge.services.registry import RegistryService

if TYPE_CHECKING:
    from layerforge.commands._context import AppContext


_SKULL_EXAMPLES = """\
  layerforge skull type 0,4,2,0
  layerforge skull layers
  layerforge skull set 3:1 4:0"""


@click.group(cls=LayerGroup, examples=_SKULL_EXAMPLES)
@click.pass_obj
def skull(app: AppContext) -> None:
    """Classify compositions as cyclops and/or jawless."""


@skull.command("type", examples="  layerforge --json skull type 0,4,2,0")
@click.argument("composition")
@click.pass_obj
def type_cmd(app: AppContext, composition: str) -> None:
    """Report the skull type of COMPOSITION (comma-separated indices)."""
    app.emit(ComposeService(app.store).skull_type(parse_composition(composition)))


@skull.command(examples="  layerforge skull layers")
@click.pass_obj
def layers(app: AppContext) -> None:
    """Show the effective cyclops and jawless sentinel layers."""
    app.emit(ComposeService(app.store).skull_type_layer_ids())


@skull.command("set", examples="  layerforge skull set 3:1 4:0")
@click.argument("cyclops")
@click.argument("jawless")
@click.pass_obj
def set_cmd(app: AppContext, cyclops: str, jawless: str) -> None:
    """Set the sentinel layers as CATEGORY_INDEX:VARIANT_INDEX pairs."""
    result = RegistryService(app.store).set_skull_type_layers(
        parse_stored_layer(cyclops), parse_stored_layer(jawless)
    )
    app.emit(result)
