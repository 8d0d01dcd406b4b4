"""Command group: variant dependencies (add, remove, modify, list)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerforge.commands._base import LayerGroup, parse_layer
from layerforge.domain.layers import Dependency
from layerforge.services.catalog import CatalogService
from layerforge.services.dependency import DependencyService

if TYPE_CHECKING:
    from layerforge.commands._context import AppContext


def _dependency(layer: str, correlated: tuple[str, ...]) -> Dependency:
    return Dependency(id=parse_layer(layer), correlated=[parse_layer(c) for c in correlated])


_DEPENDENCY_EXAMPLES = """\
  layerforge dependency add "Eye Type:EyeType.Cyclops" "Jaw Type:None"
  layerforge dependency remove "Eye Type:EyeType.Cyclops" "Jaw Type:None"
  layerforge dependency remove "Eye Type:EyeType.Cyclops"
  layerforge dependency modify "Eye Type:EyeType.Cyclops" "Nose:Nose.None"
  layerforge dependency list --start-at 100 --limit 50"""


@click.group(cls=LayerGroup, examples=_DEPENDENCY_EXAMPLES)
@click.pass_obj
def dependency(app: AppContext) -> None:
    """Manage which layers force other layers.

    Layers are written CATEGORY:VARIANT using names.
    """


@dependency.command(
    examples="""\
  layerforge dependency add 'Eye Type:EyeType.Cyclops' 'Jaw Type:None' Nose:Nose.None"""
)
@click.argument("layer")
@click.argument("correlated", nargs=-1, required=True)
@click.pass_obj
def add(app: AppContext, layer: str, correlated: tuple[str, ...]) -> None:
    """Make LAYER force every CORRELATED layer (merged with existing ones)."""
    app.emit(DependencyService(app.store).add_dependencies([_dependency(layer, correlated)]))


@dependency.command(
    examples="""\
  layerforge dependency remove "Eye Type:EyeType.Cyclops" "Jaw Type:None"
  layerforge dependency remove 'Eye Type:EyeType.Cyclops'"""
)
@click.argument("layer")
@click.argument("correlated", nargs=-1)
@click.pass_obj
def remove(app: AppContext, layer: str, correlated: tuple[str, ...]) -> None:
    """Remove CORRELATED layers from LAYER's dependency (all when none given)."""
    app.emit(DependencyService(app.store).remove_dependencies([_dependency(layer, correlated)]))


@dependency.command(
    examples="""\
  layerforge dependency modify 'Eye Type:EyeType.Cyclops' 'Jaw Type:None'"""
)
@click.argument("layer")
@click.argument("correlated", nargs=-1)
@click.pass_obj
def modify(app: AppContext, layer: str, correlated: tuple[str, ...]) -> None:
    """Replace LAYER's correlated layers wholesale (none drops the entry)."""
    app.emit(DependencyService(app.store).modify_dependencies([_dependency(layer, correlated)]))


@dependency.command(
    "list",
    examples="""\
  layerforge dependency list
  layerforge --json dependency list --start-at 100 --limit 50""",
)
@click.option("--start-at", type=click.IntRange(0, 0xFFFF), default=None, help="First entry.")
@click.option("--limit", type=click.IntRange(0, 0xFFFF), default=None, help="Maximum entries.")
@click.pass_obj
def list_cmd(app: AppContext, start_at: int | None, limit: int | None) -> None:
    """List dependency entries with their transitive includes."""
    app.emit(CatalogService(app.store).dependencies(start_at=start_at, limit=limit))
