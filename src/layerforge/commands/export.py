"""Command: index-based bulk export for high-volume consumers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerforge.commands._base import LayerCommand
from layerforge.services.catalog import CatalogService

if TYPE_CHECKING:
    from layerforge.commands._context import AppContext


@click.command(
    cls=LayerCommand,
    examples="""\
  layerforge --json export > traits.json
  layerforge -v export""",
)
@click.pass_obj
def export(app: AppContext) -> None:
    """Export category names, skip indices and dependencies by index."""
    app.emit(CatalogService(app.store).bulk_export())
