"""Command: apply a JSON operation document."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from layerforge.commands._base import LayerCommand

if TYPE_CHECKING:
    from layerforge.commands._context import AppContext


@click.command(
    cls=LayerCommand,
    examples="""\
  layerforge apply add-categories.json
  echo '{"op": "state"}' | layerforge --json apply
  layerforge apply - < transmute.json""",
)
@click.argument("source", type=click.File("r"), default="-")
@click.pass_obj
def apply(app: AppContext, source: TextIO) -> None:
    """Decode an operation document from SOURCE (default stdin) and run it."""
    app.emit(app.dispatcher.dispatch_document(source.read()))
