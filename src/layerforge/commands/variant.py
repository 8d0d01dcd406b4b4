"""Command group: trait variants (add, modify, show)."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from layerforge.commands._base import LayerGroup, build_model
from layerforge.domain.layers import LayerId, StoredLayerId, VariantInfo, VariantModification
from layerforge.services.catalog import CatalogService
from layerforge.services.registry import RegistryService

if TYPE_CHECKING:
    from layerforge.commands._context import AppContext


_VARIANT_EXAMPLES = """\
  layerforge variant add "Eye Type" EyeType.Laser --display-name Laser --art-file laser.svg
  layerforge variant modify "Eye Type" EyeType.Laser --rename EyeType.Beam
  layerforge variant show "Eye Type" EyeType.Cyclops
  layerforge variant show --index 2 0 --art"""


@click.group(cls=LayerGroup, examples=_VARIANT_EXAMPLES)
@click.pass_obj
def variant(app: AppContext) -> None:
    """Create, edit, and inspect variants within a category."""


@variant.command(
    examples="""\
  layerforge variant add Background Background.Red --display-name Red
  layerforge variant add "Eye Type" EyeType.Laser --art-file laser.svg"""
)
@click.argument("category")
@click.argument("name")
@click.option("--display-name", default=None, help="Display name (defaults to NAME).")
@click.option("--art-file", type=click.File("r"), default=None, help="Inline art (SVG) file.")
@click.pass_obj
def add(
    app: AppContext,
    category: str,
    name: str,
    display_name: str | None,
    art_file: TextIO | None,
) -> None:
    """Append a variant to an existing category."""
    info = build_model(
        VariantInfo,
        name=name,
        display_name=display_name if display_name is not None else name,
        art=art_file.read() if art_file else None,
    )
    app.emit(RegistryService(app.store).add_variants(category, [info]))


@variant.command(
    examples="""\
  layerforge variant modify Background Background.Red --display-name Crimson
  layerforge variant modify "Eye Type" EyeType.Laser --rename EyeType.Beam"""
)
@click.argument("category")
@click.argument("name")
@click.option("--rename", "new_name", default=None, help="New variant name.")
@click.option("--display-name", default=None, help="New display name.")
@click.option("--art-file", type=click.File("r"), default=None, help="Replacement art file.")
@click.pass_obj
def modify(
    app: AppContext,
    category: str,
    name: str,
    new_name: str | None,
    display_name: str | None,
    art_file: TextIO | None,
) -> None:
    """Replace a variant's name, display name, or art.

    Unspecified fields keep their current values.
    """
    current = CatalogService(app.store).variant(
        by_name=build_model(LayerId, category=category, variant=name), include_art=True
    )
    if not current.ok:
        app.emit(current)
    info = current.data["info"]
    modification = VariantModification(
        name=name,
        modified_variant=build_model(
            VariantInfo,
            name=new_name if new_name is not None else name,
            display_name=display_name if display_name is not None else info["display_name"],
            art=art_file.read() if art_file else info["art"],
        ),
    )
    app.emit(RegistryService(app.store).modify_variants(category, [modification]))


@variant.command(
    examples="""\
  layerforge variant show "Eye Type" EyeType.Cyclops
  layerforge variant show --index 2 0 --art"""
)
@click.argument("category", required=False)
@click.argument("name", required=False)
@click.option(
    "--index",
    type=(click.IntRange(0, 255), click.IntRange(0, 255)),
    default=None,
    help="Category and variant indices (takes precedence over names).",
)
@click.option("--art", "include_art", is_flag=True, help="Include inline art.")
@click.pass_obj
def show(
    app: AppContext,
    category: str | None,
    name: str | None,
    index: tuple[int, int] | None,
    include_art: bool,
) -> None:
    """Show one variant addressed by names or indices."""
    if category is not None and name is None:
        raise click.UsageError("Give both CATEGORY and NAME, or use --index.")
    by_name = LayerId(category=category, variant=name) if category and name else None
    by_index = StoredLayerId(category=index[0], variant=index[1]) if index else None
    result = CatalogService(app.store).variant(
        by_name=by_name, by_index=by_index, include_art=include_art
    )
    app.emit(result)
