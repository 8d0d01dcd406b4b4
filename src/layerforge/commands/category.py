"""Command group: trait categories (add, modify, show, state)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerforge.commands._base import LayerGroup, build_model
from layerforge.domain.layers import CategoryInfo, VariantInfo
from layerforge.services.catalog import CatalogService
from layerforge.services.registry import RegistryService

if TYPE_CHECKING:
    from layerforge.commands._context import AppContext


def _variant_spec(text: str) -> VariantInfo:
    """Parse ``NAME`` or ``NAME=DISPLAY`` into variant display data."""
    name, sep, display = text.partition("=")
    if not name:
        raise click.BadParameter(f"Variant name missing in {text!r}")
    return build_model(VariantInfo, name=name, display_name=display if sep else name)


_CATEGORY_EXAMPLES = """\
  layerforge category add "Eye Type" --variant EyeType.Normal=Normal --variant EyeType.Cyclops=Cyclops
  layerforge category add Background --skip
  layerforge category modify Background --rename Backdrop --no-skip
  layerforge category show "Eye Type" --start-at 10 --limit 5
  layerforge category state"""


@click.group(cls=LayerGroup, examples=_CATEGORY_EXAMPLES)
@click.pass_obj
def category(app: AppContext) -> None:
    """Create, edit, and browse trait categories."""


@category.command(
    examples="""\
  layerforge category add "Jaw Type" --variant None --variant JawType.Square=Square
  layerforge category add Background --skip"""
)
@click.argument("name")
@click.option("--skip", is_flag=True, help="Exclude this category from weighted rolling.")
@click.option(
    "--variant",
    "variants",
    multiple=True,
    help="Initial variant as NAME or NAME=DISPLAY (repeatable).",
)
@click.pass_obj
def add(app: AppContext, name: str, skip: bool, variants: tuple[str, ...]) -> None:
    """Append a new category with optional initial variants."""
    info = build_model(
        CategoryInfo, name=name, skip=skip, variants=[_variant_spec(v) for v in variants]
    )
    app.emit(RegistryService(app.store).add_categories([info]))


@category.command(
    examples="""\
  layerforge category modify Background --rename Backdrop
  layerforge category modify Backdrop --no-skip"""
)
@click.argument("name")
@click.option("--rename", "new_name", default=None, help="New category name.")
@click.option("--skip/--no-skip", "new_skip", default=None, help="Set the skip flag.")
@click.pass_obj
def modify(app: AppContext, name: str, new_name: str | None, new_skip: bool | None) -> None:
    """Rename a category and/or change its skip flag."""
    result = RegistryService(app.store).modify_category(
        name, new_name=new_name, new_skip=new_skip
    )
    app.emit(result)


@category.command(
    examples="""\
  layerforge category show
  layerforge category show "Eye Type" --art --limit 2
  layerforge category show --index 3 --start-at 30"""
)
@click.argument("name", required=False)
@click.option("--index", type=click.IntRange(0, 255), default=None, help="Category index.")
@click.option("--start-at", type=click.IntRange(0, 255), default=None, help="First variant index.")
@click.option("--limit", type=click.IntRange(0, 255), default=None, help="Maximum variants.")
@click.option("--art", "include_art", is_flag=True, help="Include inline art.")
@click.pass_obj
def show(
    app: AppContext,
    name: str | None,
    index: int | None,
    start_at: int | None,
    limit: int | None,
    include_art: bool,
) -> None:
    """Show a category (by name, else --index, else the first) and its variants."""
    result = CatalogService(app.store).category(
        name=name,
        index=index,
        start_at=start_at,
        limit=limit,
        include_art=include_art,
    )
    app.emit(result)


@category.command(examples="  layerforge --json category state")
@click.pass_obj
def state(app: AppContext) -> None:
    """Show the category count and the categories skipped when rolling."""
    app.emit(CatalogService(app.store).state())
