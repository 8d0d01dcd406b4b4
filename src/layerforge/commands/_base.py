"""Click command classes and argument parsers shared by every command.

Commands and groups built with ``LayerCommand`` / ``LayerGroup`` take an
``examples=`` string and grow an eager ``--examples`` flag that prints it,
which keeps ``--help`` to the synopsis.
"""

from __future__ import annotations

from typing import Any, TypeVar

import click
from pydantic import BaseModel, ValidationError

from layerforge.domain.layers import LayerId, StoredLayerId

_M = TypeVar("_M", bound=BaseModel)


def examples_option(examples: str) -> click.Option:
    """Build an eager ``--examples`` flag that prints *examples* and exits."""

    def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and not ctx.resilient_parsing:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        is_eager=True,
        expose_value=False,
        callback=_print_examples,
        help="Show usage examples and exit.",
    )


class LayerCommand(click.Command):
    """Command accepting an ``examples`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(examples_option(examples))


class LayerGroup(click.Group):
    """Group accepting an ``examples`` keyword; its subcommands are LayerCommands."""

    command_class = LayerCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(examples_option(examples))


# ── Argument parsing ──────────────────────────────────────────────────


def parse_layer(text: str) -> LayerId:
    """Parse a ``CATEGORY:VARIANT`` argument into a LayerId."""
    try:
        return LayerId.parse(text)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def parse_stored_layer(text: str) -> StoredLayerId:
    """Parse a ``CATEGORY_INDEX:VARIANT_INDEX`` argument."""
    category, sep, variant = text.partition(":")
    try:
        if not sep:
            raise ValueError(text)
        return StoredLayerId(category=int(category), variant=int(variant))
    except ValueError as exc:
        msg = f"Expected CATEGORY_INDEX:VARIANT_INDEX (0-255), got {text!r}"
        raise click.BadParameter(msg) from exc


def parse_composition(text: str) -> list[int]:
    """Parse a comma-separated list of variant indices."""
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError as exc:
        msg = f"Composition must be comma-separated integers, got {text!r}"
        raise click.BadParameter(msg) from exc


def build_model(model: type[_M], **fields: Any) -> _M:
    """Construct *model* from argument values, reporting bad values as usage errors."""
    try:
        return model(**fields)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(map(str, err['loc'])) or model.__name__}: {err['msg']}"
            for err in exc.errors()
        )
        raise click.BadParameter(problems) from exc
