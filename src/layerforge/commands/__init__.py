"""Subcommand modules for layerforge.

Provides register_commands() which uses deferred imports to keep
``layerforge --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    4 groups (have subcommands) + 3 standalone commands.
    """
    # --- Groups ---
    from layerforge.commands.category import category
    from layerforge.commands.dependency import dependency
    from layerforge.commands.skull import skull
    from layerforge.commands.variant import variant

    cli.add_command(category)
    cli.add_command(variant)
    cli.add_command(dependency)
    cli.add_command(skull)

    # --- Standalone commands ---
    from layerforge.commands.apply import apply
    from layerforge.commands.export import export
    from layerforge.commands.transmute import transmute

    cli.add_command(transmute)
    cli.add_command(export)
    cli.add_command(apply)
