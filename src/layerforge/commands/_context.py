"""AppContext: per-invocation state handed to every command.

The root group builds one from the resolved settings and stores it as
``ctx.obj``; commands receive it through ``@click.pass_obj``. Opening the
store is deferred until a command touches it, so ``--help``,
``--examples`` and argument errors never create a database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerforge.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from layerforge.config.settings import LayerforgeSettings
    from layerforge.infrastructure.store import TraitStore
    from layerforge.services.dispatch import Dispatcher
    from layerforge.services.result import ServiceResult


class AppContext:
    """Settings, lazily opened store, and result emission for one CLI run."""

    def __init__(self, settings: LayerforgeSettings) -> None:
        from layerforge.config.logging import configure_logging
        from layerforge.services.telemetry import enable_telemetry

        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._store: TraitStore | None = None
        self._dispatcher: Dispatcher | None = None

        configure_logging(
            verbose=settings.verbose, log_json=settings.log_json, quiet=settings.quiet
        )
        if settings.verbose:
            enable_telemetry()

    @property
    def store(self) -> TraitStore:
        """The trait store, opened on first access."""
        if self._store is None:
            from layerforge.infrastructure.store import TraitStore

            self._store = TraitStore(self.settings)
        return self._store

    @property
    def dispatcher(self) -> Dispatcher:
        """Dispatcher over :attr:`store`; the CLI runs every operation unrestricted."""
        if self._dispatcher is None:
            from layerforge.services.dispatch import Dispatcher

            self._dispatcher = Dispatcher(self.store)
        return self._dispatcher

    def close(self) -> None:
        """Release the store's database engine, if one was opened."""
        if self._store is not None:
            self._store.close()
            self._store = None
            self._dispatcher = None

    def emit(self, result: ServiceResult) -> None:
        """Write *result* and set the exit status.

        Success goes to stdout and returns; warnings follow on stderr
        unless ``--json`` already carries them in the payload. Failure goes
        to stderr and exits with status 1.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
