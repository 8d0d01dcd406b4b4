"""Route stdlib and structlog records through one stderr handler.

Engine modules log with ``logging.getLogger(__name__)``; telemetry logs
through structlog. Both end up in the same ``ProcessorFormatter`` so a
``--log-json`` run emits one JSON object per line regardless of source.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Libraries whose INFO/DEBUG chatter never reaches the user.
QUIET_LIBRARIES = ("sqlalchemy", "networkx")

_HANDLER_NAME = "layerforge"


def _level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _build_handler(pre_chain: list[structlog.types.Processor], log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    quiet: bool = False,
) -> None:
    """Install the layerforge stderr handler and set logger levels.

    Calling this again replaces the handler installed by the previous
    call; handlers owned by anything else are left in place.

    Args:
        verbose: ``layerforge.*`` loggers emit DEBUG and up.
        log_json: Render JSON lines instead of the console format.
        quiet: ``layerforge.*`` loggers emit ERROR and up (ignored when
            *verbose* is set).
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(_build_handler(pre_chain, log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger("layerforge").setLevel(_level(verbose=verbose, quiet=quiet))
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
