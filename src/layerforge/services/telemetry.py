"""Service-call tracing for ``--verbose`` runs.

``@traced`` opens a root :class:`Span` around a service method and
``trace_span`` blocks inside it add children. When the method returns a
:class:`ServiceResult`, the finished tree is copied into
``meta["telemetry"]`` along with the result's ``op`` and ``ok`` status.

Tracing stays off (one ContextVar read per call) until
:func:`enable_telemetry` runs in the current context.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from layerforge.services.result import ServiceResult

log = structlog.get_logger("layerforge.telemetry")

_tracing: ContextVar[bool] = ContextVar("_tracing", default=False)
_active_span: ContextVar[Span | None] = ContextVar("_active_span", default=None)


@dataclass
class Span:
    """One timed step in a service call."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def finish(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def as_dict(self) -> dict[str, Any]:
        tree: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            tree["annotations"] = dict(self.annotations)
        if self.children:
            tree["children"] = [child.as_dict() for child in self.children]
        return tree


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a block as a child of the active span.

    Yields None when tracing is off or no ``@traced`` call is active, so
    callers guard annotations with ``if span:``.
    """
    parent = _active_span.get() if _tracing.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name)
    parent.children.append(span)
    token = _active_span.set(span)
    try:
        yield span
    finally:
        span.finish()
        _active_span.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Trace a service method; attach the span tree to its ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _tracing.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _active_span.set(root)
        try:
            result = func(*args, **kwargs)
        finally:
            root.finish()
            _active_span.reset(token)

        if not isinstance(result, ServiceResult):
            return result

        root.annotate("op", result.op)
        root.annotate("ok", result.ok)
        log.debug(
            "service.traced",
            span=root.name,
            op=result.op,
            ok=result.ok,
            duration_ms=round(root.duration_ms, 2),
        )
        meta = {**(result.meta or {}), "telemetry": root.as_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Turn tracing on for the current context (the CLI does this for -v)."""
    _tracing.set(True)


def disable_telemetry() -> None:
    _tracing.set(False)
