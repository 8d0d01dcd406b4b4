"""ServiceResult and ServiceError, the return contract of every service call.

INVARIANT: ``error`` is set exactly when ``ok`` is False. The CLI, the
operation dispatcher and embedding callers branch on ``ok`` alone.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field, model_validator

from layerforge.domain.errors import EngineError, ErrorCode


class ServiceError(BaseModel):
    """Failure payload: a stable code, a readable message, and context."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: EngineError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.detail)


class ServiceResult(BaseModel):
    """Outcome of one engine operation.

    Attributes:
        ok: Whether the operation succeeded (and, for mutations, committed).
        op: Wire name of the operation (e.g. ``"add_categories"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal notes such as no-op removals or cycles.
        error: Failure payload when ``ok`` is False.
        meta: Telemetry span tree when tracing is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _error_iff_failed(self) -> Self:
        if self.ok and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.ok and self.error is None:
            raise ValueError("A failed result must carry an error")
        return self
