"""Engine error taxonomy.

Domain code raises :class:`EngineError` subclasses. The service layer
converts them into ``ServiceResult(ok=False, ...)`` using :attr:`code`,
so callers see one stable error vocabulary regardless of which component
failed.

INVARIANT: An operation that raises has not mutated any state.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable error codes exposed in ``ServiceError.code``."""

    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"
    OVERFLOW = "OVERFLOW"
    INVALID_COMPOSITION = "INVALID_COMPOSITION"
    CONFLICTING_DEPENDENCY = "CONFLICTING_DEPENDENCY"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_REQUEST = "INVALID_REQUEST"


class EngineError(Exception):
    """Base class for every failure the engine reports to callers."""

    code: ErrorCode = ErrorCode.INVALID_REQUEST

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(EngineError):
    """Unknown category/variant name or index."""

    code = ErrorCode.NOT_FOUND


class DuplicateError(EngineError):
    """Name collision on add or rename."""

    code = ErrorCode.DUPLICATE


class OverflowLimitError(EngineError):
    """A category or variant list would exceed its single-byte index space."""

    code = ErrorCode.OVERFLOW


class InvalidCompositionError(EngineError):
    """Composition has the wrong length or an out-of-range slot."""

    code = ErrorCode.INVALID_COMPOSITION


class ConflictingDependencyError(EngineError):
    """Two forced layers assign different variants to one category."""

    code = ErrorCode.CONFLICTING_DEPENDENCY


class UnauthorizedError(EngineError):
    """Rejected by the authorization gate before the engine ran."""

    code = ErrorCode.UNAUTHORIZED


class InvalidRequestError(EngineError):
    """Malformed request (bad wire document, missing selector)."""

    code = ErrorCode.INVALID_REQUEST
