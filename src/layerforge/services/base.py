"""BaseService — abstract foundation for all layerforge services.

Every service receives a :class:`TraitStore` at construction time.
Mutating services own their transaction boundaries via
``self._store.transaction()``; read-only services use the live state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from layerforge.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from layerforge.domain.errors import EngineError
    from layerforge.infrastructure.store import TraitStore

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Subclasses implement one component's operations and translate
    :class:`EngineError` into failed results.

    Usage::

        class RegistryService(BaseService):
            def add_categories(self, categories) -> ServiceResult:
                try:
                    with self._store.transaction() as state:
                        ...
                except EngineError as exc:
                    return self._failure("add_categories", exc)
    """

    def __init__(self, store: TraitStore) -> None:
        self._store = store

    @staticmethod
    def _failure(op: str, exc: EngineError) -> ServiceResult:
        """Convert a domain error into a failed ServiceResult."""
        logger.debug("%s failed: %s (%s)", op, exc.message, exc.code)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc),
        )
