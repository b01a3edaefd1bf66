from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ContextualProbe:
    """Shared plumbing for the structlog-backed probes of this context."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Get context metadata as kwargs, skipping keys passed explicitly."""
        if self._context is None:
            return {}
        exclude = exclude or set()
        return {k: v for k, v in self._context.as_dict().items() if k not in exclude}

    def with_context(self, context: ObservationContext):
        """Create a new probe with observation context bound."""
        return type(self)(logger=self._logger, context=context)
