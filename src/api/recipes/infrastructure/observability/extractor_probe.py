"""Domain probe for the HTTP recipe extractor client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RecipeExtractorProbe(Protocol):
    """Domain probe for calls to the extraction service."""

    def extraction_requested(self, url: str) -> None:
        """Record that an extraction was requested."""
        ...

    def extraction_succeeded(self, url: str, title: str) -> None:
        """Record that the service returned a candidate recipe."""
        ...

    def extraction_failed(
        self, url: str, reason: str, status_code: int | None = None
    ) -> None:
        """Record that the service could not produce a recipe."""
        ...

    def with_context(self, context: ObservationContext) -> RecipeExtractorProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRecipeExtractorProbe:
    """Default implementation of RecipeExtractorProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultRecipeExtractorProbe:
        """Create a new probe with observation context bound."""
        return DefaultRecipeExtractorProbe(logger=self._logger, context=context)

    def extraction_requested(self, url: str) -> None:
        self._logger.info(
            "recipe_extraction_requested",
            url=url,
            **self._get_context_kwargs(),
        )

    def extraction_succeeded(self, url: str, title: str) -> None:
        self._logger.info(
            "recipe_extraction_succeeded",
            url=url,
            title=title,
            **self._get_context_kwargs(),
        )

    def extraction_failed(
        self, url: str, reason: str, status_code: int | None = None
    ) -> None:
        self._logger.warning(
            "recipe_extraction_failed",
            url=url,
            reason=reason,
            status_code=status_code,
            **self._get_context_kwargs(),
        )
