"""Probe for the recipe import pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from recipes.application.observability.base import ContextualProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RecipeImportProbe(Protocol):
    """Domain probe for recipe imports."""

    def recipe_import_requested(self, user_id: str, url: str) -> None: ...

    def recipe_import_rejected(self, user_id: str, url: str, reason: str) -> None:
        """Record that the URL or the extracted payload was refused."""
        ...

    def recipe_import_throttled(self, user_id: str, limit: int) -> None: ...

    def recipe_import_failed(self, user_id: str, url: str, error: str) -> None: ...

    def recipe_imported(self, recipe_id: str, user_id: str, url: str) -> None: ...

    def with_context(self, context: ObservationContext) -> RecipeImportProbe: ...


class DefaultRecipeImportProbe(ContextualProbe):
    """Default implementation of RecipeImportProbe using structlog."""

    def recipe_import_requested(self, user_id: str, url: str) -> None:
        self._logger.info(
            "recipe_import_requested",
            user_id=user_id,
            url=url,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_import_rejected(self, user_id: str, url: str, reason: str) -> None:
        self._logger.info(
            "recipe_import_rejected",
            user_id=user_id,
            url=url,
            reason=reason,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_import_throttled(self, user_id: str, limit: int) -> None:
        self._logger.warning(
            "recipe_import_throttled",
            user_id=user_id,
            limit=limit,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_import_failed(self, user_id: str, url: str, error: str) -> None:
        self._logger.error(
            "recipe_import_failed",
            user_id=user_id,
            url=url,
            error=error,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_imported(self, recipe_id: str, user_id: str, url: str) -> None:
        self._logger.info(
            "recipe_imported",
            recipe_id=recipe_id,
            user_id=user_id,
            url=url,
            **self._get_context_kwargs(exclude={"user_id"}),
        )
