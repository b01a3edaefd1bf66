"""Probe for recipe lifecycle events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from recipes.application.observability.base import ContextualProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RecipeServiceProbe(Protocol):
    """Domain probe for recipe service operations."""

    def recipe_created(self, recipe_id: str, group_id: str, user_id: str) -> None: ...

    def recipe_updated(self, recipe_id: str, user_id: str) -> None: ...

    def recipe_published(self, recipe_id: str, user_id: str) -> None: ...

    def recipe_edit_denied(self, recipe_id: str, user_id: str, reason: str) -> None:
        """Record that an edit was refused after the recipe was found visible."""
        ...

    def recipe_deleted(self, recipe_id: str, user_id: str) -> None: ...

    def recipe_draft_discarded(self, recipe_id: str, user_id: str) -> None: ...

    def with_context(self, context: ObservationContext) -> RecipeServiceProbe: ...


class DefaultRecipeServiceProbe(ContextualProbe):
    """Default implementation of RecipeServiceProbe using structlog."""

    def recipe_created(self, recipe_id: str, group_id: str, user_id: str) -> None:
        self._logger.info(
            "recipe_created",
            recipe_id=recipe_id,
            group_id=group_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id", "group_id"}),
        )

    def recipe_updated(self, recipe_id: str, user_id: str) -> None:
        self._logger.info(
            "recipe_updated",
            recipe_id=recipe_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_published(self, recipe_id: str, user_id: str) -> None:
        self._logger.info(
            "recipe_published",
            recipe_id=recipe_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_edit_denied(self, recipe_id: str, user_id: str, reason: str) -> None:
        self._logger.info(
            "recipe_edit_denied",
            recipe_id=recipe_id,
            user_id=user_id,
            reason=reason,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_deleted(self, recipe_id: str, user_id: str) -> None:
        self._logger.info(
            "recipe_deleted",
            recipe_id=recipe_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_draft_discarded(self, recipe_id: str, user_id: str) -> None:
        self._logger.info(
            "recipe_draft_discarded",
            recipe_id=recipe_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )
