"""Domain probes for Recipes repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RecipeRepositoryProbe(Protocol):
    """Domain probe for recipe repository operations."""

    def recipe_saved(self, recipe_id: str, status: str) -> None:
        """Record that a recipe was successfully saved."""
        ...

    def recipe_not_found(self, recipe_id: str) -> None:
        """Record that a recipe was not found."""
        ...

    def recipe_deleted(self, recipe_id: str) -> None:
        """Record that a recipe row was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> RecipeRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class TaxonomyRepositoryProbe(Protocol):
    """Domain probe for category and tag repository operations."""

    def term_saved(self, kind: str, term_id: str, slug: str) -> None:
        """Record that a category or tag was saved."""
        ...

    def duplicate_slug(self, kind: str, group_id: str, slug: str) -> None:
        """Record that a slug collided within a group."""
        ...

    def with_context(self, context: ObservationContext) -> TaxonomyRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRecipeRepositoryProbe:
    """Default implementation of RecipeRepositoryProbe using structlog."""

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
    ) -> DefaultRecipeRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRecipeRepositoryProbe(logger=self._logger, context=context)

    def recipe_saved(self, recipe_id: str, status: str) -> None:
        self._logger.debug(
            "recipe_saved",
            recipe_id=recipe_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def recipe_not_found(self, recipe_id: str) -> None:
        self._logger.debug(
            "recipe_not_found",
            recipe_id=recipe_id,
            **self._get_context_kwargs(),
        )

    def recipe_deleted(self, recipe_id: str) -> None:
        self._logger.debug(
            "recipe_deleted",
            recipe_id=recipe_id,
            **self._get_context_kwargs(),
        )


class DefaultTaxonomyRepositoryProbe:
    """Default implementation of TaxonomyRepositoryProbe using structlog."""

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
        return {k: v for k, v in self._context.as_dict().items() if k != "group_id"}

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTaxonomyRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTaxonomyRepositoryProbe(logger=self._logger, context=context)

    def term_saved(self, kind: str, term_id: str, slug: str) -> None:
        self._logger.debug(
            f"{kind}_saved",
            term_id=term_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def duplicate_slug(self, kind: str, group_id: str, slug: str) -> None:
        self._logger.warning(
            "duplicate_slug",
            kind=kind,
            group_id=group_id,
            slug=slug,
            **self._get_context_kwargs(),
        )
