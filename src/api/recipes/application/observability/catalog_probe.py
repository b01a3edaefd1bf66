"""Probe for categories, tags and favorites."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from recipes.application.observability.base import ContextualProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CatalogProbe(Protocol):
    """Domain probe for taxonomy and favorite operations."""

    def term_created(self, kind: str, term_id: str, group_id: str, slug: str) -> None:
        ...

    def term_updated(self, kind: str, term_id: str, slug: str) -> None: ...

    def term_deleted(self, kind: str, term_id: str) -> None: ...

    def favorite_added(self, recipe_id: str, user_id: str) -> None: ...

    def favorite_removed(self, recipe_id: str, user_id: str) -> None: ...

    def with_context(self, context: ObservationContext) -> CatalogProbe: ...


class DefaultCatalogProbe(ContextualProbe):
    """Default implementation of CatalogProbe using structlog."""

    def term_created(self, kind: str, term_id: str, group_id: str, slug: str) -> None:
        self._logger.info(
            f"{kind}_created",
            term_id=term_id,
            group_id=group_id,
            slug=slug,
            **self._get_context_kwargs(exclude={"group_id"}),
        )

    def term_updated(self, kind: str, term_id: str, slug: str) -> None:
        self._logger.info(
            f"{kind}_updated",
            term_id=term_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def term_deleted(self, kind: str, term_id: str) -> None:
        self._logger.info(
            f"{kind}_deleted",
            term_id=term_id,
            **self._get_context_kwargs(),
        )

    def favorite_added(self, recipe_id: str, user_id: str) -> None:
        self._logger.debug(
            "favorite_added",
            recipe_id=recipe_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def favorite_removed(self, recipe_id: str, user_id: str) -> None:
        self._logger.debug(
            "favorite_removed",
            recipe_id=recipe_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )
