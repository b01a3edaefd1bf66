"""Probe for comment events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from recipes.application.observability.base import ContextualProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CommentServiceProbe(Protocol):
    """Domain probe for comment service operations."""

    def comment_created(self, comment_id: str, recipe_id: str, user_id: str) -> None:
        ...

    def comment_updated(self, comment_id: str, user_id: str) -> None: ...

    def comment_deleted(self, comment_id: str, user_id: str) -> None: ...

    def comment_modification_denied(
        self, comment_id: str, user_id: str, owner_id: str, role: str, action: str
    ) -> None:
        """Record that a non-owner, non-admin tried to change a comment."""
        ...

    def with_context(self, context: ObservationContext) -> CommentServiceProbe: ...


class DefaultCommentServiceProbe(ContextualProbe):
    """Default implementation of CommentServiceProbe using structlog."""

    def comment_created(self, comment_id: str, recipe_id: str, user_id: str) -> None:
        self._logger.info(
            "comment_created",
            comment_id=comment_id,
            recipe_id=recipe_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def comment_updated(self, comment_id: str, user_id: str) -> None:
        self._logger.info(
            "comment_updated",
            comment_id=comment_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def comment_deleted(self, comment_id: str, user_id: str) -> None:
        self._logger.info(
            "comment_deleted",
            comment_id=comment_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def comment_modification_denied(
        self, comment_id: str, user_id: str, owner_id: str, role: str, action: str
    ) -> None:
        self._logger.info(
            "comment_modification_denied",
            comment_id=comment_id,
            user_id=user_id,
            owner_id=owner_id,
            role=role,
            action=action,
            **self._get_context_kwargs(exclude={"user_id"}),
        )
