"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user, group and membership
repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_saved(self, user_id: str, email: str) -> None:
        """Record that a user was successfully saved."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class GroupRepositoryProbe(Protocol):
    """Domain probe for group repository operations."""

    def group_saved(self, group_id: str) -> None:
        """Record that a group was successfully saved."""
        ...

    def group_retrieved(self, group_id: str) -> None:
        """Record that a group was retrieved."""
        ...

    def group_not_found(self, group_id: str) -> None:
        """Record that a group was not found."""
        ...

    def group_locked(self, group_id: str) -> None:
        """Record that a group row was locked for a membership mutation."""
        ...

    def duplicate_group_slug(self, slug: str) -> None:
        """Record that a duplicate group slug was detected."""
        ...

    def with_context(self, context: ObservationContext) -> GroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class MembershipRepositoryProbe(Protocol):
    """Domain probe for membership repository operations."""

    def membership_added(self, group_id: str, user_id: str, role: str) -> None:
        """Record that a membership row was inserted."""
        ...

    def duplicate_membership(self, group_id: str, user_id: str) -> None:
        """Record that a duplicate membership insert was rejected."""
        ...

    def membership_deleted(self, group_id: str, user_id: str) -> None:
        """Record that a membership row was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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
        return {k: v for k, v in self._context.as_dict().items() if k != "user_id"}

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_saved(self, user_id: str, email: str) -> None:
        """Record that a user was successfully saved."""
        self._logger.info(
            "user_saved",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )


class DefaultGroupRepositoryProbe:
    """Default implementation of GroupRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupRepositoryProbe(logger=self._logger, context=context)

    def group_saved(self, group_id: str) -> None:
        """Record that a group was successfully saved."""
        self._logger.info(
            "group_saved",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_retrieved(self, group_id: str) -> None:
        """Record that a group was retrieved."""
        self._logger.debug(
            "group_retrieved",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, group_id: str) -> None:
        """Record that a group was not found."""
        self._logger.debug(
            "group_not_found",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_locked(self, group_id: str) -> None:
        """Record that a group row was locked for a membership mutation."""
        self._logger.debug(
            "group_locked",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def duplicate_group_slug(self, slug: str) -> None:
        """Record that a duplicate group slug was detected."""
        self._logger.warning(
            "duplicate_group_slug",
            slug=slug,
            **self._get_context_kwargs(),
        )


class DefaultMembershipRepositoryProbe:
    """Default implementation of MembershipRepositoryProbe using structlog."""

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
        return {
            k: v
            for k, v in self._context.as_dict().items()
            if k not in {"group_id", "user_id"}
        }

    def with_context(
        self, context: ObservationContext
    ) -> DefaultMembershipRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultMembershipRepositoryProbe(logger=self._logger, context=context)

    def membership_added(self, group_id: str, user_id: str, role: str) -> None:
        """Record that a membership row was inserted."""
        self._logger.debug(
            "membership_added",
            group_id=group_id,
            user_id=user_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def duplicate_membership(self, group_id: str, user_id: str) -> None:
        """Record that a duplicate membership insert was rejected."""
        self._logger.warning(
            "duplicate_membership",
            group_id=group_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def membership_deleted(self, group_id: str, user_id: str) -> None:
        """Record that a membership row was deleted."""
        self._logger.debug(
            "membership_deleted",
            group_id=group_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )
