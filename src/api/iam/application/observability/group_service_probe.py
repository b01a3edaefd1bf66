"""Protocol for group application service observability.

Defines the interface for domain probes that capture application-level
domain events for group service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupServiceProbe(Protocol):
    """Domain probe for group application service operations."""

    def group_created(self, group_id: str, name: str, creator_id: str) -> None:
        """Record that a group was created."""
        ...

    def group_creation_failed(self, name: str, creator_id: str, error: str) -> None:
        """Record that group creation failed."""
        ...

    def group_settings_updated(
        self, group_id: str, name: str, allow_power_user_edit: bool
    ) -> None:
        """Record that group settings were changed."""
        ...

    def member_added(self, group_id: str, user_id: str, role: str) -> None:
        """Record that a member was added to a group."""
        ...

    def duplicate_member(self, group_id: str, user_id: str) -> None:
        """Record that adding an existing member was rejected."""
        ...

    def with_context(self, context: ObservationContext) -> GroupServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupServiceProbe:
    """Default implementation of GroupServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupServiceProbe(logger=self._logger, context=context)

    def group_created(self, group_id: str, name: str, creator_id: str) -> None:
        """Record that a group was created."""
        self._logger.info(
            "group_created",
            group_id=group_id,
            name=name,
            creator_id=creator_id,
            **self._get_context_kwargs(),
        )

    def group_creation_failed(self, name: str, creator_id: str, error: str) -> None:
        """Record that group creation failed."""
        self._logger.error(
            "group_creation_failed",
            name=name,
            creator_id=creator_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def group_settings_updated(
        self, group_id: str, name: str, allow_power_user_edit: bool
    ) -> None:
        """Record that group settings were changed."""
        self._logger.info(
            "group_settings_updated",
            group_id=group_id,
            name=name,
            allow_power_user_edit=allow_power_user_edit,
            **self._get_context_kwargs(),
        )

    def member_added(self, group_id: str, user_id: str, role: str) -> None:
        """Record that a member was added to a group."""
        self._logger.info(
            "member_added",
            group_id=group_id,
            target_user_id=user_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def duplicate_member(self, group_id: str, user_id: str) -> None:
        """Record that adding an existing member was rejected."""
        self._logger.warning(
            "duplicate_member",
            group_id=group_id,
            target_user_id=user_id,
            **self._get_context_kwargs(),
        )
