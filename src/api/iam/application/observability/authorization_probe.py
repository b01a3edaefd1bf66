"""Probes for the IAM authorization components.

Covers the membership resolver, the governance policy and the admin
invariant guard. Denials are logged at info level so that access
patterns can be audited without enabling debug output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MembershipResolverProbe(Protocol):
    """Domain probe for membership resolution."""

    def membership_resolved(self, user_id: str, group_id: str, role: str) -> None:
        """Record that a user's membership was resolved."""
        ...

    def membership_denied(self, user_id: str, group_id: str | None) -> None:
        """Record that a user was denied for lack of membership."""
        ...

    def capability_denied(
        self, user_id: str, group_id: str, role: str, capability: str
    ) -> None:
        """Record that a member's role lacks a capability."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class GovernancePolicyProbe(Protocol):
    """Domain probe for governance decisions."""

    def recipe_edit_evaluated(
        self,
        user_id: str,
        group_id: str,
        role: str | None,
        allow_power_user_edit: bool,
        allowed: bool,
    ) -> None:
        """Record the outcome of an edit-rights evaluation."""
        ...

    def with_context(self, context: ObservationContext) -> GovernancePolicyProbe:
        """Create a new probe with observation context bound."""
        ...


class AdminInvariantGuardProbe(Protocol):
    """Domain probe for the admin invariant guard."""

    def last_admin_protected(self, group_id: str, user_id: str, action: str) -> None:
        """Record that a mutation was rejected to keep an admin in the group."""
        ...

    def member_removed(self, group_id: str, user_id: str, role: str) -> None:
        """Record that a membership was deleted under the guard."""
        ...

    def member_role_changed(
        self, group_id: str, user_id: str, old_role: str, new_role: str
    ) -> None:
        """Record that a membership role was changed under the guard."""
        ...

    def with_context(self, context: ObservationContext) -> AdminInvariantGuardProbe:
        """Create a new probe with observation context bound."""
        ...


class _ContextualProbe:
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


class DefaultMembershipResolverProbe(_ContextualProbe):
    """Default implementation of MembershipResolverProbe using structlog."""

    def membership_resolved(self, user_id: str, group_id: str, role: str) -> None:
        self._logger.debug(
            "membership_resolved",
            user_id=user_id,
            group_id=group_id,
            role=role,
            **self._get_context_kwargs(exclude={"user_id", "group_id"}),
        )

    def membership_denied(self, user_id: str, group_id: str | None) -> None:
        self._logger.info(
            "membership_denied",
            user_id=user_id,
            group_id=group_id,
            **self._get_context_kwargs(exclude={"user_id", "group_id"}),
        )

    def capability_denied(
        self, user_id: str, group_id: str, role: str, capability: str
    ) -> None:
        self._logger.info(
            "capability_denied",
            user_id=user_id,
            group_id=group_id,
            role=role,
            capability=capability,
            **self._get_context_kwargs(exclude={"user_id", "group_id"}),
        )


class DefaultGovernancePolicyProbe(_ContextualProbe):
    """Default implementation of GovernancePolicyProbe using structlog."""

    def recipe_edit_evaluated(
        self,
        user_id: str,
        group_id: str,
        role: str | None,
        allow_power_user_edit: bool,
        allowed: bool,
    ) -> None:
        log = self._logger.debug if allowed else self._logger.info
        log(
            "recipe_edit_evaluated",
            user_id=user_id,
            group_id=group_id,
            role=role,
            allow_power_user_edit=allow_power_user_edit,
            allowed=allowed,
            **self._get_context_kwargs(exclude={"user_id", "group_id"}),
        )


class DefaultAdminInvariantGuardProbe(_ContextualProbe):
    """Default implementation of AdminInvariantGuardProbe using structlog."""

    def last_admin_protected(self, group_id: str, user_id: str, action: str) -> None:
        self._logger.warning(
            "last_admin_protected",
            group_id=group_id,
            target_user_id=user_id,
            action=action,
            **self._get_context_kwargs(exclude={"group_id"}),
        )

    def member_removed(self, group_id: str, user_id: str, role: str) -> None:
        self._logger.info(
            "member_removed",
            group_id=group_id,
            target_user_id=user_id,
            role=role,
            **self._get_context_kwargs(exclude={"group_id"}),
        )

    def member_role_changed(
        self, group_id: str, user_id: str, old_role: str, new_role: str
    ) -> None:
        self._logger.info(
            "member_role_changed",
            group_id=group_id,
            target_user_id=user_id,
            old_role=old_role,
            new_role=new_role,
            **self._get_context_kwargs(exclude={"group_id"}),
        )
