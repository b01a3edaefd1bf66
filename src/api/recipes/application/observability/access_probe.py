"""Probe for tenant isolation and draft visibility decisions.

Denials here are the first signal of cross-tenant probing, so they are
logged at warning level even though callers see a plain 404.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from recipes.application.observability.base import ContextualProbe

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantIsolationProbe(Protocol):
    """Domain probe for resource access checks."""

    def resource_not_found(
        self, resource_type: str, resource_id: str, user_id: str
    ) -> None:
        """Record that a requested resource does not exist."""
        ...

    def cross_tenant_denied(
        self, resource_type: str, resource_id: str, user_id: str, group_id: str
    ) -> None:
        """Record that a user requested a resource of a group they are not in."""
        ...

    def resource_access_granted(
        self, resource_type: str, resource_id: str, user_id: str, role: str
    ) -> None:
        """Record that a resource passed the isolation check."""
        ...

    def recipe_draft_hidden(self, recipe_id: str, user_id: str) -> None:
        """Record that a draft was hidden from someone other than its creator."""
        ...

    def with_context(self, context: ObservationContext) -> TenantIsolationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantIsolationProbe(ContextualProbe):
    """Default implementation of TenantIsolationProbe using structlog."""

    def resource_not_found(
        self, resource_type: str, resource_id: str, user_id: str
    ) -> None:
        self._logger.info(
            "resource_not_found",
            resource_type=resource_type,
            resource_id=resource_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def cross_tenant_denied(
        self, resource_type: str, resource_id: str, user_id: str, group_id: str
    ) -> None:
        self._logger.warning(
            "cross_tenant_access_denied",
            resource_type=resource_type,
            resource_id=resource_id,
            user_id=user_id,
            resource_group_id=group_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def resource_access_granted(
        self, resource_type: str, resource_id: str, user_id: str, role: str
    ) -> None:
        self._logger.debug(
            "resource_access_granted",
            resource_type=resource_type,
            resource_id=resource_id,
            user_id=user_id,
            role=role,
            **self._get_context_kwargs(exclude={"user_id"}),
        )

    def recipe_draft_hidden(self, recipe_id: str, user_id: str) -> None:
        self._logger.info(
            "recipe_draft_hidden",
            recipe_id=recipe_id,
            user_id=user_id,
            **self._get_context_kwargs(exclude={"user_id"}),
        )
