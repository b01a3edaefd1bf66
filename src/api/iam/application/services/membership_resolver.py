"""Membership resolution for IAM bounded context.

The membership store is the single source of truth for "is this user in
this group and with what role". Every other authorization component
composes on top of this resolver instead of reading roles itself.
"""

from __future__ import annotations

from iam.application.observability import (
    DefaultMembershipResolverProbe,
    MembershipResolverProbe,
)
from iam.domain.value_objects import GroupId, Membership, UserId
from iam.ports.repositories import IMembershipRepository
from shared_kernel.authorization.exceptions import (
    MissingCapabilityError,
    NotAMemberError,
    UnauthorizedError,
)
from shared_kernel.authorization.permissions import has_permission
from shared_kernel.authorization.types import Capability, Role


class MembershipResolver:
    """Looks up a user's role within a group.

    Does not manage transactions. Callers invoke it inside the unit of
    work of the use case so every decision in a request reads the same
    membership snapshot.
    """

    def __init__(
        self,
        membership_repository: IMembershipRepository,
        probe: MembershipResolverProbe | None = None,
    ):
        self._memberships = membership_repository
        self._probe = probe or DefaultMembershipResolverProbe()

    async def resolve_membership(
        self, user_id: UserId, group_id: GroupId
    ) -> Membership | None:
        """Return the user's membership in the group, or None."""
        return await self._memberships.get(user_id, group_id)

    async def require_membership(
        self, user_id: UserId | None, group_id: GroupId | None
    ) -> Membership:
        """Return the user's membership in the group or fail.

        Raises:
            UnauthorizedError: If there is no verified identity
            NotAMemberError: If the user has no membership in the group
        """
        if user_id is None:
            raise UnauthorizedError()

        membership = (
            await self._memberships.get(user_id, group_id)
            if group_id is not None
            else None
        )
        if membership is None:
            self._probe.membership_denied(
                user_id=user_id.value,
                group_id=group_id.value if group_id else None,
            )
            raise NotAMemberError(
                user_id=user_id.value,
                group_id=group_id.value if group_id else "",
            )

        self._probe.membership_resolved(
            user_id=user_id.value,
            group_id=membership.group_id.value,
            role=membership.role.value,
        )
        return membership

    async def require_capability(
        self,
        user_id: UserId | None,
        group_id: GroupId | None,
        capability: Capability,
    ) -> Membership:
        """Require membership and check the role's static capability.

        Raises:
            UnauthorizedError: If there is no verified identity
            NotAMemberError: If the user has no membership in the group
            MissingCapabilityError: If the role lacks the capability
        """
        membership = await self.require_membership(user_id, group_id)
        self.check_capability(membership, capability)
        return membership

    def check_capability(self, membership: Membership, capability: Capability) -> None:
        """Raise MissingCapabilityError unless the member's role holds the capability."""
        if not has_permission(membership.role, capability):
            self._probe.capability_denied(
                user_id=membership.user_id.value,
                group_id=membership.group_id.value,
                role=membership.role.value,
                capability=capability.value,
            )
            raise MissingCapabilityError(capability)

    async def get_user_role(self, user_id: UserId, group_id: GroupId) -> Role | None:
        """Return the user's role in the group, or None if not a member."""
        membership = await self._memberships.get(user_id, group_id)
        return membership.role if membership else None

    async def get_primary_membership(self, user_id: UserId) -> Membership | None:
        """Return the user's earliest-joined membership, or None."""
        return await self._memberships.get_primary(user_id)
