"""Per-group governance of recipe edit and delete rights.

The static permission table says a POWER_USER may update recipes. Each
group can narrow that with its `allow_power_user_edit` flag, which
applies to edits of existing recipes only. Creation is governed by the
static table alone.
"""

from __future__ import annotations

from iam.application.observability import (
    DefaultGovernancePolicyProbe,
    GovernancePolicyProbe,
)
from iam.application.services.membership_resolver import MembershipResolver
from iam.domain.value_objects import GroupId, Membership, UserId
from iam.ports.repositories import IGroupRepository
from shared_kernel.authorization.exceptions import GovernanceDeniedError
from shared_kernel.authorization.permissions import has_permission
from shared_kernel.authorization.types import Capability, Role


def role_may_edit(role: Role | None, allow_power_user_edit: bool) -> bool:
    """Decide edit rights from a role and the group's governance flag.

    ADMIN always; POWER_USER only while the flag is set; READ_ONLY and
    non-members never.
    """
    if role is None or not has_permission(role, Capability.RECIPE_UPDATE):
        return False
    if role == Role.ADMIN:
        return True
    return allow_power_user_edit


class GovernancePolicy:
    """Combines a member's role with group settings to decide recipe rights."""

    def __init__(
        self,
        membership_resolver: MembershipResolver,
        group_repository: IGroupRepository,
        probe: GovernancePolicyProbe | None = None,
    ):
        self._resolver = membership_resolver
        self._groups = group_repository
        self._probe = probe or DefaultGovernancePolicyProbe()

    async def can_edit_recipe(self, user_id: UserId, group_id: GroupId) -> bool:
        """Check whether the user may edit existing recipes in the group."""
        membership = await self._resolver.resolve_membership(user_id, group_id)
        if membership is None:
            self._probe.recipe_edit_evaluated(
                user_id=user_id.value,
                group_id=group_id.value,
                role=None,
                allow_power_user_edit=False,
                allowed=False,
            )
            return False
        return await self.member_can_edit(membership)

    async def member_can_edit(self, membership: Membership) -> bool:
        """Evaluate edit rights for an already-resolved membership."""
        group = await self._groups.get_by_id(membership.group_id)
        allow_flag = group.allow_power_user_edit if group is not None else False
        allowed = group is not None and role_may_edit(membership.role, allow_flag)
        self._probe.recipe_edit_evaluated(
            user_id=membership.user_id.value,
            group_id=membership.group_id.value,
            role=membership.role.value,
            allow_power_user_edit=allow_flag,
            allowed=allowed,
        )
        return allowed

    async def require_edit(self, membership: Membership) -> None:
        """Raise GovernanceDeniedError unless the member may edit recipes."""
        if not await self.member_can_edit(membership):
            raise GovernanceDeniedError()

    async def can_delete_recipe(self, user_id: UserId, group_id: GroupId) -> bool:
        """Check whether the user may delete recipes. ADMIN only, no override."""
        role = await self._resolver.get_user_role(user_id, group_id)
        return role == Role.ADMIN
