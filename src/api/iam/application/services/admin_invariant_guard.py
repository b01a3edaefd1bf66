"""Admin invariant guard for membership mutations.

Removing or demoting a member is a check-then-act sequence: count the
admins, then write. Two concurrent requests could each observe two admins
and together leave none. The guarded operations here lock the group row
before counting so that concurrent mutations on the same group serialize,
and the count and the write commit together in the caller's transaction.
"""

from __future__ import annotations

from iam.application.observability import (
    AdminInvariantGuardProbe,
    DefaultAdminInvariantGuardProbe,
)
from iam.domain.admin_invariant import ensure_admin_remains
from iam.domain.aggregates import Group
from iam.domain.admin_invariant import would_leave_no_admins as _would_leave_no_admins
from iam.domain.exceptions import CannotRemoveLastAdminError
from iam.domain.value_objects import GroupId, MemberAction, Membership, UserId
from iam.ports.exceptions import GroupNotFoundError, MemberNotFoundError
from iam.ports.repositories import IGroupRepository, IMembershipRepository
from shared_kernel.authorization.types import Role


class AdminInvariantGuard:
    """Keeps every group with at least one ADMIN membership.

    Must be used inside an open transaction. The row lock taken by the
    guarded operations is released when that transaction ends.
    """

    def __init__(
        self,
        group_repository: IGroupRepository,
        membership_repository: IMembershipRepository,
        probe: AdminInvariantGuardProbe | None = None,
    ):
        self._groups = group_repository
        self._memberships = membership_repository
        self._probe = probe or DefaultAdminInvariantGuardProbe()

    async def would_leave_no_admins(
        self, group_id: GroupId, user_id: UserId, action: MemberAction
    ) -> bool:
        """Check, without locking, whether the action would empty the admin set.

        Advisory only. Use remove_member or change_role to apply the
        mutation atomically.
        """
        membership = await self._memberships.get(user_id, group_id)
        admin_count = await self._memberships.count_admins(group_id)
        return _would_leave_no_admins(
            membership.role if membership else None, admin_count
        )

    async def remove_member(self, group_id: GroupId, user_id: UserId) -> Membership:
        """Delete a membership unless it is the group's last admin.

        Returns:
            The removed membership

        Raises:
            GroupNotFoundError: If the group does not exist
            MemberNotFoundError: If the user is not a member
            CannotRemoveLastAdminError: If the user is the only admin
        """
        membership = await self._lock_and_get(group_id, user_id)
        await self._check(membership, MemberAction.REMOVE)

        await self._memberships.delete(user_id, group_id)
        self._probe.member_removed(
            group_id=group_id.value,
            user_id=user_id.value,
            role=membership.role.value,
        )
        return membership

    async def change_role(
        self, group_id: GroupId, user_id: UserId, new_role: Role
    ) -> Membership:
        """Change a member's role unless it demotes the group's last admin.

        Returns:
            The updated membership

        Raises:
            GroupNotFoundError: If the group does not exist
            MemberNotFoundError: If the user is not a member
            CannotRemoveLastAdminError: If the user is the only admin and
                the new role is not ADMIN
        """
        membership = await self._lock_and_get(group_id, user_id)
        if membership.role == new_role:
            return membership
        await self._check(membership, MemberAction.DEMOTE, new_role)

        updated = await self._memberships.update_role(user_id, group_id, new_role)
        if updated is None:
            raise MemberNotFoundError(f"User {user_id} is not a member of this group")

        self._probe.member_role_changed(
            group_id=group_id.value,
            user_id=user_id.value,
            old_role=membership.role.value,
            new_role=new_role.value,
        )
        return updated

    async def lock_group(self, group_id: GroupId) -> Group:
        """Lock the group row for the rest of the transaction.

        Callers that authorize a membership mutation take this lock first,
        so the actor's own role is read after any concurrent change to it
        has committed.

        Raises:
            GroupNotFoundError: If the group does not exist
        """
        group = await self._groups.lock_for_update(group_id)
        if group is None:
            raise GroupNotFoundError(f"Group {group_id} not found")
        return group

    async def _lock_and_get(self, group_id: GroupId, user_id: UserId) -> Membership:
        await self.lock_group(group_id)
        membership = await self._memberships.get(user_id, group_id)
        if membership is None:
            raise MemberNotFoundError(f"User {user_id} is not a member of this group")
        return membership

    async def _check(
        self,
        membership: Membership,
        action: MemberAction,
        new_role: Role | None = None,
    ) -> None:
        if not membership.is_admin():
            return
        admin_count = await self._memberships.count_admins(membership.group_id)
        try:
            ensure_admin_remains(membership.role, admin_count, action, new_role)
        except CannotRemoveLastAdminError:
            self._probe.last_admin_protected(
                group_id=membership.group_id.value,
                user_id=membership.user_id.value,
                action=action.value,
            )
            raise
