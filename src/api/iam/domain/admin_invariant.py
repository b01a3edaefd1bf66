"""The admin-count invariant for groups.

A group must never reach a state with zero ADMIN memberships. The
decision here is pure; callers are responsible for reading the inputs
and applying the mutation in one atomic unit against the store.
"""

from __future__ import annotations

from iam.domain.exceptions import CannotRemoveLastAdminError
from iam.domain.value_objects import MemberAction
from shared_kernel.authorization.types import Role


def would_leave_no_admins(target_role: Role | None, admin_count: int) -> bool:
    """Decide whether removing or demoting the target empties the admin set.

    Args:
        target_role: Current role of the membership being changed, or None
            if the user is not a member
        admin_count: Current number of ADMIN memberships in the group

    Returns:
        True if the target is an ADMIN and no other ADMIN remains
    """
    if target_role != Role.ADMIN:
        return False
    return admin_count <= 1


def ensure_admin_remains(
    target_role: Role | None,
    admin_count: int,
    action: MemberAction,
    new_role: Role | None = None,
) -> None:
    """Raise CannotRemoveLastAdminError if the action would leave no admins.

    Args:
        target_role: Current role of the target membership
        admin_count: Current number of ADMIN memberships in the group
        action: REMOVE or DEMOTE
        new_role: For DEMOTE, the role being assigned. ADMIN -> ADMIN is
            not a demotion and always passes.
    """
    if action == MemberAction.DEMOTE and new_role == Role.ADMIN:
        return
    if would_leave_no_admins(target_role, admin_count):
        raise CannotRemoveLastAdminError(action)
