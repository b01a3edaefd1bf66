"""Domain exceptions for IAM bounded context."""

from __future__ import annotations

from iam.domain.value_objects import MemberAction
from shared_kernel.authorization.exceptions import ForbiddenError

_LAST_ADMIN_MESSAGES = {
    MemberAction.REMOVE: "Cannot remove the last admin from the group",
    MemberAction.DEMOTE: "Cannot demote the last admin from the group",
}


class CannotRemoveLastAdminError(ForbiddenError):
    """Raised when a removal or demotion would leave a group with no admins.

    Remove and demote are evaluated identically but carry distinct
    user-facing messages.
    """

    def __init__(self, action: MemberAction = MemberAction.REMOVE) -> None:
        self.action = action
        super().__init__(_LAST_ADMIN_MESSAGES[action])
