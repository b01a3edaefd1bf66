"""Ownership-based authorization for user-authored resources.

A comment may be modified by its author regardless of role, and by any
ADMIN of the group. Group governance settings never apply here.
"""

from __future__ import annotations

from shared_kernel.authorization.permissions import has_permission
from shared_kernel.authorization.types import Capability, CommentAction, Role

_OWN_CAPABILITY = {
    CommentAction.UPDATE: Capability.COMMENT_UPDATE_OWN,
    CommentAction.DELETE: Capability.COMMENT_DELETE_OWN,
}

_ANY_CAPABILITY = {
    CommentAction.UPDATE: Capability.COMMENT_UPDATE_ANY,
    CommentAction.DELETE: Capability.COMMENT_DELETE_ANY,
}


def can_modify_comment(
    requester_id: str,
    comment_owner_id: str,
    requester_role: Role,
    action: CommentAction = CommentAction.UPDATE,
) -> bool:
    """Decide whether the requester may update or delete a comment.

    Args:
        requester_id: ID of the acting user
        comment_owner_id: ID of the comment's author
        requester_role: Acting user's role in the recipe's group
        action: UPDATE or DELETE (both evaluate identically)

    Returns:
        True if the requester authored the comment or may act on any comment
    """
    if requester_id == comment_owner_id and has_permission(
        requester_role, _OWN_CAPABILITY[action]
    ):
        return True
    return has_permission(requester_role, _ANY_CAPABILITY[action])
