"""Port-level exceptions for IAM bounded context.

These exceptions represent errors that can occur during repository
operations. They should be caught and handled by the application layer
or translated at the presentation boundary.
"""


class DuplicateGroupSlugError(Exception):
    """Raised when a group slug is already taken by another group."""

    pass


class DuplicateMembershipError(Exception):
    """Raised when adding a user who is already a member of the group.

    Memberships are unique per (user, group) pair.
    """

    pass


class MemberNotFoundError(Exception):
    """Raised when a member operation targets a user outside the group."""

    pass


class CannotRemoveSelfError(Exception):
    """Raised when an admin tries to remove their own membership."""

    pass


class GroupNotFoundError(Exception):
    """Raised when a group does not exist."""

    pass
