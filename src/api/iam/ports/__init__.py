"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and domain services without
specifying implementation details. This allows for dependency inversion
and makes the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    CannotRemoveSelfError,
    DuplicateGroupSlugError,
    DuplicateMembershipError,
    GroupNotFoundError,
    MemberNotFoundError,
)
from iam.ports.repositories import (
    IGroupRepository,
    IMembershipRepository,
    IUserRepository,
)

__all__ = [
    "IGroupRepository",
    "IMembershipRepository",
    "IUserRepository",
    "CannotRemoveSelfError",
    "DuplicateGroupSlugError",
    "DuplicateMembershipError",
    "GroupNotFoundError",
    "MemberNotFoundError",
]
