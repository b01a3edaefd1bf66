"""Authorization primitives shared across bounded contexts.

Provides the role/capability registry, ownership rules and the error
taxonomy that the IAM and Recipes contexts compose on top of.
"""

from shared_kernel.authorization.exceptions import (
    AuthorizationError,
    ForbiddenError,
    GovernanceDeniedError,
    MissingCapabilityError,
    NotAMemberError,
    NotOwnerError,
    ResourceNotFoundError,
    UnauthorizedError,
)
from shared_kernel.authorization.ownership import can_modify_comment
from shared_kernel.authorization.permissions import (
    PERMISSIONS,
    capabilities_for,
    has_permission,
    require_permission,
)
from shared_kernel.authorization.types import (
    Capability,
    CommentAction,
    ResourceType,
    Role,
)

__all__ = [
    "AuthorizationError",
    "Capability",
    "CommentAction",
    "ForbiddenError",
    "GovernanceDeniedError",
    "MissingCapabilityError",
    "NotAMemberError",
    "NotOwnerError",
    "PERMISSIONS",
    "ResourceNotFoundError",
    "ResourceType",
    "Role",
    "UnauthorizedError",
    "can_modify_comment",
    "capabilities_for",
    "has_permission",
    "require_permission",
]
