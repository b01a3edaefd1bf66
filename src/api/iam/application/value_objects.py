"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
cross-cutting concerns like authentication context and read-only view objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.value_objects import GroupId, UserId
from shared_kernel.authorization.types import Role


@dataclass(frozen=True)
class CurrentUser:
    """Represents the currently authenticated user with their active group.

    This is extracted from the bearer token issued by the external session
    service. It deliberately carries no role: the role is always resolved
    from the membership store for the group being accessed.

    This is an application-layer concept (not domain) because it represents
    the authentication context of the request, not a core business entity.
    """

    user_id: UserId
    username: str
    group_id: GroupId | None = None


@dataclass(frozen=True)
class MemberView:
    """Read-only view of a group member joined with their profile."""

    user_id: UserId
    email: str
    name: str | None
    role: Role
    joined_at: datetime
