"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates and memberships. Implementations live in iam.infrastructure
and share the caller's session, so every call joins the transaction the
application service has opened.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Group, User
from iam.domain.value_objects import GroupId, Membership, UserId
from shared_kernel.authorization.types import Role


@runtime_checkable
class IGroupRepository(Protocol):
    """Repository for Group aggregate persistence."""

    async def save(self, group: Group) -> None:
        """Persist a group aggregate.

        Creates a new group or updates an existing one.

        Raises:
            DuplicateGroupSlugError: If the slug is already taken
        """
        ...

    async def get_by_id(self, group_id: GroupId) -> Group | None:
        """Retrieve a group by its ID.

        Returns:
            The Group aggregate, or None if not found
        """
        ...

    async def lock_for_update(self, group_id: GroupId) -> Group | None:
        """Retrieve a group and lock its row until the transaction ends.

        Serializes concurrent membership mutations on the same group so
        that admin counting and the subsequent write happen atomically.

        Returns:
            The locked Group aggregate, or None if not found
        """
        ...

    async def slug_exists(
        self, slug: str, exclude_group_id: GroupId | None = None
    ) -> bool:
        """Check whether a slug is used by any group other than the excluded one."""
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Users are provisioned from the external session service, so this
    repository only handles profile storage and retrieval.
    """

    async def save(self, user: User) -> None:
        """Persist a user aggregate.

        Creates a new user or updates an existing one.
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by email (case-insensitive)."""
        ...

    async def get_many(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Retrieve several users keyed by ID. Unknown IDs are omitted."""
        ...


@runtime_checkable
class IMembershipRepository(Protocol):
    """Repository for (user, group) -> role memberships.

    The membership table is the single source of truth for roles. At most
    one membership exists per (user, group) pair.
    """

    async def get(self, user_id: UserId, group_id: GroupId) -> Membership | None:
        """Retrieve the membership for a user in a group, or None."""
        ...

    async def get_primary(self, user_id: UserId) -> Membership | None:
        """Retrieve the user's earliest-joined membership, or None."""
        ...

    async def list_by_group(self, group_id: GroupId) -> list[Membership]:
        """List all memberships in a group, newest first."""
        ...

    async def count_admins(self, group_id: GroupId) -> int:
        """Count ADMIN memberships in a group."""
        ...

    async def add(self, membership: Membership) -> None:
        """Insert a membership.

        Raises:
            DuplicateMembershipError: If the user is already a member
        """
        ...

    async def update_role(
        self, user_id: UserId, group_id: GroupId, role: Role
    ) -> Membership | None:
        """Change a member's role.

        Returns:
            The updated membership, or None if the user is not a member
        """
        ...

    async def delete(self, user_id: UserId, group_id: GroupId) -> bool:
        """Delete a membership.

        Returns:
            True if deleted, False if not found
        """
        ...
