"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ulid import ULID

from shared_kernel.authorization.types import Role


@dataclass(frozen=True)
class GroupId:
    """Identifier for a Group aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> GroupId:
        """Generate a new GroupId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> GroupId:
        """Create GroupId from string value.

        Args:
            value: ULID string

        Returns:
            GroupId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid GroupId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    User IDs come from the external identity provider, so any non-empty
    string up to 255 characters is accepted. Locally created users get
    a ULID.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Raises:
            ValueError: If value is empty or longer than 255 characters
        """
        value = value.strip()
        if not value or len(value) > 255:
            raise ValueError(f"Invalid UserId: {value!r}")
        return cls(value=value)


class MemberAction(StrEnum):
    """Membership mutations that can reduce a group's admin count."""

    REMOVE = "remove"
    DEMOTE = "demote"


@dataclass(frozen=True)
class Membership:
    """A user's role within one group.

    Unique per (user_id, group_id). This is the only place a user's role
    is recorded; every authorization decision reads it from here.
    """

    user_id: UserId
    group_id: GroupId
    role: Role
    joined_at: datetime

    def is_admin(self) -> bool:
        """Check if this membership carries the ADMIN role."""
        return self.role == Role.ADMIN
