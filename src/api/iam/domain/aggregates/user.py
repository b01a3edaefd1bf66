"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import UserId


@dataclass(frozen=True)
class User:
    """User aggregate representing a person in the system.

    Users are provisioned just-in-time from the external session service
    or when an admin adds them to a group. Credentials are never stored
    here.
    """

    id: UserId
    email: str
    name: str | None = None

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.email})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)

    @property
    def display_name(self) -> str:
        """Name if set, otherwise the local part of the email."""
        return self.name or self.email.split("@")[0]
