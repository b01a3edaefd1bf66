"""Group aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.naming import generate_group_slug, normalize_group_name
from iam.domain.value_objects import GroupId


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Group:
    """Group aggregate representing a tenant of the recipe book.

    Groups are the isolation boundary: recipes, categories, tags and
    memberships all belong to exactly one group.

    Business rules:
    - Names are trimmed and between 1 and 100 characters
    - allow_power_user_edit (default True) governs whether POWER_USER
      members may edit existing recipes. It never affects creation.
    - A group must have at least one admin at all times. Memberships live
      outside the aggregate, so the rule is enforced by the admin
      invariant guard at mutation time.
    """

    id: GroupId
    name: str
    slug: str
    allow_power_user_edit: bool = True
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def create(cls, name: str, slug: str | None = None) -> Group:
        """Factory method for creating a new group.

        Args:
            name: Display name, validated and trimmed
            slug: URL slug. A random `group-xxxxxxxx` slug is generated
                when omitted.

        Returns:
            A new Group aggregate with governance editing enabled

        Raises:
            ValueError: If the name is empty or too long
        """
        return cls(
            id=GroupId.generate(),
            name=normalize_group_name(name),
            slug=slug or generate_group_slug(),
        )

    def rename(self, name: str, slug: str) -> None:
        """Rename the group and assign its regenerated slug.

        Raises:
            ValueError: If the name is empty or too long
        """
        self.name = normalize_group_name(name)
        self.slug = slug
        self.updated_at = _now()

    def set_power_user_edit(self, allowed: bool) -> None:
        """Toggle whether POWER_USER members may edit existing recipes."""
        self.allow_power_user_edit = allowed
        self.updated_at = _now()
