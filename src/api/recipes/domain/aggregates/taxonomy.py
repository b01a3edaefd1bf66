"""Category and Tag aggregates.

Both are group-owned labels whose slug is unique per (group, kind).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from iam.domain.value_objects import GroupId
from recipes.domain.value_objects import CategoryId, TagId
from shared_kernel.authorization.types import Capability, ResourceType

TERM_NAME_MAX_LENGTH = 50


class TaxonomyKind(StrEnum):
    CATEGORY = "category"
    TAG = "tag"

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType(self.value)

    @property
    def create_capability(self) -> Capability:
        return Capability(f"{self.value}:create")

    @property
    def update_capability(self) -> Capability:
        return Capability(f"{self.value}:update")

    @property
    def delete_capability(self) -> Capability:
        return Capability(f"{self.value}:delete")


def normalize_term_name(name: str) -> str:
    """Trim and validate a category or tag name.

    Raises:
        ValueError: If the name is empty or longer than 50 characters
    """
    name = name.strip()
    if not name:
        raise ValueError("Name is required")
    if len(name) > TERM_NAME_MAX_LENGTH:
        raise ValueError(f"Name must be {TERM_NAME_MAX_LENGTH} characters or less")
    return name


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class TaxonomyTerm:
    """A named label owned by one group."""

    id: CategoryId | TagId
    kind: TaxonomyKind
    group_id: GroupId
    name: str
    slug: str
    created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls, kind: TaxonomyKind, group_id: GroupId, name: str, slug: str
    ) -> TaxonomyTerm:
        term_id = (
            CategoryId.generate() if kind == TaxonomyKind.CATEGORY else TagId.generate()
        )
        return cls(
            id=term_id,
            kind=kind,
            group_id=group_id,
            name=normalize_term_name(name),
            slug=slug,
        )

    def rename(self, name: str, slug: str) -> None:
        self.name = normalize_term_name(name)
        self.slug = slug
