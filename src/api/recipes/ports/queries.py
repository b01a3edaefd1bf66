"""Query and result models shared by the recipe repository and its callers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from iam.domain.value_objects import GroupId, UserId
from recipes.domain.aggregates import Recipe
from recipes.domain.value_objects import CategoryId, RecipeSort, TagId

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class RecipeSearch:
    """Criteria for listing recipes in one group as seen by one viewer.

    Results always contain the group's PUBLISHED recipes plus the
    viewer's own DRAFTs, never anyone else's drafts.
    """

    group_id: GroupId
    viewer_id: UserId
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    search: str | None = None
    category_ids: frozenset[CategoryId] = frozenset()
    tag_ids: frozenset[TagId] = frozenset()
    favorites_only: bool = False
    sort: RecipeSort = RecipeSort.RECENT

    @classmethod
    def create(
        cls,
        group_id: GroupId,
        viewer_id: UserId,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: str | None = None,
        category_ids: frozenset[CategoryId] = frozenset(),
        tag_ids: frozenset[TagId] = frozenset(),
        favorites_only: bool = False,
        sort: RecipeSort = RecipeSort.RECENT,
    ) -> RecipeSearch:
        """Build criteria with page >= 1 and limit clamped to 1..100."""
        return cls(
            group_id=group_id,
            viewer_id=viewer_id,
            page=max(1, page),
            limit=max(1, min(MAX_PAGE_SIZE, limit)),
            search=(search or "").strip() or None,
            category_ids=category_ids,
            tag_ids=tag_ids,
            favorites_only=favorites_only,
            sort=sort,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class RecipePage:
    """One page of recipe search results."""

    items: list[Recipe] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0
