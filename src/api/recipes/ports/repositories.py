"""Repository protocols (ports) for Recipes bounded context.

Implementations share the caller's session and never open transactions
of their own.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Protocol, runtime_checkable

from iam.domain.value_objects import GroupId, UserId
from recipes.domain.aggregates import Comment, Recipe, TaxonomyKind, TaxonomyTerm
from recipes.domain.value_objects import CommentId, RecipeId
from recipes.ports.queries import RecipePage, RecipeSearch
from shared_kernel.authorization.types import ResourceType


@runtime_checkable
class IRecipeRepository(Protocol):
    """Repository for Recipe aggregate persistence."""

    async def save(self, recipe: Recipe) -> None:
        """Persist a recipe with its category and tag links."""
        ...

    async def get_by_id(self, recipe_id: RecipeId) -> Recipe | None:
        """Retrieve a recipe by ID, whatever its status or group."""
        ...

    async def delete(self, recipe_id: RecipeId) -> bool:
        """Hard-delete a recipe and everything hanging off it.

        Returns:
            True if a recipe was deleted
        """
        ...

    async def search(self, criteria: RecipeSearch) -> RecipePage:
        """Return one page of recipes visible to the viewer in the group."""
        ...


@runtime_checkable
class ICommentRepository(Protocol):
    """Repository for Comment persistence."""

    async def save(self, comment: Comment) -> None: ...

    async def get_by_id(self, comment_id: CommentId) -> Comment | None: ...

    async def list_by_recipe(self, recipe_id: RecipeId) -> list[Comment]:
        """List a recipe's comments, newest first."""
        ...

    async def delete(self, comment_id: CommentId) -> bool: ...


@runtime_checkable
class ITaxonomyRepository(Protocol):
    """Repository for categories and tags.

    Every method takes the TaxonomyKind it operates on; categories and
    tags are stored separately and their slugs never collide.
    """

    async def save(self, term: TaxonomyTerm) -> None:
        """Persist a term.

        Raises:
            DuplicateSlugError: If the slug is taken in the term's group
        """
        ...

    async def get_by_id(self, kind: TaxonomyKind, term_id: str) -> TaxonomyTerm | None:
        ...

    async def list_by_group(
        self, kind: TaxonomyKind, group_id: GroupId
    ) -> list[TaxonomyTerm]:
        """List a group's terms ordered by name."""
        ...

    async def slug_exists(
        self,
        kind: TaxonomyKind,
        group_id: GroupId,
        slug: str,
        exclude_id: str | None = None,
    ) -> bool: ...

    async def count_in_group(
        self, kind: TaxonomyKind, group_id: GroupId, term_ids: Collection[str]
    ) -> int:
        """Count how many of the given IDs belong to the group."""
        ...

    async def delete(self, kind: TaxonomyKind, term_id: str) -> bool: ...


@runtime_checkable
class IFavoriteRepository(Protocol):
    """Repository for a user's favorite recipes."""

    async def add(self, user_id: UserId, recipe_id: RecipeId) -> None:
        """Record a favorite.

        Raises:
            DuplicateFavoriteError: If it already exists
        """
        ...

    async def remove(self, user_id: UserId, recipe_id: RecipeId) -> bool: ...


@runtime_checkable
class IResourceLocator(Protocol):
    """Finds the group that owns a group-scoped resource."""

    async def find_group_id(
        self, resource_type: ResourceType, resource_id: str
    ) -> GroupId | None:
        """Return the owning group's ID, or None if the resource does not exist."""
        ...
