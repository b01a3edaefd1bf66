"""Recipe aggregate and its visibility state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.value_objects import GroupId, UserId
from recipes.domain.content import RecipeContent
from recipes.domain.exceptions import (
    InvalidRecipeTransitionError,
    NotRecipeCreatorError,
)
from recipes.domain.value_objects import CategoryId, RecipeId, RecipeStatus, TagId


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Recipe:
    """Recipe aggregate.

    A recipe belongs to exactly one group and is independently owned by its
    creator for draft purposes.

    Lifecycle:
    - Manual authoring creates a PUBLISHED recipe; the import pipeline
      creates a DRAFT. There is no other initial state.
    - DRAFT -> PUBLISHED only by the creator.
    - A DRAFT may be discarded (hard-deleted) only by its creator.
    - PUBLISHED -> DRAFT is not a transition.

    Visibility: a DRAFT is visible to its creator only, whatever the
    viewer's role in the group.
    """

    id: RecipeId
    group_id: GroupId
    created_by: UserId
    content: RecipeContent
    status: RecipeStatus
    source_url: str | None = None
    category_ids: frozenset[CategoryId] = frozenset()
    tag_ids: frozenset[TagId] = frozenset()
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def author(
        cls,
        group_id: GroupId,
        created_by: UserId,
        content: RecipeContent,
        category_ids: frozenset[CategoryId] = frozenset(),
        tag_ids: frozenset[TagId] = frozenset(),
    ) -> Recipe:
        """Create a manually authored recipe, published immediately."""
        return cls(
            id=RecipeId.generate(),
            group_id=group_id,
            created_by=created_by,
            content=content,
            status=RecipeStatus.PUBLISHED,
            category_ids=category_ids,
            tag_ids=tag_ids,
        )

    @classmethod
    def import_draft(
        cls,
        group_id: GroupId,
        created_by: UserId,
        content: RecipeContent,
        source_url: str,
    ) -> Recipe:
        """Create an imported recipe as a DRAFT owned by the importer."""
        return cls(
            id=RecipeId.generate(),
            group_id=group_id,
            created_by=created_by,
            content=content,
            status=RecipeStatus.DRAFT,
            source_url=source_url,
        )

    @property
    def is_draft(self) -> bool:
        return self.status == RecipeStatus.DRAFT

    def is_creator(self, user_id: UserId) -> bool:
        return self.created_by == user_id

    def is_visible_to(self, user_id: UserId) -> bool:
        """Published recipes are visible to the group; drafts to their creator only.

        Group membership is checked separately and must already hold.
        """
        return not self.is_draft or self.is_creator(user_id)

    def revise(
        self,
        content: RecipeContent,
        category_ids: frozenset[CategoryId],
        tag_ids: frozenset[TagId],
    ) -> None:
        """Replace the recipe's content and classification."""
        self.content = content
        self.category_ids = category_ids
        self.tag_ids = tag_ids
        self.updated_at = _now()

    def transition_to(self, status: RecipeStatus, actor_id: UserId) -> None:
        """Apply a requested status.

        Requesting the current status is a no-op.

        Raises:
            NotRecipeCreatorError: If someone other than the creator publishes
            InvalidRecipeTransitionError: If a published recipe is moved to DRAFT
        """
        if status == self.status:
            return
        if status == RecipeStatus.DRAFT:
            raise InvalidRecipeTransitionError(
                "Published recipes cannot be returned to draft"
            )
        self.publish(actor_id)

    def publish(self, actor_id: UserId) -> None:
        """DRAFT -> PUBLISHED, by the creator only.

        Raises:
            NotRecipeCreatorError: If the actor is not the creator
            InvalidRecipeTransitionError: If the recipe is not a draft
        """
        if not self.is_draft:
            raise InvalidRecipeTransitionError("Recipe is already published")
        if not self.is_creator(actor_id):
            raise NotRecipeCreatorError(
                "Forbidden: Only the creator can publish this draft"
            )
        self.status = RecipeStatus.PUBLISHED
        self.updated_at = _now()

    def ensure_discardable_by(self, actor_id: UserId) -> None:
        """Check that the actor may discard (hard-delete) this recipe.

        Raises:
            NotRecipeCreatorError: If the actor is not the creator
            InvalidRecipeTransitionError: If the recipe is not a draft
        """
        if not self.is_creator(actor_id):
            raise NotRecipeCreatorError(
                "Forbidden: Only the creator can discard this draft"
            )
        if not self.is_draft:
            raise InvalidRecipeTransitionError("Only draft recipes can be discarded")
