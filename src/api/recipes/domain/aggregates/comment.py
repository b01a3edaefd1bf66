"""Comment aggregate for Recipes context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.value_objects import UserId
from recipes.domain.value_objects import CommentId, RecipeId

COMMENT_MAX_LENGTH = 2000


def _now() -> datetime:
    return datetime.now(UTC)


def normalize_comment_text(text: str) -> str:
    """Trim and validate comment text.

    Raises:
        ValueError: If the text is empty or longer than 2000 characters
    """
    text = text.strip()
    if not text:
        raise ValueError("Comment text cannot be empty")
    if len(text) > COMMENT_MAX_LENGTH:
        raise ValueError(f"Comment must be {COMMENT_MAX_LENGTH} characters or less")
    return text


@dataclass
class Comment:
    """A member's comment on a recipe.

    The author may edit or delete it whatever their role; ADMINs of the
    recipe's group may too. Group governance settings do not apply.
    """

    id: CommentId
    recipe_id: RecipeId
    user_id: UserId
    text: str
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def post(cls, recipe_id: RecipeId, user_id: UserId, text: str) -> Comment:
        return cls(
            id=CommentId.generate(),
            recipe_id=recipe_id,
            user_id=user_id,
            text=normalize_comment_text(text),
        )

    def edit(self, text: str) -> None:
        self.text = normalize_comment_text(text)
        self.updated_at = _now()
