"""Pydantic models for comment API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from recipes.domain.aggregates import Comment


class CommentRequest(BaseModel):
    """Request model for posting or editing a comment. Text is trimmed."""

    text: str = Field(..., description="Comment text", max_length=2000)


class CommentResponse(BaseModel):
    id: str
    recipe_id: str
    user_id: str
    text: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> CommentResponse:
        """Convert domain Comment to API response."""
        return cls(
            id=comment.id.value,
            recipe_id=comment.recipe_id.value,
            user_id=comment.user_id.value,
            text=comment.text,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
