"""PostgreSQL implementation of ICommentRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import UserId
from recipes.domain.aggregates import Comment
from recipes.domain.value_objects import CommentId, RecipeId
from recipes.infrastructure.models import CommentModel
from recipes.ports.repositories import ICommentRepository


class CommentRepository(ICommentRepository):
    """PostgreSQL-backed repository for comments."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, comment: Comment) -> None:
        model = await self._session.get(CommentModel, comment.id.value)
        if model is None:
            self._session.add(
                CommentModel(
                    id=comment.id.value,
                    recipe_id=comment.recipe_id.value,
                    user_id=comment.user_id.value,
                    text=comment.text,
                    created_at=comment.created_at,
                    updated_at=comment.updated_at,
                )
            )
        else:
            model.text = comment.text
            model.updated_at = comment.updated_at
        await self._session.flush()

    async def get_by_id(self, comment_id: CommentId) -> Comment | None:
        model = await self._session.get(CommentModel, comment_id.value)
        return self._to_domain(model) if model else None

    async def list_by_recipe(self, recipe_id: RecipeId) -> list[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.recipe_id == recipe_id.value)
            .order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def delete(self, comment_id: CommentId) -> bool:
        result = await self._session.execute(
            delete(CommentModel).where(CommentModel.id == comment_id.value)
        )
        return result.rowcount > 0

    @staticmethod
    def _to_domain(model: CommentModel) -> Comment:
        return Comment(
            id=CommentId(value=model.id),
            recipe_id=RecipeId(value=model.recipe_id),
            user_id=UserId(value=model.user_id),
            text=model.text,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
