"""Resolves the owning group of recipes, comments, categories and tags."""

from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import GroupId
from recipes.infrastructure.models import (
    CategoryModel,
    CommentModel,
    RecipeModel,
    TagModel,
)
from recipes.ports.repositories import IResourceLocator
from shared_kernel.authorization.types import ResourceType


class ResourceLocator(IResourceLocator):
    """Reads only the group_id column; the resource itself is loaded later."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_group_id(
        self, resource_type: ResourceType, resource_id: str
    ) -> GroupId | None:
        result = await self._session.execute(self._query(resource_type, resource_id))
        group_id = result.scalar_one_or_none()
        return GroupId(value=group_id) if group_id else None

    @staticmethod
    def _query(resource_type: ResourceType, resource_id: str) -> Select:
        if resource_type == ResourceType.RECIPE:
            return select(RecipeModel.group_id).where(RecipeModel.id == resource_id)
        if resource_type == ResourceType.COMMENT:
            return (
                select(RecipeModel.group_id)
                .join(CommentModel, CommentModel.recipe_id == RecipeModel.id)
                .where(CommentModel.id == resource_id)
            )
        if resource_type == ResourceType.CATEGORY:
            return select(CategoryModel.group_id).where(CategoryModel.id == resource_id)
        if resource_type == ResourceType.TAG:
            return select(TagModel.group_id).where(TagModel.id == resource_id)
        raise ValueError(f"Unsupported resource type: {resource_type}")
