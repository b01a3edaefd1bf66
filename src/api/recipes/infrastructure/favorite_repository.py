"""PostgreSQL implementation of IFavoriteRepository."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from iam.domain.value_objects import UserId
from recipes.domain.value_objects import RecipeId
from recipes.infrastructure.models import FavoriteModel
from recipes.ports.exceptions import DuplicateFavoriteError
from recipes.ports.repositories import IFavoriteRepository


class FavoriteRepository(IFavoriteRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, user_id: UserId, recipe_id: RecipeId) -> None:
        """Insert a favorite.

        Raises:
            DuplicateFavoriteError: If the (user, recipe) pair already exists
        """
        self._session.add(
            FavoriteModel(
                id=str(ULID()),
                user_id=user_id.value,
                recipe_id=recipe_id.value,
                created_at=datetime.now(UTC),
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise DuplicateFavoriteError("Recipe is already in your favorites") from e

    async def remove(self, user_id: UserId, recipe_id: RecipeId) -> bool:
        result = await self._session.execute(
            delete(FavoriteModel).where(
                FavoriteModel.user_id == user_id.value,
                FavoriteModel.recipe_id == recipe_id.value,
            )
        )
        return result.rowcount > 0
