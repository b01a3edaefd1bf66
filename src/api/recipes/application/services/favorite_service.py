"""Favorites application service."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import MembershipResolver
from iam.application.value_objects import CurrentUser
from iam.domain.value_objects import UserId
from recipes.application.observability import CatalogProbe, DefaultCatalogProbe
from recipes.application.services.tenant_isolation_guard import RecipeVisibility
from recipes.domain.value_objects import RecipeId
from recipes.ports.exceptions import FavoriteNotFoundError
from recipes.ports.queries import RecipePage, RecipeSearch
from recipes.ports.repositories import IFavoriteRepository, IRecipeRepository
from shared_kernel.authorization.types import Capability


class FavoriteService:
    """A member's personal favorites within their active group."""

    def __init__(
        self,
        session: AsyncSession,
        favorite_repository: IFavoriteRepository,
        recipe_repository: IRecipeRepository,
        membership_resolver: MembershipResolver,
        visibility: RecipeVisibility,
        probe: CatalogProbe | None = None,
    ):
        self._session = session
        self._favorites = favorite_repository
        self._recipes = recipe_repository
        self._resolver = membership_resolver
        self._visibility = visibility
        self._probe = probe or DefaultCatalogProbe()

    async def list_favorites(
        self, current_user: CurrentUser, page: int = 1, limit: int = 20
    ) -> RecipePage:
        """List the caller's favorites in their active group that they can still see."""
        async with self._session.begin():
            membership = await self._resolver.require_capability(
                current_user.user_id, current_user.group_id, Capability.RECIPE_READ
            )
            return await self._recipes.search(
                RecipeSearch.create(
                    group_id=membership.group_id,
                    viewer_id=current_user.user_id,
                    page=page,
                    limit=limit,
                    favorites_only=True,
                )
            )

    async def add_favorite(self, user_id: UserId, recipe_id: RecipeId) -> None:
        """Favorite a recipe the user can see.

        Raises:
            ResourceNotFoundError: If absent or someone else's draft
            NotAMemberError: If the recipe belongs to another group
            DuplicateFavoriteError: If already favorited
        """
        async with self._session.begin():
            _, membership = await self._visibility.require_visible(user_id, recipe_id)
            self._resolver.check_capability(membership, Capability.FAVORITE_CREATE)
            await self._favorites.add(user_id, recipe_id)

        self._probe.favorite_added(recipe_id=recipe_id.value, user_id=user_id.value)

    async def remove_favorite(self, user_id: UserId, recipe_id: RecipeId) -> None:
        """Remove a favorite.

        Raises:
            ResourceNotFoundError: If absent or someone else's draft
            NotAMemberError: If the recipe belongs to another group
            FavoriteNotFoundError: If the recipe was not a favorite
        """
        async with self._session.begin():
            _, membership = await self._visibility.require_visible(user_id, recipe_id)
            self._resolver.check_capability(membership, Capability.FAVORITE_DELETE)
            if not await self._favorites.remove(user_id, recipe_id):
                raise FavoriteNotFoundError("Recipe is not in your favorites")

        self._probe.favorite_removed(recipe_id=recipe_id.value, user_id=user_id.value)
