"""Unit tests for FavoriteService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from recipes.application.observability import CatalogProbe
from recipes.application.services import FavoriteService
from recipes.domain.value_objects import RecipeStatus
from recipes.ports.exceptions import FavoriteNotFoundError
from recipes.ports.queries import RecipePage
from recipes.ports.repositories import IFavoriteRepository
from shared_kernel.authorization import ResourceNotFoundError, Role


@pytest.fixture
def mock_favorite_repository():
    repo = create_autospec(IFavoriteRepository, instance=True)
    repo.add = AsyncMock(return_value=None)
    repo.remove = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_probe():
    return MagicMock(spec=CatalogProbe)


@pytest.fixture
def service(
    mock_session,
    mock_favorite_repository,
    mock_recipe_repository,
    membership_resolver,
    visibility,
    mock_probe,
) -> FavoriteService:
    return FavoriteService(
        session=mock_session,
        favorite_repository=mock_favorite_repository,
        recipe_repository=mock_recipe_repository,
        membership_resolver=membership_resolver,
        visibility=visibility,
        probe=mock_probe,
    )


class TestAddFavorite:
    @pytest.mark.asyncio
    async def test_read_only_member_adds(
        self,
        service,
        join,
        store_recipe,
        make_recipe,
        user_id,
        other_user_id,
        mock_favorite_repository,
        mock_probe,
    ):
        join(user_id, Role.READ_ONLY)
        recipe = store_recipe(make_recipe(other_user_id))

        await service.add_favorite(user_id, recipe.id)

        mock_favorite_repository.add.assert_awaited_once_with(user_id, recipe.id)
        mock_probe.favorite_added.assert_called_once()

    @pytest.mark.asyncio
    async def test_foreign_draft_is_not_found(
        self, service, join, store_recipe, make_recipe, user_id, other_user_id
    ):
        join(user_id, Role.ADMIN)
        draft = store_recipe(make_recipe(other_user_id, RecipeStatus.DRAFT))

        with pytest.raises(ResourceNotFoundError):
            await service.add_favorite(user_id, draft.id)


class TestRemoveFavorite:
    @pytest.mark.asyncio
    async def test_missing_favorite_raises(
        self,
        service,
        join,
        store_recipe,
        make_recipe,
        user_id,
        mock_favorite_repository,
        mock_probe,
    ):
        join(user_id, Role.READ_ONLY)
        recipe = store_recipe(make_recipe(user_id))
        mock_favorite_repository.remove.return_value = False

        with pytest.raises(FavoriteNotFoundError):
            await service.remove_favorite(user_id, recipe.id)

        mock_probe.favorite_removed.assert_not_called()


class TestListFavorites:
    @pytest.mark.asyncio
    async def test_searches_favorites_only(
        self, service, join, current_user, mock_recipe_repository
    ):
        join(current_user.user_id, Role.READ_ONLY)
        mock_recipe_repository.search.return_value = RecipePage()

        await service.list_favorites(current_user, page=2, limit=5)

        criteria = mock_recipe_repository.search.call_args.args[0]
        assert criteria.favorites_only is True
        assert criteria.viewer_id == current_user.user_id
        assert (criteria.page, criteria.limit) == (2, 5)
