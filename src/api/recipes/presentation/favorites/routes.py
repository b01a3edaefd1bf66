"""HTTP routes for the caller's favorite recipes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from iam.application.value_objects import CurrentUser
from iam.dependencies.user import get_current_user
from recipes.application.services import FavoriteService
from recipes.dependencies.recipe import get_favorite_service
from recipes.presentation.errors import http_error
from recipes.presentation.favorites.models import AddFavoriteRequest
from recipes.presentation.recipes.models import RecipeListResponse
from recipes.presentation.recipes.routes import RECIPE_NOT_FOUND, parse_recipe_id

router = APIRouter(
    prefix="/favorites",
    tags=["favorites"],
)


@router.get("")
async def list_favorites(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[FavoriteService, Depends(get_favorite_service)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = 20,
) -> RecipeListResponse:
    try:
        result = await service.list_favorites(current_user, page=page, limit=limit)
        return RecipeListResponse.from_page(result)

    except Exception as e:
        raise http_error(e, failure="Failed to list favorites")


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_favorite(
    request: AddFavoriteRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[FavoriteService, Depends(get_favorite_service)],
) -> dict[str, str]:
    """Favorite a recipe.

    Raises:
        HTTPException: 404 if the recipe is not visible to the caller
        HTTPException: 409 if it is already a favorite
    """
    rid = parse_recipe_id(request.recipe_id)
    try:
        await service.add_favorite(current_user.user_id, rid)
        return {"recipe_id": rid.value}

    except Exception as e:
        raise http_error(e, failure="Failed to add favorite", not_found=RECIPE_NOT_FOUND)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    recipe_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[FavoriteService, Depends(get_favorite_service)],
) -> None:
    rid = parse_recipe_id(recipe_id)
    try:
        await service.remove_favorite(current_user.user_id, rid)

    except Exception as e:
        raise http_error(
            e, failure="Failed to remove favorite", not_found=RECIPE_NOT_FOUND
        )
