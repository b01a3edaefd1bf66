"""HTTP routes for recipes and the import pipeline."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.value_objects import CurrentUser
from iam.dependencies.user import get_current_user
from recipes.application.services import RecipeImportService, RecipeService
from recipes.dependencies.recipe import get_recipe_service
from recipes.dependencies.recipe_import import get_recipe_import_service
from recipes.domain.value_objects import CategoryId, RecipeId, RecipeSort, TagId
from recipes.presentation.errors import http_error
from recipes.presentation.recipes.models import (
    ImportRecipeRequest,
    ImportRecipeResponse,
    RecipeListResponse,
    RecipeRequest,
    RecipeResponse,
    UpdateRecipeRequest,
)

router = APIRouter(
    prefix="/recipes",
    tags=["recipes"],
)

RECIPE_NOT_FOUND = "Recipe not found"


def parse_recipe_id(recipe_id: str) -> RecipeId:
    # Malformed IDs cannot name any recipe
    try:
        return RecipeId.from_string(recipe_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=RECIPE_NOT_FOUND
        )


def _split_ids(raw: str | None) -> list[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


@router.get("")
async def list_recipes(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = 20,
    search: Annotated[str | None, Query()] = None,
    category_ids: Annotated[str | None, Query(description="Comma-separated")] = None,
    tag_ids: Annotated[str | None, Query(description="Comma-separated")] = None,
    favorites_only: Annotated[bool, Query()] = False,
    sort_by: Annotated[RecipeSort, Query()] = RecipeSort.RECENT,
) -> RecipeListResponse:
    """List recipes in the caller's active group.

    Published recipes plus the caller's own drafts. limit is clamped
    to 1..100.
    """
    try:
        result = await service.list_recipes(
            current_user,
            page=page,
            limit=limit,
            search=search,
            category_ids=frozenset(
                CategoryId.from_string(c) for c in _split_ids(category_ids)
            ),
            tag_ids=frozenset(TagId.from_string(t) for t in _split_ids(tag_ids)),
            favorites_only=favorites_only,
            sort=sort_by,
        )
        return RecipeListResponse.from_page(result)

    except Exception as e:
        raise http_error(e, failure="Failed to list recipes")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    request: RecipeRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
) -> RecipeResponse:
    """Author a recipe. It is published immediately.

    Raises:
        HTTPException: 400 if the content is invalid
        HTTPException: 403 if the caller lacks recipe:create
    """
    try:
        recipe = await service.create_recipe(
            current_user,
            content=request.to_content(),
            category_ids=request.parsed_category_ids(),
            tag_ids=request.parsed_tag_ids(),
        )
        return RecipeResponse.from_domain(recipe)

    except Exception as e:
        raise http_error(e, failure="Failed to create recipe")


@router.post("/import", status_code=status.HTTP_201_CREATED)
async def import_recipe(
    request: ImportRecipeRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[RecipeImportService, Depends(get_recipe_import_service)],
) -> ImportRecipeResponse:
    """Import a recipe from a web page as a draft owned by the caller.

    Raises:
        HTTPException: 400 if the URL or extracted recipe is refused
        HTTPException: 403 if the caller lacks recipe:create
        HTTPException: 422 if extraction fails
        HTTPException: 429 if the caller is throttled
        HTTPException: 503 if no extraction service is configured
    """
    try:
        draft = await service.import_recipe(current_user, request.url)
        return ImportRecipeResponse(draft=RecipeResponse.from_domain(draft))

    except Exception as e:
        raise http_error(e, failure="Failed to import recipe")


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
) -> RecipeResponse:
    """Get a recipe.

    Raises:
        HTTPException: 404 if absent, in another group, or someone else's draft
    """
    rid = parse_recipe_id(recipe_id)
    try:
        recipe = await service.get_recipe(current_user.user_id, rid)
        return RecipeResponse.from_domain(recipe)

    except Exception as e:
        raise http_error(e, failure="Failed to get recipe", not_found=RECIPE_NOT_FOUND)


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    request: UpdateRecipeRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
) -> RecipeResponse:
    """Replace a recipe's content, optionally publishing a draft.

    Raises:
        HTTPException: 400 if the content or status change is invalid
        HTTPException: 403 if role or group settings forbid the edit
        HTTPException: 404 if absent, in another group, or someone else's draft
    """
    rid = parse_recipe_id(recipe_id)
    try:
        recipe = await service.update_recipe(
            current_user.user_id,
            rid,
            content=request.to_content(),
            category_ids=request.parsed_category_ids(),
            tag_ids=request.parsed_tag_ids(),
            status=request.status,
        )
        return RecipeResponse.from_domain(recipe)

    except Exception as e:
        raise http_error(
            e, failure="Failed to update recipe", not_found=RECIPE_NOT_FOUND
        )


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
) -> None:
    """Delete a recipe. ADMIN only.

    Raises:
        HTTPException: 403 if the caller is not an ADMIN of the recipe's group
        HTTPException: 404 if absent, in another group, or someone else's draft
    """
    rid = parse_recipe_id(recipe_id)
    try:
        await service.delete_recipe(current_user.user_id, rid)

    except Exception as e:
        raise http_error(
            e, failure="Failed to delete recipe", not_found=RECIPE_NOT_FOUND
        )


@router.post("/{recipe_id}/discard", status_code=status.HTTP_204_NO_CONTENT)
async def discard_draft(
    recipe_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
) -> None:
    """Discard one of the caller's drafts.

    Raises:
        HTTPException: 400 if the recipe is already published
        HTTPException: 404 if absent, in another group, or someone else's draft
    """
    rid = parse_recipe_id(recipe_id)
    try:
        await service.discard_draft(current_user.user_id, rid)

    except Exception as e:
        raise http_error(
            e, failure="Failed to discard draft", not_found=RECIPE_NOT_FOUND
        )
