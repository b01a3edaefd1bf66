"""HTTP routes for recipe comments."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.value_objects import CurrentUser
from iam.dependencies.user import get_current_user
from recipes.application.services import CommentService
from recipes.dependencies.recipe import get_comment_service
from recipes.domain.value_objects import CommentId
from recipes.presentation.comments.models import CommentRequest, CommentResponse
from recipes.presentation.errors import http_error
from recipes.presentation.recipes.routes import RECIPE_NOT_FOUND, parse_recipe_id

router = APIRouter(tags=["comments"])

COMMENT_NOT_FOUND = "Comment not found"


def _parse_comment_id(comment_id: str) -> CommentId:
    try:
        return CommentId.from_string(comment_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=COMMENT_NOT_FOUND
        )


@router.get("/recipes/{recipe_id}/comments")
async def list_comments(
    recipe_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CommentService, Depends(get_comment_service)],
) -> list[CommentResponse]:
    """List comments on a recipe, newest first."""
    rid = parse_recipe_id(recipe_id)
    try:
        comments = await service.list_comments(current_user.user_id, rid)
        return [CommentResponse.from_domain(c) for c in comments]

    except Exception as e:
        raise http_error(
            e, failure="Failed to list comments", not_found=RECIPE_NOT_FOUND
        )


@router.post("/recipes/{recipe_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(
    recipe_id: str,
    request: CommentRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CommentService, Depends(get_comment_service)],
) -> CommentResponse:
    """Comment on a recipe.

    Raises:
        HTTPException: 400 if the text is empty or too long
        HTTPException: 404 if the recipe is not visible to the caller
    """
    rid = parse_recipe_id(recipe_id)
    try:
        comment = await service.add_comment(current_user.user_id, rid, request.text)
        return CommentResponse.from_domain(comment)

    except Exception as e:
        raise http_error(e, failure="Failed to add comment", not_found=RECIPE_NOT_FOUND)


@router.patch("/comments/{comment_id}")
async def update_comment(
    comment_id: str,
    request: CommentRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CommentService, Depends(get_comment_service)],
) -> CommentResponse:
    """Edit a comment as its author or as a group ADMIN.

    Raises:
        HTTPException: 403 if the caller is neither author nor ADMIN
        HTTPException: 404 if the comment is not visible to the caller
    """
    cid = _parse_comment_id(comment_id)
    try:
        comment = await service.update_comment(current_user.user_id, cid, request.text)
        return CommentResponse.from_domain(comment)

    except Exception as e:
        raise http_error(
            e, failure="Failed to update comment", not_found=COMMENT_NOT_FOUND
        )


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CommentService, Depends(get_comment_service)],
) -> None:
    """Delete a comment as its author or as a group ADMIN.

    Raises:
        HTTPException: 403 if the caller is neither author nor ADMIN
        HTTPException: 404 if the comment is not visible to the caller
    """
    cid = _parse_comment_id(comment_id)
    try:
        await service.delete_comment(current_user.user_id, cid)

    except Exception as e:
        raise http_error(
            e, failure="Failed to delete comment", not_found=COMMENT_NOT_FOUND
        )
