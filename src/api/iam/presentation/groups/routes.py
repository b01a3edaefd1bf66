"""HTTP routes for group management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import GroupService
from iam.application.value_objects import CurrentUser
from iam.dependencies.group import get_group_service
from iam.dependencies.user import get_current_user
from iam.domain.value_objects import GroupId
from iam.ports.exceptions import DuplicateGroupSlugError, GroupNotFoundError
from iam.presentation.groups.models import (
    CreateGroupRequest,
    GroupResponse,
    UpdateGroupSettingsRequest,
)
from shared_kernel.authorization import ForbiddenError, NotAMemberError

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
)

_GROUP_NOT_FOUND = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="Group not found",
)


def _parse_group_id(group_id: str) -> GroupId:
    # Malformed IDs cannot name any group
    try:
        return GroupId.from_string(group_id)
    except ValueError:
        raise _GROUP_NOT_FOUND


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
    request: CreateGroupRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Create a new group with the authenticated user as its sole admin.

    Raises:
        HTTPException: 400 if the name is invalid
        HTTPException: 500 for unexpected errors
    """
    try:
        group = await service.create_group(
            creator_id=current_user.user_id,
            name=request.name,
        )
        return GroupResponse.from_domain(group)

    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create group",
        )


@router.get("/{group_id}")
async def get_group(
    group_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Get a group the authenticated user belongs to.

    Non-members get the same 404 as for a missing group, so group
    existence is never confirmed across tenants.

    Raises:
        HTTPException: 404 if group not found or caller is not a member
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = _parse_group_id(group_id)

    try:
        group = await service.get_group(
            group_id=group_id_obj, user_id=current_user.user_id
        )
        return GroupResponse.from_domain(group)

    except (NotAMemberError, GroupNotFoundError):
        raise _GROUP_NOT_FOUND
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get group",
        )


@router.patch("/{group_id}")
async def update_group_settings(
    group_id: str,
    request: UpdateGroupSettingsRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Rename a group and/or toggle whether power users may edit recipes.

    Requires the ADMIN role in the group.

    Raises:
        HTTPException: 400 if no field is given or the name is invalid
        HTTPException: 403 if the caller lacks group:update
        HTTPException: 404 if group not found or caller is not a member
        HTTPException: 409 if the regenerated slug collides
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = _parse_group_id(group_id)

    try:
        group = await service.update_group_settings(
            group_id=group_id_obj,
            user_id=current_user.user_id,
            name=request.name,
            allow_power_user_edit=request.allow_power_user_edit,
        )
        return GroupResponse.from_domain(group)

    except (NotAMemberError, GroupNotFoundError):
        raise _GROUP_NOT_FOUND
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateGroupSlugError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A group with this name already exists",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update group",
        )
