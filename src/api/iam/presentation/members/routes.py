"""HTTP routes for member administration in the caller's active group."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import GroupService
from iam.application.value_objects import CurrentUser
from iam.dependencies.group import get_group_service
from iam.dependencies.user import get_current_user
from iam.domain.exceptions import CannotRemoveLastAdminError
from iam.domain.value_objects import UserId
from iam.ports.exceptions import (
    CannotRemoveSelfError,
    DuplicateMembershipError,
    GroupNotFoundError,
    MemberNotFoundError,
)
from iam.presentation.members.models import (
    AddMemberRequest,
    ChangeMemberRoleRequest,
    MemberResponse,
    MembershipResponse,
)
from shared_kernel.authorization import ForbiddenError

router = APIRouter(
    prefix="/members",
    tags=["members"],
)

_MEMBER_NOT_FOUND = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="Member not found",
)


def _parse_user_id(user_id: str) -> UserId:
    try:
        return UserId.from_string(user_id)
    except ValueError:
        raise _MEMBER_NOT_FOUND


@router.get("")
async def list_members(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> list[MemberResponse]:
    """List members of the caller's active group, newest first.

    Raises:
        HTTPException: 403 if the caller lacks group:invite
    """
    try:
        members = await service.list_members(current_user)
        return [MemberResponse.from_view(member) for member in members]

    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list members",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_member(
    request: AddMemberRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MemberResponse:
    """Add a user to the caller's active group.

    Raises:
        HTTPException: 403 if the caller lacks group:invite
        HTTPException: 409 if the user is already a member
    """
    try:
        member = await service.add_member(
            current_user,
            email=request.email,
            role=request.role,
            name=request.name,
        )
        return MemberResponse.from_view(member)

    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except DuplicateMembershipError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User is already a member of this group",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add member",
        )


@router.patch("/{user_id}")
async def change_member_role(
    user_id: str,
    request: ChangeMemberRoleRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MembershipResponse:
    """Change a member's role.

    Raises:
        HTTPException: 400 if this would demote the group's last admin
        HTTPException: 403 if the caller lacks group:change_role
        HTTPException: 404 if the target is not a member
    """
    target = _parse_user_id(user_id)

    try:
        membership = await service.change_member_role(
            current_user, target_user_id=target, role=request.role
        )
        return MembershipResponse.from_domain(membership)

    except CannotRemoveLastAdminError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except (MemberNotFoundError, GroupNotFoundError):
        raise _MEMBER_NOT_FOUND
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to change member role",
        )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    user_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> None:
    """Remove a member from the caller's active group.

    Raises:
        HTTPException: 400 if removing self or the group's last admin
        HTTPException: 403 if the caller lacks group:remove_member
        HTTPException: 404 if the target is not a member
    """
    target = _parse_user_id(user_id)

    try:
        await service.remove_member(current_user, target_user_id=target)

    except (CannotRemoveLastAdminError, CannotRemoveSelfError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except (MemberNotFoundError, GroupNotFoundError):
        raise _MEMBER_NOT_FOUND
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove member",
        )
