"""Pydantic models for group member API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.application.value_objects import MemberView
from iam.domain.value_objects import Membership
from shared_kernel.authorization.types import Role


class AddMemberRequest(BaseModel):
    """Request model for adding a member to the caller's group."""

    email: str = Field(
        ...,
        min_length=3,
        max_length=320,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Email of the user to add",
    )
    name: str | None = Field(default=None, max_length=255)
    role: Role = Field(default=Role.READ_ONLY, description="Role to assign")


class ChangeMemberRoleRequest(BaseModel):
    """Request model for changing a member's role."""

    role: Role = Field(..., description="New role to assign")


class MemberResponse(BaseModel):
    """Response model for a group member."""

    user_id: str
    email: str
    name: str | None
    role: Role
    joined_at: datetime

    @classmethod
    def from_view(cls, view: MemberView) -> MemberResponse:
        return cls(
            user_id=view.user_id.value,
            email=view.email,
            name=view.name,
            role=view.role,
            joined_at=view.joined_at,
        )


class MembershipResponse(BaseModel):
    """Response model for a role change."""

    user_id: str
    group_id: str
    role: Role
    joined_at: datetime

    @classmethod
    def from_domain(cls, membership: Membership) -> MembershipResponse:
        return cls(
            user_id=membership.user_id.value,
            group_id=membership.group_id.value,
            role=membership.role,
            joined_at=membership.joined_at,
        )
