"""Pydantic models for group API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.domain.aggregates import Group


class CreateGroupRequest(BaseModel):
    """Request model for creating a group.

    The name defaults to one derived from the creator's profile.
    """

    name: str | None = Field(
        default=None, description="Group name", min_length=1, max_length=100
    )


class UpdateGroupSettingsRequest(BaseModel):
    """Request model for updating group settings. At least one field is required."""

    name: str | None = Field(
        default=None, min_length=1, max_length=100, description="Group name"
    )
    allow_power_user_edit: bool | None = Field(
        default=None,
        description="Whether POWER_USER members may edit existing recipes",
    )


class GroupResponse(BaseModel):
    """Response model for group."""

    id: str = Field(..., description="Group ID (ULID format)")
    name: str = Field(..., description="Group name")
    slug: str = Field(..., description="URL slug")
    allow_power_user_edit: bool = Field(
        ..., description="Whether POWER_USER members may edit existing recipes"
    )
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, group: Group) -> GroupResponse:
        """Convert domain Group aggregate to API response."""
        return cls(
            id=group.id.value,
            name=group.name,
            slug=group.slug,
            allow_power_user_edit=group.allow_power_user_edit,
            created_at=group.created_at,
            updated_at=group.updated_at,
        )
