"""Unit tests for MembershipResolver."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from iam.application.observability import MembershipResolverProbe
from iam.application.services import MembershipResolver
from iam.domain.value_objects import GroupId, UserId
from iam.ports.repositories import IMembershipRepository
from shared_kernel.authorization import (
    Capability,
    MissingCapabilityError,
    NotAMemberError,
    Role,
    UnauthorizedError,
)


@pytest.fixture
def mock_membership_repository():
    repo = create_autospec(IMembershipRepository, instance=True)
    repo.get = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_probe():
    return MagicMock(spec=MembershipResolverProbe)


@pytest.fixture
def resolver(mock_membership_repository, mock_probe) -> MembershipResolver:
    return MembershipResolver(
        membership_repository=mock_membership_repository, probe=mock_probe
    )


class TestResolveMembership:
    @pytest.mark.asyncio
    async def test_returns_stored_membership(
        self, resolver, mock_membership_repository, make_membership, user_id, group_id
    ):
        membership = make_membership(user_id, Role.POWER_USER)
        mock_membership_repository.get.return_value = membership

        assert await resolver.resolve_membership(user_id, group_id) is membership
        mock_membership_repository.get.assert_awaited_once_with(user_id, group_id)

    @pytest.mark.asyncio
    async def test_returns_none_for_non_member(self, resolver, user_id, group_id):
        assert await resolver.resolve_membership(user_id, group_id) is None

    @pytest.mark.asyncio
    async def test_get_user_role(
        self, resolver, mock_membership_repository, make_membership, user_id, group_id
    ):
        mock_membership_repository.get.return_value = make_membership(
            user_id, Role.READ_ONLY
        )

        assert await resolver.get_user_role(user_id, group_id) == Role.READ_ONLY

    @pytest.mark.asyncio
    async def test_get_user_role_none_for_non_member(
        self, resolver, user_id, group_id
    ):
        assert await resolver.get_user_role(user_id, group_id) is None


class TestRequireMembership:
    @pytest.mark.asyncio
    async def test_unauthenticated_caller(self, resolver, group_id):
        with pytest.raises(UnauthorizedError):
            await resolver.require_membership(None, group_id)

    @pytest.mark.asyncio
    async def test_non_member_is_denied(
        self, resolver, mock_probe, user_id, group_id
    ):
        with pytest.raises(NotAMemberError) as exc_info:
            await resolver.require_membership(user_id, group_id)

        assert exc_info.value.group_id == group_id.value
        mock_probe.membership_denied.assert_called_once_with(
            user_id=user_id.value, group_id=group_id.value
        )

    @pytest.mark.asyncio
    async def test_missing_active_group_is_denied_without_lookup(
        self, resolver, mock_membership_repository, user_id
    ):
        with pytest.raises(NotAMemberError):
            await resolver.require_membership(user_id, None)

        mock_membership_repository.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_role_in_one_group_does_not_carry_to_another(
        self, resolver, mock_membership_repository, make_membership, user_id
    ):
        home = GroupId.generate()
        foreign = GroupId.generate()
        admin_at_home = make_membership(user_id, Role.ADMIN, group=home)
        mock_membership_repository.get.side_effect = lambda u, g: (
            admin_at_home if g == home else None
        )

        assert (await resolver.require_membership(user_id, home)).role == Role.ADMIN
        with pytest.raises(NotAMemberError):
            await resolver.require_membership(user_id, foreign)


class TestRequireCapability:
    @pytest.mark.asyncio
    async def test_returns_membership_when_role_holds_capability(
        self, resolver, mock_membership_repository, make_membership, user_id, group_id
    ):
        membership = make_membership(user_id, Role.POWER_USER)
        mock_membership_repository.get.return_value = membership

        result = await resolver.require_capability(
            user_id, group_id, Capability.RECIPE_CREATE
        )

        assert result is membership

    @pytest.mark.asyncio
    async def test_missing_capability(
        self,
        resolver,
        mock_membership_repository,
        mock_probe,
        make_membership,
        user_id,
        group_id,
    ):
        mock_membership_repository.get.return_value = make_membership(
            user_id, Role.READ_ONLY
        )

        with pytest.raises(MissingCapabilityError):
            await resolver.require_capability(
                user_id, group_id, Capability.RECIPE_CREATE
            )

        mock_probe.capability_denied.assert_called_once_with(
            user_id=user_id.value,
            group_id=group_id.value,
            role="READ_ONLY",
            capability="recipe:create",
        )

    @pytest.mark.asyncio
    async def test_non_member_fails_before_capability(self, resolver, group_id):
        with pytest.raises(NotAMemberError):
            await resolver.require_capability(
                UserId(value="stranger"), group_id, Capability.RECIPE_READ
            )
