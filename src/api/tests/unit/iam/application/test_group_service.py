"""Unit tests for GroupService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, call, create_autospec

import pytest

from iam.application.observability import GroupServiceProbe
from iam.application.services import (
    AdminInvariantGuard,
    GroupService,
    MembershipResolver,
)
from iam.application.value_objects import MemberView
from iam.domain.aggregates import Group, User
from iam.domain.value_objects import UserId
from iam.ports.exceptions import (
    CannotRemoveSelfError,
    DuplicateMembershipError,
    GroupNotFoundError,
)
from iam.ports.repositories import (
    IGroupRepository,
    IMembershipRepository,
    IUserRepository,
)
from shared_kernel.authorization import Capability, MissingCapabilityError, Role


@pytest.fixture
def mock_group_repository():
    repo = create_autospec(IGroupRepository, instance=True)
    repo.slug_exists = AsyncMock(return_value=False)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.save = AsyncMock()
    return repo


@pytest.fixture
def mock_membership_repository():
    repo = create_autospec(IMembershipRepository, instance=True)
    repo.get = AsyncMock(return_value=None)
    repo.add = AsyncMock()
    repo.list_by_group = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_user_repository():
    repo = create_autospec(IUserRepository, instance=True)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_by_email = AsyncMock(return_value=None)
    repo.get_many = AsyncMock(return_value={})
    repo.save = AsyncMock()
    return repo


@pytest.fixture
def mock_resolver():
    return create_autospec(MembershipResolver, instance=True)


@pytest.fixture
def mock_admin_guard():
    return create_autospec(AdminInvariantGuard, instance=True)


@pytest.fixture
def mock_probe():
    return MagicMock(spec=GroupServiceProbe)


@pytest.fixture
def group_service(
    mock_session,
    mock_group_repository,
    mock_membership_repository,
    mock_user_repository,
    mock_resolver,
    mock_admin_guard,
    mock_probe,
) -> GroupService:
    return GroupService(
        session=mock_session,
        group_repository=mock_group_repository,
        membership_repository=mock_membership_repository,
        user_repository=mock_user_repository,
        membership_resolver=mock_resolver,
        admin_guard=mock_admin_guard,
        probe=mock_probe,
    )


class TestCreateGroup:
    @pytest.mark.asyncio
    async def test_creator_becomes_sole_admin(
        self, group_service, mock_membership_repository, user_id
    ):
        group = await group_service.create_group(creator_id=user_id, name="Kitchen")

        assert isinstance(group, Group)
        assert group.name == "Kitchen"
        assert group.allow_power_user_edit is True
        membership = mock_membership_repository.add.await_args.args[0]
        assert membership.user_id == user_id
        assert membership.group_id == group.id
        assert membership.role == Role.ADMIN

    @pytest.mark.asyncio
    async def test_runs_in_one_transaction(self, group_service, mock_session, user_id):
        await group_service.create_group(creator_id=user_id, name="Kitchen")

        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_name_defaults_from_profile(
        self, group_service, mock_user_repository, user_id
    ):
        mock_user_repository.get_by_id.return_value = User(
            id=user_id, email="alice@example.com", name="Alice"
        )

        group = await group_service.create_group(creator_id=user_id)

        assert group.name == "Alice's Recipe Group"

    @pytest.mark.asyncio
    async def test_retries_taken_slug(
        self, group_service, mock_group_repository, user_id
    ):
        mock_group_repository.slug_exists.side_effect = [True, False]

        await group_service.create_group(creator_id=user_id, name="Kitchen")

        assert mock_group_repository.slug_exists.await_count == 2

    @pytest.mark.asyncio
    async def test_failure_is_recorded(
        self, group_service, mock_group_repository, mock_probe, user_id
    ):
        mock_group_repository.save.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            await group_service.create_group(creator_id=user_id, name="Kitchen")

        mock_probe.group_creation_failed.assert_called_once()
        mock_probe.group_created.assert_not_called()


class TestEnsureActiveGroup:
    @pytest.mark.asyncio
    async def test_returns_existing_primary_membership(
        self, group_service, mock_resolver, mock_group_repository, make_membership, user_id
    ):
        membership = make_membership(user_id, Role.READ_ONLY)
        mock_resolver.get_primary_membership.return_value = membership
        user = User(id=user_id, email="alice@example.com")

        assert await group_service.ensure_active_group(user) is membership
        mock_group_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_creates_personal_group_for_user_without_one(
        self,
        group_service,
        mock_resolver,
        mock_membership_repository,
        make_membership,
        user_id,
    ):
        mock_resolver.get_primary_membership.return_value = None
        created = make_membership(user_id, Role.ADMIN)
        mock_membership_repository.get.return_value = created
        user = User(id=user_id, email="alice@example.com", name="Alice")

        result = await group_service.ensure_active_group(user)

        assert result is created
        added = mock_membership_repository.add.await_args.args[0]
        assert added.role == Role.ADMIN


class TestGetGroup:
    @pytest.mark.asyncio
    async def test_requires_membership(
        self, group_service, mock_resolver, mock_group_repository, user_id, group_id
    ):
        group = Group(id=group_id, name="Kitchen", slug="kitchen")
        mock_group_repository.get_by_id.return_value = group

        assert await group_service.get_group(group_id, user_id) is group
        mock_resolver.require_membership.assert_awaited_once_with(user_id, group_id)

    @pytest.mark.asyncio
    async def test_missing_group(self, group_service, user_id, group_id):
        with pytest.raises(GroupNotFoundError):
            await group_service.get_group(group_id, user_id)


class TestUpdateGroupSettings:
    @pytest.mark.asyncio
    async def test_requires_a_field(self, group_service, user_id, group_id):
        with pytest.raises(ValueError, match="At least one setting"):
            await group_service.update_group_settings(group_id, user_id)

    @pytest.mark.asyncio
    async def test_toggles_power_user_edit(
        self, group_service, mock_resolver, mock_group_repository, user_id, group_id
    ):
        group = Group(id=group_id, name="Kitchen", slug="kitchen")
        mock_group_repository.get_by_id.return_value = group

        result = await group_service.update_group_settings(
            group_id, user_id, allow_power_user_edit=False
        )

        assert result.allow_power_user_edit is False
        mock_resolver.require_capability.assert_awaited_once_with(
            user_id, group_id, Capability.GROUP_UPDATE
        )
        mock_group_repository.save.assert_awaited_once_with(group)

    @pytest.mark.asyncio
    async def test_rename_regenerates_slug(
        self, group_service, mock_group_repository, user_id, group_id
    ):
        group = Group(id=group_id, name="Kitchen", slug="kitchen")
        mock_group_repository.get_by_id.return_value = group
        mock_group_repository.slug_exists.side_effect = [True, False]

        result = await group_service.update_group_settings(
            group_id, user_id, name="Sunday Dinners"
        )

        assert result.name == "Sunday Dinners"
        assert result.slug == "sunday-dinners-1"

    @pytest.mark.asyncio
    async def test_non_admin_is_denied(
        self, group_service, mock_resolver, mock_group_repository, user_id, group_id
    ):
        mock_resolver.require_capability.side_effect = MissingCapabilityError(
            Capability.GROUP_UPDATE
        )

        with pytest.raises(MissingCapabilityError):
            await group_service.update_group_settings(
                group_id, user_id, allow_power_user_edit=False
            )

        mock_group_repository.save.assert_not_awaited()


class TestMembers:
    @pytest.mark.asyncio
    async def test_list_members_joins_profiles(
        self,
        group_service,
        mock_resolver,
        mock_membership_repository,
        mock_user_repository,
        make_membership,
        current_user,
        user_id,
    ):
        mock_resolver.require_capability.return_value = make_membership(
            user_id, Role.ADMIN
        )
        mock_membership_repository.list_by_group.return_value = [
            make_membership(user_id, Role.ADMIN)
        ]
        mock_user_repository.get_many.return_value = {
            user_id: User(id=user_id, email="alice@example.com", name="Alice")
        }

        members = await group_service.list_members(current_user)

        assert members == [
            MemberView(
                user_id=user_id,
                email="alice@example.com",
                name="Alice",
                role=Role.ADMIN,
                joined_at=members[0].joined_at,
            )
        ]

    @pytest.mark.asyncio
    async def test_add_member_creates_unknown_user(
        self,
        group_service,
        mock_resolver,
        mock_user_repository,
        mock_membership_repository,
        make_membership,
        current_user,
        user_id,
        group_id,
    ):
        mock_resolver.require_capability.return_value = make_membership(
            user_id, Role.ADMIN
        )

        view = await group_service.add_member(
            current_user, email=" Bob@Example.com ", role=Role.POWER_USER
        )

        assert view.email == "bob@example.com"
        assert view.role == Role.POWER_USER
        mock_user_repository.save.assert_awaited_once()
        added = mock_membership_repository.add.await_args.args[0]
        assert added.group_id == group_id
        assert added.role == Role.POWER_USER

    @pytest.mark.asyncio
    async def test_add_existing_member_is_duplicate(
        self,
        group_service,
        mock_resolver,
        mock_user_repository,
        mock_membership_repository,
        mock_probe,
        make_membership,
        current_user,
        user_id,
        other_user_id,
    ):
        mock_resolver.require_capability.return_value = make_membership(
            user_id, Role.ADMIN
        )
        mock_user_repository.get_by_email.return_value = User(
            id=other_user_id, email="bob@example.com"
        )
        mock_membership_repository.get.return_value = make_membership(
            other_user_id, Role.READ_ONLY
        )

        with pytest.raises(DuplicateMembershipError):
            await group_service.add_member(
                current_user, email="bob@example.com", role=Role.READ_ONLY
            )

        mock_probe.duplicate_member.assert_called_once()

    @pytest.mark.asyncio
    async def test_change_role_goes_through_admin_guard(
        self,
        group_service,
        mock_resolver,
        mock_admin_guard,
        make_membership,
        current_user,
        user_id,
        other_user_id,
        group_id,
    ):
        mock_resolver.require_capability.return_value = make_membership(
            user_id, Role.ADMIN
        )

        await group_service.change_member_role(
            current_user, other_user_id, Role.POWER_USER
        )

        mock_resolver.require_capability.assert_awaited_once_with(
            user_id, group_id, Capability.GROUP_CHANGE_ROLE
        )
        mock_admin_guard.change_role.assert_awaited_once_with(
            group_id, other_user_id, Role.POWER_USER
        )

    @pytest.mark.asyncio
    async def test_remove_member_goes_through_admin_guard(
        self,
        group_service,
        mock_resolver,
        mock_admin_guard,
        make_membership,
        current_user,
        user_id,
        other_user_id,
        group_id,
    ):
        mock_resolver.require_capability.return_value = make_membership(
            user_id, Role.ADMIN
        )

        await group_service.remove_member(current_user, other_user_id)

        mock_admin_guard.remove_member.assert_awaited_once_with(
            group_id, other_user_id
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["change_role", "remove"])
    async def test_group_is_locked_before_caller_is_authorized(
        self,
        operation,
        group_service,
        mock_resolver,
        mock_admin_guard,
        make_membership,
        current_user,
        user_id,
        other_user_id,
        group_id,
    ):
        """The caller's role must be read under the group lock."""
        manager = MagicMock()
        manager.attach_mock(mock_admin_guard.lock_group, "lock")
        manager.attach_mock(mock_resolver.require_capability, "authorize")
        mock_resolver.require_capability.return_value = make_membership(
            user_id, Role.ADMIN
        )

        if operation == "change_role":
            await group_service.change_member_role(
                current_user, other_user_id, Role.READ_ONLY
            )
        else:
            await group_service.remove_member(current_user, other_user_id)

        assert [c[0] for c in manager.mock_calls[:2]] == ["lock", "authorize"]
        assert manager.mock_calls[0] == call.lock(group_id)

    @pytest.mark.asyncio
    async def test_demoted_caller_is_refused_under_lock(
        self,
        group_service,
        mock_resolver,
        mock_admin_guard,
        current_user,
        other_user_id,
    ):
        mock_resolver.require_capability.side_effect = MissingCapabilityError(
            Capability.GROUP_CHANGE_ROLE
        )

        with pytest.raises(MissingCapabilityError):
            await group_service.change_member_role(
                current_user, other_user_id, Role.READ_ONLY
            )

        mock_admin_guard.lock_group.assert_awaited_once()
        mock_admin_guard.change_role.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cannot_remove_self(
        self, group_service, mock_admin_guard, current_user
    ):
        with pytest.raises(CannotRemoveSelfError):
            await group_service.remove_member(current_user, current_user.user_id)

        mock_admin_guard.remove_member.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_self_check_precedes_authorization(
        self, group_service, mock_resolver, current_user
    ):
        with pytest.raises(CannotRemoveSelfError):
            await group_service.remove_member(
                current_user, UserId(value=current_user.user_id.value)
            )

        mock_resolver.require_capability.assert_not_awaited()
