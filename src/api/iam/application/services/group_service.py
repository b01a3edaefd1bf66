"""Group application service for IAM bounded context.

Orchestrates group creation, settings changes and member administration.
Each public method is one use case and owns its database transaction.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultGroupServiceProbe, GroupServiceProbe
from iam.application.services.admin_invariant_guard import AdminInvariantGuard
from iam.application.services.membership_resolver import MembershipResolver
from iam.application.value_objects import CurrentUser, MemberView
from iam.domain.aggregates import Group, User
from iam.domain.naming import default_group_name, generate_group_slug
from iam.domain.value_objects import GroupId, Membership, UserId
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
from shared_kernel.authorization.types import Capability, Role
from shared_kernel.slugs import candidate_slugs, slugify


class GroupService:
    """Application service for group management.

    Every authorization decision is made through the MembershipResolver
    inside the same transaction as the mutation it protects.
    """

    def __init__(
        self,
        session: AsyncSession,
        group_repository: IGroupRepository,
        membership_repository: IMembershipRepository,
        user_repository: IUserRepository,
        membership_resolver: MembershipResolver,
        admin_guard: AdminInvariantGuard,
        probe: GroupServiceProbe | None = None,
    ):
        """Initialize GroupService with dependencies.

        Args:
            session: Database session for transaction management
            group_repository: Repository for group persistence
            membership_repository: Repository for memberships
            user_repository: Repository for user profiles
            membership_resolver: Resolves the caller's role
            admin_guard: Applies membership mutations under the admin invariant
            probe: Optional domain probe for observability
        """
        self._session = session
        self._groups = group_repository
        self._memberships = membership_repository
        self._users = user_repository
        self._resolver = membership_resolver
        self._admin_guard = admin_guard
        self._probe = probe or DefaultGroupServiceProbe()

    async def create_group(
        self, creator_id: UserId, name: str | None = None
    ) -> Group:
        """Create a new group with the creator as its sole admin.

        Args:
            creator_id: The user creating the group
            name: Group name. Derived from the creator's profile if omitted.

        Returns:
            The created Group aggregate

        Raises:
            ValueError: If the name is invalid
        """
        try:
            async with self._session.begin():
                if not name:
                    creator = await self._users.get_by_id(creator_id)
                    name = default_group_name(
                        creator.name if creator else None,
                        creator.email if creator else creator_id.value,
                    )
                group = await self._create_with_admin(name, creator_id)
        except Exception as e:
            self._probe.group_creation_failed(
                name=name or "", creator_id=creator_id.value, error=str(e)
            )
            raise

        self._probe.group_created(
            group_id=group.id.value, name=group.name, creator_id=creator_id.value
        )
        return group

    async def ensure_active_group(self, user: User) -> Membership:
        """Return the user's primary membership, creating a group if they have none.

        Every user belongs to at least one group. A user arriving from the
        session service without any membership gets a personal group.
        """
        async with self._session.begin():
            membership = await self._resolver.get_primary_membership(user.id)
            if membership is not None:
                return membership
            name = default_group_name(user.name, user.email)
            group = await self._create_with_admin(name, user.id)
            membership = await self._memberships.get(user.id, group.id)

        self._probe.group_created(
            group_id=group.id.value, name=group.name, creator_id=user.id.value
        )
        if membership is None:
            raise GroupNotFoundError(f"Group {group.id} not found after creation")
        return membership

    async def get_group(self, group_id: GroupId, user_id: UserId) -> Group:
        """Get a group the user belongs to.

        Raises:
            NotAMemberError: If the user is not a member
            GroupNotFoundError: If the group does not exist
        """
        async with self._session.begin():
            await self._resolver.require_membership(user_id, group_id)
            group = await self._groups.get_by_id(group_id)
        if group is None:
            raise GroupNotFoundError(f"Group {group_id} not found")
        return group

    async def update_group_settings(
        self,
        group_id: GroupId,
        user_id: UserId,
        name: str | None = None,
        allow_power_user_edit: bool | None = None,
    ) -> Group:
        """Rename the group and/or toggle power-user editing.

        Raises:
            ValueError: If no field is supplied or the name is invalid
            NotAMemberError: If the user is not a member
            MissingCapabilityError: If the user lacks group:update
        """
        if name is None and allow_power_user_edit is None:
            raise ValueError("At least one setting must be provided")

        async with self._session.begin():
            await self._resolver.require_capability(
                user_id, group_id, Capability.GROUP_UPDATE
            )
            group = await self._groups.get_by_id(group_id)
            if group is None:
                raise GroupNotFoundError(f"Group {group_id} not found")

            if name is not None:
                slug = await self._unique_slug(name, exclude=group.id)
                group.rename(name, slug)
            if allow_power_user_edit is not None:
                group.set_power_user_edit(allow_power_user_edit)
            await self._groups.save(group)

        self._probe.group_settings_updated(
            group_id=group.id.value,
            name=group.name,
            allow_power_user_edit=group.allow_power_user_edit,
        )
        return group

    async def list_members(self, current_user: CurrentUser) -> list[MemberView]:
        """List members of the caller's active group, newest first."""
        async with self._session.begin():
            membership = await self._resolver.require_capability(
                current_user.user_id, current_user.group_id, Capability.GROUP_INVITE
            )
            memberships = await self._memberships.list_by_group(membership.group_id)
            users = await self._users.get_many([m.user_id for m in memberships])

        return [
            MemberView(
                user_id=m.user_id,
                email=users[m.user_id].email if m.user_id in users else "",
                name=users[m.user_id].name if m.user_id in users else None,
                role=m.role,
                joined_at=m.joined_at,
            )
            for m in memberships
        ]

    async def add_member(
        self,
        current_user: CurrentUser,
        email: str,
        role: Role,
        name: str | None = None,
    ) -> MemberView:
        """Add a user to the caller's active group.

        Unknown emails get a user row; credentials are issued externally.

        Raises:
            MissingCapabilityError: If the caller lacks group:invite
            DuplicateMembershipError: If the user is already a member
        """
        email = email.strip().lower()
        async with self._session.begin():
            caller = await self._resolver.require_capability(
                current_user.user_id, current_user.group_id, Capability.GROUP_INVITE
            )
            group_id = caller.group_id

            user = await self._users.get_by_email(email)
            if user is None:
                user = User(id=UserId.generate(), email=email, name=name)
                await self._users.save(user)
            elif await self._memberships.get(user.id, group_id) is not None:
                self._probe.duplicate_member(
                    group_id=group_id.value, user_id=user.id.value
                )
                raise DuplicateMembershipError(
                    f"User {email} is already a member of this group"
                )

            membership = Membership(
                user_id=user.id,
                group_id=group_id,
                role=role,
                joined_at=datetime.now(UTC),
            )
            await self._memberships.add(membership)

        self._probe.member_added(
            group_id=group_id.value, user_id=user.id.value, role=role.value
        )
        return MemberView(
            user_id=user.id,
            email=user.email,
            name=user.name,
            role=role,
            joined_at=membership.joined_at,
        )

    async def change_member_role(
        self, current_user: CurrentUser, target_user_id: UserId, role: Role
    ) -> Membership:
        """Change a member's role in the caller's active group.

        Raises:
            GroupNotFoundError: If the caller's active group no longer exists
            MissingCapabilityError: If the caller lacks group:change_role
            MemberNotFoundError: If the target is not a member
            CannotRemoveLastAdminError: If this would demote the last admin
        """
        async with self._session.begin():
            await self._admin_guard.lock_group(current_user.group_id)
            caller = await self._resolver.require_capability(
                current_user.user_id,
                current_user.group_id,
                Capability.GROUP_CHANGE_ROLE,
            )
            return await self._admin_guard.change_role(
                caller.group_id, target_user_id, role
            )

    async def remove_member(
        self, current_user: CurrentUser, target_user_id: UserId
    ) -> None:
        """Remove a member from the caller's active group.

        Raises:
            GroupNotFoundError: If the caller's active group no longer exists
            MissingCapabilityError: If the caller lacks group:remove_member
            CannotRemoveSelfError: If the caller targets themselves
            MemberNotFoundError: If the target is not a member
            CannotRemoveLastAdminError: If this would remove the last admin
        """
        if target_user_id == current_user.user_id:
            raise CannotRemoveSelfError("You cannot remove yourself from the group")

        async with self._session.begin():
            await self._admin_guard.lock_group(current_user.group_id)
            caller = await self._resolver.require_capability(
                current_user.user_id,
                current_user.group_id,
                Capability.GROUP_REMOVE_MEMBER,
            )
            await self._admin_guard.remove_member(caller.group_id, target_user_id)

    async def _create_with_admin(self, name: str, creator_id: UserId) -> Group:
        slug = generate_group_slug()
        while await self._groups.slug_exists(slug):
            slug = generate_group_slug()

        group = Group.create(name=name, slug=slug)
        await self._groups.save(group)
        await self._memberships.add(
            Membership(
                user_id=creator_id,
                group_id=group.id,
                role=Role.ADMIN,
                joined_at=group.created_at,
            )
        )
        return group

    async def _unique_slug(self, name: str, exclude: GroupId) -> str:
        base = slugify(name) or generate_group_slug()
        for candidate in candidate_slugs(base):
            if not await self._groups.slug_exists(candidate, exclude_group_id=exclude):
                return candidate
        raise AssertionError("unreachable")
