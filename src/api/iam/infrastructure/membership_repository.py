"""PostgreSQL implementation of IMembershipRepository."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from iam.domain.value_objects import GroupId, Membership, UserId
from iam.infrastructure.models import GroupMembershipModel
from iam.infrastructure.observability import (
    DefaultMembershipRepositoryProbe,
    MembershipRepositoryProbe,
)
from iam.ports.exceptions import DuplicateMembershipError
from iam.ports.repositories import IMembershipRepository
from shared_kernel.authorization.types import Role


class MembershipRepository(IMembershipRepository):
    """PostgreSQL-backed repository for group memberships.

    Joins the caller's transaction; never begins or commits on its own.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: MembershipRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultMembershipRepositoryProbe()

    async def get(self, user_id: UserId, group_id: GroupId) -> Membership | None:
        # populate_existing: a row cached earlier in the session may be stale
        stmt = (
            select(GroupMembershipModel)
            .where(
                GroupMembershipModel.user_id == user_id.value,
                GroupMembershipModel.group_id == group_id.value,
            )
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def get_primary(self, user_id: UserId) -> Membership | None:
        stmt = (
            select(GroupMembershipModel)
            .where(GroupMembershipModel.user_id == user_id.value)
            .order_by(GroupMembershipModel.joined_at.asc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_by_group(self, group_id: GroupId) -> list[Membership]:
        stmt = (
            select(GroupMembershipModel)
            .where(GroupMembershipModel.group_id == group_id.value)
            .order_by(GroupMembershipModel.joined_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_admins(self, group_id: GroupId) -> int:
        stmt = select(func.count()).where(
            GroupMembershipModel.group_id == group_id.value,
            GroupMembershipModel.role == Role.ADMIN,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def add(self, membership: Membership) -> None:
        """Insert a membership.

        Raises:
            DuplicateMembershipError: If the (user, group) pair already exists
        """
        self._session.add(
            GroupMembershipModel(
                id=str(ULID()),
                user_id=membership.user_id.value,
                group_id=membership.group_id.value,
                role=membership.role,
                joined_at=membership.joined_at,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            self._probe.duplicate_membership(
                membership.group_id.value, membership.user_id.value
            )
            raise DuplicateMembershipError(
                f"User {membership.user_id} is already a member of this group"
            ) from e

        self._probe.membership_added(
            membership.group_id.value,
            membership.user_id.value,
            membership.role.value,
        )

    async def update_role(
        self, user_id: UserId, group_id: GroupId, role: Role
    ) -> Membership | None:
        stmt = select(GroupMembershipModel).where(
            GroupMembershipModel.user_id == user_id.value,
            GroupMembershipModel.group_id == group_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        model.role = role
        await self._session.flush()
        return self._to_domain(model)

    async def delete(self, user_id: UserId, group_id: GroupId) -> bool:
        stmt = delete(GroupMembershipModel).where(
            GroupMembershipModel.user_id == user_id.value,
            GroupMembershipModel.group_id == group_id.value,
        )
        result = await self._session.execute(stmt)
        deleted = result.rowcount > 0
        if deleted:
            self._probe.membership_deleted(group_id.value, user_id.value)
        return deleted

    @staticmethod
    def _to_domain(model: GroupMembershipModel) -> Membership:
        return Membership(
            user_id=UserId(value=model.user_id),
            group_id=GroupId(value=model.group_id),
            role=Role(model.role),
            joined_at=model.joined_at,
        )
