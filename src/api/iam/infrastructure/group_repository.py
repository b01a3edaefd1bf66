"""PostgreSQL implementation of IGroupRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupId
from iam.infrastructure.models import GroupModel
from iam.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from iam.ports.exceptions import DuplicateGroupSlugError
from iam.ports.repositories import IGroupRepository


class GroupRepository(IGroupRepository):
    """PostgreSQL-backed repository for Group aggregates.

    Joins the caller's transaction; never begins or commits on its own.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: GroupRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGroupRepositoryProbe()

    async def save(self, group: Group) -> None:
        """Persist group to PostgreSQL.

        Raises:
            DuplicateGroupSlugError: If the slug is already taken
        """
        model = await self._session.get(GroupModel, group.id.value)
        if model:
            model.name = group.name
            model.slug = group.slug
            model.allow_power_user_edit = group.allow_power_user_edit
            model.updated_at = group.updated_at
        else:
            model = GroupModel(
                id=group.id.value,
                name=group.name,
                slug=group.slug,
                allow_power_user_edit=group.allow_power_user_edit,
                created_at=group.created_at,
                updated_at=group.updated_at,
            )
            self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            self._probe.duplicate_group_slug(group.slug)
            raise DuplicateGroupSlugError(
                f"Group slug '{group.slug}' is already taken"
            ) from e

        self._probe.group_saved(group.id.value)

    async def get_by_id(self, group_id: GroupId) -> Group | None:
        """Retrieve a group by its ID."""
        model = await self._session.get(GroupModel, group_id.value)
        if model is None:
            self._probe.group_not_found(group_id.value)
            return None

        self._probe.group_retrieved(group_id.value)
        return self._to_domain(model)

    async def lock_for_update(self, group_id: GroupId) -> Group | None:
        """Retrieve a group with SELECT ... FOR UPDATE.

        The lock is held until the surrounding transaction ends.
        """
        stmt = (
            select(GroupModel)
            .where(GroupModel.id == group_id.value)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.group_not_found(group_id.value)
            return None

        self._probe.group_locked(group_id.value)
        return self._to_domain(model)

    async def slug_exists(
        self, slug: str, exclude_group_id: GroupId | None = None
    ) -> bool:
        """Check whether a slug is used by any group other than the excluded one."""
        stmt = select(GroupModel.id).where(GroupModel.slug == slug)
        if exclude_group_id is not None:
            stmt = stmt.where(GroupModel.id != exclude_group_id.value)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    @staticmethod
    def _to_domain(model: GroupModel) -> Group:
        return Group(
            id=GroupId(value=model.id),
            name=model.name,
            slug=model.slug,
            allow_power_user_edit=model.allow_power_user_edit,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
