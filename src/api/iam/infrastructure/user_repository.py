"""PostgreSQL implementation of IUserRepository.

Simple repository for user profile storage. Users are provisioned from the
session service and this repository only handles profile persistence.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.repositories import IUserRepository


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates.

    Joins the caller's transaction; never begins or commits on its own.
    """

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def save(self, user: User) -> None:
        """Persist a user aggregate.

        Creates a new user or updates an existing one.
        """
        model = await self._session.get(UserModel, user.id.value)
        if model:
            model.email = user.email
            model.name = user.name
        else:
            model = UserModel(id=user.id.value, email=user.email, name=user.name)
            self._session.add(model)

        await self._session.flush()
        self._probe.user_saved(user.id.value, user.email)

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Returns:
            The User aggregate, or None if not found
        """
        model = await self._session.get(UserModel, user_id.value)
        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by email, case-insensitively."""
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def get_many(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Retrieve several users keyed by ID. Unknown IDs are omitted."""
        if not user_ids:
            return {}
        stmt = select(UserModel).where(UserModel.id.in_([u.value for u in user_ids]))
        result = await self._session.execute(stmt)
        users = (self._to_domain(model) for model in result.scalars().all())
        return {user.id: user for user in users}

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(id=UserId(value=model.id), email=model.email, name=model.name)
