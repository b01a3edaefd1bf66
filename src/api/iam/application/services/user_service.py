"""User application service for IAM bounded context.

Handles user provisioning from the session service with JIT
(just-in-time) creation.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.ports.repositories import IUserRepository


class UserService:
    """Application service for user management.

    Handles user provisioning with JIT (just-in-time) creation.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._probe = probe or DefaultUserServiceProbe()
        self._session = session

    async def ensure_user(
        self, user_id: UserId, email: str, name: str | None = None
    ) -> User:
        """Ensure user exists in database (find-or-create pattern).

        If the profile from the session service differs from what is
        stored, the stored profile is updated.

        Manages database transaction for the entire use case.

        Args:
            user_id: The user's ID from the session service
            email: The user's email
            name: The user's display name, if known

        Returns:
            The User aggregate (existing or newly created)
        """
        email = email.strip().lower()
        try:
            async with self._session.begin():
                existing = await self._user_repository.get_by_id(user_id)
                if existing is not None:
                    if existing.email == email and (
                        name is None or existing.name == name
                    ):
                        self._probe.user_ensured(
                            user_id=user_id.value,
                            email=email,
                            was_created=False,
                            was_updated=False,
                        )
                        return existing

                    user = User(id=user_id, email=email, name=name or existing.name)
                    await self._user_repository.save(user)
                    self._probe.user_ensured(
                        user_id=user_id.value,
                        email=email,
                        was_created=False,
                        was_updated=True,
                    )
                    return user

                user = User(id=user_id, email=email, name=name)
                await self._user_repository.save(user)
                self._probe.user_ensured(
                    user_id=user_id.value,
                    email=email,
                    was_created=True,
                    was_updated=False,
                )
                return user

        except Exception as e:
            self._probe.user_provision_failed(
                user_id=user_id.value,
                email=email,
                error=str(e),
            )
            raise
