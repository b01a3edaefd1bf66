from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from iam.application.services import (
    AdminInvariantGuard,
    GovernancePolicy,
    GroupService,
    MembershipResolver,
)
from iam.infrastructure.group_repository import GroupRepository
from iam.infrastructure.membership_repository import MembershipRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_session


def get_group_service_probe() -> GroupServiceProbe:
    """Get GroupServiceProbe instance.

    Returns:
        DefaultGroupServiceProbe instance for observability
    """
    return DefaultGroupServiceProbe()


def get_group_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GroupRepository:
    """Get GroupRepository instance bound to the request session."""
    return GroupRepository(session=session)


def get_membership_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> MembershipRepository:
    """Get MembershipRepository instance bound to the request session."""
    return MembershipRepository(session=session)


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserRepository:
    """Get UserRepository instance bound to the request session."""
    return UserRepository(session=session)


def get_membership_resolver(
    memberships: Annotated[MembershipRepository, Depends(get_membership_repository)],
) -> MembershipResolver:
    """Get MembershipResolver instance."""
    return MembershipResolver(membership_repository=memberships)


def get_governance_policy(
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    groups: Annotated[GroupRepository, Depends(get_group_repository)],
) -> GovernancePolicy:
    """Get GovernancePolicy instance."""
    return GovernancePolicy(membership_resolver=resolver, group_repository=groups)


def get_admin_invariant_guard(
    groups: Annotated[GroupRepository, Depends(get_group_repository)],
    memberships: Annotated[MembershipRepository, Depends(get_membership_repository)],
) -> AdminInvariantGuard:
    """Get AdminInvariantGuard instance."""
    return AdminInvariantGuard(
        group_repository=groups, membership_repository=memberships
    )


def get_group_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    groups: Annotated[GroupRepository, Depends(get_group_repository)],
    memberships: Annotated[MembershipRepository, Depends(get_membership_repository)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    admin_guard: Annotated[AdminInvariantGuard, Depends(get_admin_invariant_guard)],
    probe: Annotated[GroupServiceProbe, Depends(get_group_service_probe)],
) -> GroupService:
    """Get GroupService instance.

    All repositories share the request session via FastAPI dependency
    caching, so the service's transaction covers every read and write.
    """
    return GroupService(
        session=session,
        group_repository=groups,
        membership_repository=memberships,
        user_repository=users,
        membership_resolver=resolver,
        admin_guard=admin_guard,
        probe=probe,
    )
