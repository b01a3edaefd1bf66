from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.application.services import GroupService, UserService
from iam.application.value_objects import CurrentUser
from iam.dependencies.authentication import bearer_scheme, get_jwt_validator
from iam.dependencies.group import get_group_service, get_user_repository
from iam.domain.value_objects import GroupId, UserId
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_session
from shared_kernel.auth import InvalidTokenError, JWTValidator, TokenClaims

_WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers=_WWW_AUTHENTICATE,
    )


async def get_token_claims(
    validator: Annotated[JWTValidator, Depends(get_jwt_validator)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> TokenClaims:
    """Validate the bearer token and return its claims.

    Raises:
        HTTPException 401: If the token is missing or invalid
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        return await validator.validate_token(credentials.credentials)
    except InvalidTokenError as e:
        raise _unauthorized(str(e)) from e


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance.

    Returns:
        DefaultUserServiceProbe instance for observability
    """
    return DefaultUserServiceProbe()


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Args:
        user_repo: User repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(user_repository=user_repo, session=session, probe=probe)


async def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    group_service: Annotated[GroupService, Depends(get_group_service)],
) -> CurrentUser:
    """Authenticate and JIT-provision the caller.

    The active group comes from the token's group claim. Tokens without
    one fall back to the user's primary membership, and a user with no
    membership at all gets a personal group with themselves as ADMIN.

    No role is attached here. Services resolve it per request.

    Raises:
        HTTPException 401: If the token is missing, invalid, or names a
            malformed user or group ID
    """
    try:
        user_id = UserId.from_string(claims.sub)
        group_id = (
            GroupId.from_string(claims.group_id) if claims.group_id else None
        )
    except ValueError as e:
        raise _unauthorized("Invalid token: malformed identity claims") from e

    username = claims.preferred_username or claims.sub
    user = await user_service.ensure_user(
        user_id=user_id,
        email=claims.email or username,
        name=claims.preferred_username,
    )

    if group_id is None:
        membership = await group_service.ensure_active_group(user)
        group_id = membership.group_id

    return CurrentUser(user_id=user_id, username=username, group_id=group_id)
