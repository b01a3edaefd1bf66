"""Translation of Recipes exceptions into HTTP errors.

Resource-scoped routes answer 404 both for missing resources and for
resources of a group the caller does not belong to, so a response never
confirms that something exists in another tenant. Foreign drafts arrive
here as ResourceNotFoundError already.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from recipes.ports.exceptions import (
    DuplicateFavoriteError,
    DuplicateSlugError,
    ExtractorNotConfiguredError,
    FavoriteNotFoundError,
    ImportRateLimitExceededError,
    RecipeExtractionError,
)
from shared_kernel.authorization import (
    ForbiddenError,
    NotAMemberError,
    ResourceNotFoundError,
    UnauthorizedError,
)


def http_error(
    error: Exception, failure: str, not_found: str | None = None
) -> HTTPException:
    """Map a service exception to an HTTPException.

    Args:
        error: The exception raised by the application service
        failure: Detail for unexpected errors (500)
        not_found: Detail for 404s on resource-scoped routes. Collection
            routes pass None, so non-membership of the active group is 403.
    """
    match error:
        case UnauthorizedError():
            return HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(error),
                headers={"WWW-Authenticate": "Bearer"},
            )
        case ResourceNotFoundError():
            return HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=not_found or str(error),
            )
        case NotAMemberError() if not_found is not None:
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        case ForbiddenError():
            return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
        case FavoriteNotFoundError():
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
        case DuplicateSlugError() | DuplicateFavoriteError():
            return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
        case ImportRateLimitExceededError():
            return HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(error)
            )
        case ExtractorNotConfiguredError():
            return HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error)
            )
        case RecipeExtractionError():
            return HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(error)
            )
        case ValueError():
            return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
        case _:
            return HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure
            )
