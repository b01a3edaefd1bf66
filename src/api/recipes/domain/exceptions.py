"""Domain exceptions for Recipes bounded context."""

from __future__ import annotations

from shared_kernel.authorization.exceptions import NotOwnerError


class InvalidRecipeTransitionError(ValueError):
    """Raised when a status change is not part of the recipe lifecycle.

    Only DRAFT -> PUBLISHED and discarding a DRAFT are defined.
    """

    pass


class NotRecipeCreatorError(NotOwnerError):
    """Raised when a draft-only action is attempted by someone other than its creator."""

    def __init__(self, message: str = "Forbidden: Only the creator can do this"):
        super().__init__(message)
