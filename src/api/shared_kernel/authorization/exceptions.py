"""Authorization error taxonomy.

Every authorization failure is one of three kinds:

- UnauthorizedError: no verified identity
- ForbiddenError: identity known but lacking the right
- ResourceNotFoundError: resource absent, or deliberately indistinguishable
  from a resource in a foreign tenant or a foreign draft

None of these are transient; callers must not retry them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared_kernel.authorization.types import Capability


class AuthorizationError(Exception):
    """Base class for authorization failures."""

    pass


class UnauthorizedError(AuthorizationError):
    """Raised when the request carries no verified identity."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ForbiddenError(AuthorizationError):
    """Raised when a known identity lacks the right to act."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class NotAMemberError(ForbiddenError):
    """Raised when a user has no membership in the requested group."""

    def __init__(self, user_id: str, group_id: str) -> None:
        self.user_id = user_id
        self.group_id = group_id
        super().__init__("Forbidden: Not a member of this group")


class MissingCapabilityError(ForbiddenError):
    """Raised when the user's role lacks a static capability."""

    def __init__(self, capability: Capability) -> None:
        self.capability = capability
        super().__init__(f"Forbidden: Missing permission '{capability.value}'")


class GovernanceDeniedError(ForbiddenError):
    """Raised when the group's governance settings deny an edit."""

    def __init__(
        self, message: str = "Forbidden: Not allowed to edit recipes in this group"
    ) -> None:
        super().__init__(message)


class NotOwnerError(ForbiddenError):
    """Raised when an action is restricted to the resource owner."""

    def __init__(self, message: str = "Forbidden: Not the owner of this resource"):
        super().__init__(message)


class ResourceNotFoundError(AuthorizationError):
    """Raised when a resource does not exist or must appear not to exist."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type.capitalize()} not found")
