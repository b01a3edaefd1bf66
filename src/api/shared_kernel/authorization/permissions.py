"""Static role/capability registry.

The table below is the single source of truth for what a role may do
before any per-group governance or ownership rule is applied. It must be
total: every Capability maps to the set of roles that hold it, and a
capability missing from the table is a programming error detected at
import time rather than a silent deny.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from shared_kernel.authorization.exceptions import MissingCapabilityError
from shared_kernel.authorization.types import Capability, Role

_ALL_ROLES = frozenset(Role)
_EDITORS = frozenset({Role.ADMIN, Role.POWER_USER})
_ADMINS = frozenset({Role.ADMIN})

PERMISSIONS: Mapping[Capability, frozenset[Role]] = MappingProxyType(
    {
        # Recipes
        Capability.RECIPE_CREATE: _EDITORS,
        Capability.RECIPE_READ: _ALL_ROLES,
        Capability.RECIPE_UPDATE: _EDITORS,
        Capability.RECIPE_DELETE: _ADMINS,
        # Categories and tags
        Capability.CATEGORY_CREATE: _EDITORS,
        Capability.CATEGORY_UPDATE: _EDITORS,
        Capability.CATEGORY_DELETE: _ADMINS,
        Capability.TAG_CREATE: _EDITORS,
        Capability.TAG_UPDATE: _EDITORS,
        Capability.TAG_DELETE: _ADMINS,
        # Group administration
        Capability.GROUP_UPDATE: _ADMINS,
        Capability.GROUP_INVITE: _ADMINS,
        Capability.GROUP_REMOVE_MEMBER: _ADMINS,
        Capability.GROUP_CHANGE_ROLE: _ADMINS,
        # Comments
        Capability.COMMENT_CREATE: _ALL_ROLES,
        Capability.COMMENT_UPDATE_OWN: _ALL_ROLES,
        Capability.COMMENT_UPDATE_ANY: _ADMINS,
        Capability.COMMENT_DELETE_OWN: _ALL_ROLES,
        Capability.COMMENT_DELETE_ANY: _ADMINS,
        # Favorites
        Capability.FAVORITE_CREATE: _ALL_ROLES,
        Capability.FAVORITE_DELETE: _ALL_ROLES,
    }
)

_missing = set(Capability) - set(PERMISSIONS)
if _missing:
    raise RuntimeError(
        f"Permission registry is not total, missing: {sorted(_missing)}"
    )


def has_permission(role: Role, capability: Capability) -> bool:
    """Check whether a role holds a capability.

    Pure and total over (Role, Capability). Does not consider group
    governance settings or resource ownership.
    """
    return role in PERMISSIONS[capability]


def require_permission(role: Role, capability: Capability) -> None:
    """Raise MissingCapabilityError unless the role holds the capability."""
    if not has_permission(role, capability):
        raise MissingCapabilityError(capability)


def capabilities_for(role: Role) -> frozenset[Capability]:
    """Return every capability the role holds."""
    return frozenset(
        capability for capability, roles in PERMISSIONS.items() if role in roles
    )
