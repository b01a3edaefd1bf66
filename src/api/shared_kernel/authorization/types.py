"""Authorization type definitions shared by every bounded context.

Roles and capabilities are closed enums so the permission registry can be
checked exhaustively. No string comparisons against role names should
happen outside of these types.
"""

from enum import StrEnum


class Role(StrEnum):
    """Role a user holds within one group (tenant).

    A user has at most one role per group, carried by their membership.
    """

    ADMIN = "ADMIN"
    POWER_USER = "POWER_USER"
    READ_ONLY = "READ_ONLY"


class Capability(StrEnum):
    """Static capabilities granted by role.

    Each value is a `<resource>:<action>` pair. Comment capabilities are
    split into `*_own` (acting on one's own comment) and `*_any`.
    """

    # Recipes
    RECIPE_CREATE = "recipe:create"
    RECIPE_READ = "recipe:read"
    RECIPE_UPDATE = "recipe:update"
    RECIPE_DELETE = "recipe:delete"

    # Categories and tags
    CATEGORY_CREATE = "category:create"
    CATEGORY_UPDATE = "category:update"
    CATEGORY_DELETE = "category:delete"
    TAG_CREATE = "tag:create"
    TAG_UPDATE = "tag:update"
    TAG_DELETE = "tag:delete"

    # Group administration
    GROUP_UPDATE = "group:update"
    GROUP_INVITE = "group:invite"
    GROUP_REMOVE_MEMBER = "group:remove_member"
    GROUP_CHANGE_ROLE = "group:change_role"

    # Comments
    COMMENT_CREATE = "comment:create"
    COMMENT_UPDATE_OWN = "comment:update_own"
    COMMENT_UPDATE_ANY = "comment:update_any"
    COMMENT_DELETE_OWN = "comment:delete_own"
    COMMENT_DELETE_ANY = "comment:delete_any"

    # Favorites
    FAVORITE_CREATE = "favorite:create"
    FAVORITE_DELETE = "favorite:delete"


class ResourceType(StrEnum):
    """Group-scoped resources subject to tenant isolation."""

    RECIPE = "recipe"
    CATEGORY = "category"
    TAG = "tag"
    COMMENT = "comment"


class CommentAction(StrEnum):
    """Mutations governed by comment ownership rules."""

    UPDATE = "update"
    DELETE = "delete"
