"""Comment application service."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import MembershipResolver
from iam.domain.value_objects import Membership, UserId
from recipes.application.observability import (
    CommentServiceProbe,
    DefaultCommentServiceProbe,
)
from recipes.application.services.tenant_isolation_guard import (
    RecipeVisibility,
    TenantIsolationGuard,
)
from recipes.domain.aggregates import Comment
from recipes.domain.value_objects import CommentId, RecipeId
from recipes.ports.repositories import ICommentRepository
from shared_kernel.authorization.exceptions import NotOwnerError, ResourceNotFoundError
from shared_kernel.authorization.ownership import can_modify_comment
from shared_kernel.authorization.types import Capability, CommentAction, ResourceType


class CommentService:
    """Application service for recipe comments.

    Every operation passes tenant isolation and the parent recipe's
    visibility rule. Edits and deletes then apply ownership: the author
    (any role) or an ADMIN of the recipe's group.
    """

    def __init__(
        self,
        session: AsyncSession,
        comment_repository: ICommentRepository,
        membership_resolver: MembershipResolver,
        isolation_guard: TenantIsolationGuard,
        visibility: RecipeVisibility,
        probe: CommentServiceProbe | None = None,
    ):
        self._session = session
        self._comments = comment_repository
        self._resolver = membership_resolver
        self._guard = isolation_guard
        self._visibility = visibility
        self._probe = probe or DefaultCommentServiceProbe()

    async def list_comments(
        self, user_id: UserId, recipe_id: RecipeId
    ) -> list[Comment]:
        """List comments on a visible recipe, newest first."""
        async with self._session.begin():
            _, membership = await self._visibility.require_visible(user_id, recipe_id)
            self._resolver.check_capability(membership, Capability.RECIPE_READ)
            return await self._comments.list_by_recipe(recipe_id)

    async def add_comment(
        self, user_id: UserId, recipe_id: RecipeId, text: str
    ) -> Comment:
        """Post a comment on a visible recipe.

        Raises:
            ValueError: If the text is empty or too long
            MissingCapabilityError: If the role lacks comment:create
        """
        async with self._session.begin():
            _, membership = await self._visibility.require_visible(user_id, recipe_id)
            self._resolver.check_capability(membership, Capability.COMMENT_CREATE)
            comment = Comment.post(recipe_id=recipe_id, user_id=user_id, text=text)
            await self._comments.save(comment)

        self._probe.comment_created(
            comment_id=comment.id.value,
            recipe_id=recipe_id.value,
            user_id=user_id.value,
        )
        return comment

    async def update_comment(
        self, user_id: UserId, comment_id: CommentId, text: str
    ) -> Comment:
        """Edit a comment as its author or as a group ADMIN.

        Raises:
            ResourceNotFoundError: If the comment or its recipe is not visible
            NotAMemberError: If the comment belongs to another group
            NotOwnerError: If the caller is neither author nor ADMIN
            ValueError: If the text is empty or too long
        """
        async with self._session.begin():
            comment = await self._load_modifiable(
                user_id, comment_id, CommentAction.UPDATE
            )
            comment.edit(text)
            await self._comments.save(comment)

        self._probe.comment_updated(comment_id=comment_id.value, user_id=user_id.value)
        return comment

    async def delete_comment(self, user_id: UserId, comment_id: CommentId) -> None:
        """Delete a comment as its author or as a group ADMIN.

        Raises:
            ResourceNotFoundError: If the comment or its recipe is not visible
            NotAMemberError: If the comment belongs to another group
            NotOwnerError: If the caller is neither author nor ADMIN
        """
        async with self._session.begin():
            await self._load_modifiable(user_id, comment_id, CommentAction.DELETE)
            await self._comments.delete(comment_id)

        self._probe.comment_deleted(comment_id=comment_id.value, user_id=user_id.value)

    async def _load_modifiable(
        self, user_id: UserId, comment_id: CommentId, action: CommentAction
    ) -> Comment:
        membership = await self._guard.require_resource_access(
            user_id, ResourceType.COMMENT, comment_id.value
        )
        comment = await self._comments.get_by_id(comment_id)
        if comment is None:
            raise ResourceNotFoundError(ResourceType.COMMENT.value, comment_id.value)
        await self._visibility.require_visible(user_id, comment.recipe_id)
        self._require_ownership(comment, membership, action)
        return comment

    def _require_ownership(
        self, comment: Comment, membership: Membership, action: CommentAction
    ) -> None:
        if can_modify_comment(
            requester_id=membership.user_id.value,
            comment_owner_id=comment.user_id.value,
            requester_role=membership.role,
            action=action,
        ):
            return
        self._probe.comment_modification_denied(
            comment_id=comment.id.value,
            user_id=membership.user_id.value,
            owner_id=comment.user_id.value,
            role=membership.role.value,
            action=action.value,
        )
        raise NotOwnerError("Forbidden: You can only modify your own comments")
