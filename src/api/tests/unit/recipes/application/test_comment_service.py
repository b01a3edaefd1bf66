"""Unit tests for CommentService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from recipes.application.observability import CommentServiceProbe
from recipes.application.services import CommentService
from recipes.domain.aggregates import Comment
from recipes.domain.value_objects import CommentId, RecipeStatus
from recipes.ports.repositories import ICommentRepository
from shared_kernel.authorization import (
    NotAMemberError,
    NotOwnerError,
    ResourceNotFoundError,
    Role,
)


@pytest.fixture
def mock_comment_repository(stored_comments):
    repo = create_autospec(ICommentRepository, instance=True)

    async def _get(comment_id):
        return stored_comments.get(comment_id.value)

    async def _save(comment):
        stored_comments[comment.id.value] = comment

    async def _delete(comment_id):
        return stored_comments.pop(comment_id.value, None) is not None

    repo.get_by_id = AsyncMock(side_effect=_get)
    repo.save = AsyncMock(side_effect=_save)
    repo.delete = AsyncMock(side_effect=_delete)
    repo.list_by_recipe = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_probe():
    return MagicMock(spec=CommentServiceProbe)


@pytest.fixture
def service(
    mock_session,
    mock_comment_repository,
    membership_resolver,
    isolation_guard,
    visibility,
    mock_probe,
) -> CommentService:
    return CommentService(
        session=mock_session,
        comment_repository=mock_comment_repository,
        membership_resolver=membership_resolver,
        isolation_guard=isolation_guard,
        visibility=visibility,
        probe=mock_probe,
    )


@pytest.fixture
def recipe(store_recipe, make_recipe, other_user_id):
    return store_recipe(make_recipe(other_user_id))


@pytest.fixture
def store_comment(stored_comments):
    def _store(recipe, author, text="Delicious"):
        comment = Comment.post(recipe.id, author, text)
        stored_comments[comment.id.value] = comment
        return comment

    return _store


class TestAddComment:
    @pytest.mark.asyncio
    async def test_read_only_member_may_comment(
        self, service, join, recipe, user_id, stored_comments, mock_probe
    ):
        join(user_id, Role.READ_ONLY)

        comment = await service.add_comment(user_id, recipe.id, "  Lovely  ")

        assert comment.text == "Lovely"
        assert stored_comments[comment.id.value] is comment
        mock_probe.comment_created.assert_called_once()

    @pytest.mark.asyncio
    async def test_cannot_comment_on_foreign_draft(
        self, service, join, store_recipe, make_recipe, user_id, other_user_id
    ):
        join(user_id, Role.ADMIN)
        draft = store_recipe(make_recipe(other_user_id, RecipeStatus.DRAFT))

        with pytest.raises(ResourceNotFoundError):
            await service.add_comment(user_id, draft.id, "Hi")

    @pytest.mark.asyncio
    async def test_rejects_empty_text(self, service, join, recipe, user_id):
        join(user_id, Role.READ_ONLY)

        with pytest.raises(ValueError):
            await service.add_comment(user_id, recipe.id, "   ")


class TestListComments:
    @pytest.mark.asyncio
    async def test_lists_for_visible_recipe(
        self, service, join, recipe, user_id, mock_comment_repository
    ):
        join(user_id, Role.READ_ONLY)

        assert await service.list_comments(user_id, recipe.id) == []
        mock_comment_repository.list_by_recipe.assert_awaited_once_with(recipe.id)

    @pytest.mark.asyncio
    async def test_other_group_is_refused(
        self, service, join, recipe, user_id, foreign_group_id
    ):
        join(user_id, Role.ADMIN, foreign_group_id)

        with pytest.raises(NotAMemberError):
            await service.list_comments(user_id, recipe.id)


class TestModifyComment:
    @pytest.mark.asyncio
    async def test_read_only_author_edits_own_comment(
        self, service, join, recipe, store_comment, user_id
    ):
        join(user_id, Role.READ_ONLY)
        comment = store_comment(recipe, user_id)

        updated = await service.update_comment(user_id, comment.id, "Even better")

        assert updated.text == "Even better"

    @pytest.mark.asyncio
    async def test_power_user_cannot_edit_others_comment(
        self,
        service,
        join,
        recipe,
        store_comment,
        user_id,
        other_user_id,
        mock_probe,
    ):
        join(user_id, Role.POWER_USER)
        join(other_user_id, Role.READ_ONLY)
        comment = store_comment(recipe, other_user_id)

        with pytest.raises(NotOwnerError):
            await service.update_comment(user_id, comment.id, "Edited")

        mock_probe.comment_modification_denied.assert_called_once()
        assert comment.text == "Delicious"

    @pytest.mark.asyncio
    async def test_admin_deletes_others_comment(
        self, service, join, recipe, store_comment, user_id, other_user_id, stored_comments
    ):
        join(user_id, Role.ADMIN)
        comment = store_comment(recipe, other_user_id)

        await service.delete_comment(user_id, comment.id)

        assert comment.id.value not in stored_comments

    @pytest.mark.asyncio
    async def test_admin_of_another_group_is_refused(
        self,
        service,
        join,
        recipe,
        store_comment,
        user_id,
        other_user_id,
        foreign_group_id,
        stored_comments,
    ):
        join(user_id, Role.ADMIN, foreign_group_id)
        comment = store_comment(recipe, other_user_id)

        with pytest.raises(NotAMemberError):
            await service.delete_comment(user_id, comment.id)

        assert comment.id.value in stored_comments

    @pytest.mark.asyncio
    async def test_unknown_comment_is_not_found(self, service, join, user_id):
        join(user_id, Role.ADMIN)

        with pytest.raises(ResourceNotFoundError):
            await service.delete_comment(user_id, CommentId.generate())
