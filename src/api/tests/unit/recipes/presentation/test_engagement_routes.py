"""Unit tests for comment, category, tag and favorite HTTP routes."""

from __future__ import annotations

import pytest
from fastapi import status

from recipes.domain.aggregates import Comment, TaxonomyKind, TaxonomyTerm
from recipes.domain.value_objects import CommentId, RecipeId
from recipes.ports.exceptions import (
    DuplicateFavoriteError,
    DuplicateSlugError,
    FavoriteNotFoundError,
)
from recipes.ports.queries import RecipePage
from shared_kernel.authorization import (
    Capability,
    MissingCapabilityError,
    NotAMemberError,
    NotOwnerError,
    ResourceNotFoundError,
)


class TestCommentRoutes:
    def test_add_comment(self, test_client, mock_comment_service, user_id) -> None:
        rid = RecipeId.generate()
        mock_comment_service.add_comment.return_value = Comment.post(
            rid, user_id, "Nice"
        )

        response = test_client.post(
            f"/recipes/{rid.value}/comments", json={"text": "Nice"}
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["text"] == "Nice"
        mock_comment_service.add_comment.assert_called_once_with(user_id, rid, "Nice")

    def test_list_comments_of_foreign_recipe_returns_404(
        self, test_client, mock_comment_service
    ) -> None:
        mock_comment_service.list_comments.side_effect = NotAMemberError(
            user_id="user-alice", group_id="other"
        )

        response = test_client.get(f"/recipes/{RecipeId.generate().value}/comments")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Recipe not found"

    def test_editing_others_comment_returns_403(
        self, test_client, mock_comment_service
    ) -> None:
        mock_comment_service.update_comment.side_effect = NotOwnerError(
            "Forbidden: You can only modify your own comments"
        )

        response = test_client.patch(
            f"/comments/{CommentId.generate().value}", json={"text": "Edited"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_missing_comment_returns_404(
        self, test_client, mock_comment_service
    ) -> None:
        cid = CommentId.generate()
        mock_comment_service.delete_comment.side_effect = ResourceNotFoundError(
            "comment", cid.value
        )

        response = test_client.delete(f"/comments/{cid.value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Comment not found"

    def test_malformed_comment_id_returns_404(self, test_client) -> None:
        response = test_client.delete("/comments/bogus")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestTaxonomyRoutes:
    @pytest.mark.parametrize(
        ("path", "kind"),
        [("/categories", TaxonomyKind.CATEGORY), ("/tags", TaxonomyKind.TAG)],
    )
    def test_create_binds_kind(
        self, test_client, mock_taxonomy_service, current_user, group_id, path, kind
    ) -> None:
        mock_taxonomy_service.create_term.return_value = TaxonomyTerm.create(
            kind, group_id, "Quick", "quick"
        )

        response = test_client.post(path, json={"name": "Quick"})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["slug"] == "quick"
        mock_taxonomy_service.create_term.assert_called_once_with(
            kind, current_user, "Quick"
        )

    def test_duplicate_slug_returns_409(self, test_client, mock_taxonomy_service) -> None:
        mock_taxonomy_service.create_term.side_effect = DuplicateSlugError("taken")

        response = test_client.post("/tags", json={"name": "Quick"})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_without_capability_returns_403(
        self, test_client, mock_taxonomy_service
    ) -> None:
        mock_taxonomy_service.delete_term.side_effect = MissingCapabilityError(
            Capability.CATEGORY_DELETE
        )

        response = test_client.delete("/categories/01JA0000000000000000000000")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_rename_foreign_term_returns_404(
        self, test_client, mock_taxonomy_service
    ) -> None:
        mock_taxonomy_service.update_term.side_effect = NotAMemberError(
            user_id="user-alice", group_id="other"
        )

        response = test_client.patch(
            "/tags/01JA0000000000000000000000", json={"name": "Mine"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Tag not found"


class TestFavoriteRoutes:
    def test_add_favorite(self, test_client, mock_favorite_service, user_id) -> None:
        rid = RecipeId.generate()

        response = test_client.post("/favorites", json={"recipe_id": rid.value})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {"recipe_id": rid.value}
        mock_favorite_service.add_favorite.assert_called_once_with(user_id, rid)

    def test_duplicate_returns_409(self, test_client, mock_favorite_service) -> None:
        mock_favorite_service.add_favorite.side_effect = DuplicateFavoriteError(
            "Recipe is already in favorites"
        )

        response = test_client.post(
            "/favorites", json={"recipe_id": RecipeId.generate().value}
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_remove_missing_favorite_returns_404(
        self, test_client, mock_favorite_service
    ) -> None:
        mock_favorite_service.remove_favorite.side_effect = FavoriteNotFoundError(
            "Recipe is not in your favorites"
        )

        response = test_client.delete(f"/favorites/{RecipeId.generate().value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_favorites(self, test_client, mock_favorite_service, current_user) -> None:
        mock_favorite_service.list_favorites.return_value = RecipePage()

        response = test_client.get("/favorites", params={"page": 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["recipes"] == []
        mock_favorite_service.list_favorites.assert_called_once_with(
            current_user, page=2, limit=20
        )
