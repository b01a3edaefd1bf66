"""Unit tests for the Recipe aggregate and its visibility state machine."""

from __future__ import annotations

import pytest

from recipes.domain.aggregates import Recipe
from recipes.domain.exceptions import (
    InvalidRecipeTransitionError,
    NotRecipeCreatorError,
)
from recipes.domain.value_objects import CategoryId, RecipeStatus, TagId
from shared_kernel.authorization import ForbiddenError


class TestInitialState:
    def test_authored_recipe_is_published(self, make_recipe, user_id):
        assert make_recipe(user_id).status == RecipeStatus.PUBLISHED

    def test_imported_recipe_is_draft_with_source(self, make_recipe, user_id):
        recipe = make_recipe(user_id, RecipeStatus.DRAFT)

        assert recipe.is_draft
        assert recipe.source_url == "https://example.com/soup"
        assert recipe.created_by == user_id


class TestVisibility:
    def test_published_recipe_visible_to_everyone(
        self, make_recipe, user_id, other_user_id
    ):
        recipe = make_recipe(user_id)

        assert recipe.is_visible_to(user_id)
        assert recipe.is_visible_to(other_user_id)

    def test_draft_visible_only_to_creator(self, make_recipe, user_id, other_user_id):
        draft = make_recipe(user_id, RecipeStatus.DRAFT)

        assert draft.is_visible_to(user_id)
        assert not draft.is_visible_to(other_user_id)


class TestPublish:
    def test_creator_publishes_draft(self, make_recipe, user_id):
        draft = make_recipe(user_id, RecipeStatus.DRAFT)

        draft.publish(user_id)

        assert draft.status == RecipeStatus.PUBLISHED

    def test_other_user_cannot_publish(self, make_recipe, user_id, other_user_id):
        draft = make_recipe(user_id, RecipeStatus.DRAFT)

        with pytest.raises(NotRecipeCreatorError):
            draft.publish(other_user_id)

        assert draft.is_draft

    def test_not_creator_is_a_forbidden_error(self):
        assert issubclass(NotRecipeCreatorError, ForbiddenError)

    def test_publishing_published_recipe_is_invalid(self, make_recipe, user_id):
        with pytest.raises(InvalidRecipeTransitionError):
            make_recipe(user_id).publish(user_id)


class TestTransitionTo:
    def test_same_status_is_no_op(self, make_recipe, user_id, other_user_id):
        recipe = make_recipe(user_id)

        recipe.transition_to(RecipeStatus.PUBLISHED, other_user_id)

        assert recipe.status == RecipeStatus.PUBLISHED

    def test_published_cannot_return_to_draft(self, make_recipe, user_id):
        recipe = make_recipe(user_id)

        with pytest.raises(InvalidRecipeTransitionError):
            recipe.transition_to(RecipeStatus.DRAFT, user_id)

    def test_draft_to_published_by_creator(self, make_recipe, user_id):
        draft = make_recipe(user_id, RecipeStatus.DRAFT)

        draft.transition_to(RecipeStatus.PUBLISHED, user_id)

        assert not draft.is_draft

    def test_invalid_transition_is_a_value_error(self):
        assert issubclass(InvalidRecipeTransitionError, ValueError)


class TestDiscard:
    def test_creator_may_discard_draft(self, make_recipe, user_id):
        make_recipe(user_id, RecipeStatus.DRAFT).ensure_discardable_by(user_id)

    def test_other_user_may_not_discard(self, make_recipe, user_id, other_user_id):
        with pytest.raises(NotRecipeCreatorError):
            make_recipe(user_id, RecipeStatus.DRAFT).ensure_discardable_by(
                other_user_id
            )

    def test_published_recipe_is_not_discardable(self, make_recipe, user_id):
        with pytest.raises(InvalidRecipeTransitionError):
            make_recipe(user_id).ensure_discardable_by(user_id)


class TestRevise:
    def test_replaces_content_and_classification(self, make_recipe, user_id, content):
        recipe: Recipe = make_recipe(user_id)
        category = CategoryId.generate()
        tag = TagId.generate()

        recipe.revise(content, frozenset({category}), frozenset({tag}))

        assert recipe.category_ids == frozenset({category})
        assert recipe.tag_ids == frozenset({tag})
        assert recipe.updated_at >= recipe.created_at
