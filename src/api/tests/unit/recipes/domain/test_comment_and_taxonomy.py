"""Unit tests for the Comment and TaxonomyTerm aggregates."""

import pytest

from recipes.domain.aggregates import Comment, TaxonomyKind, TaxonomyTerm
from recipes.domain.value_objects import CategoryId, RecipeId, TagId
from shared_kernel.authorization import Capability, ResourceType


class TestComment:
    def test_post_trims_text(self, user_id):
        comment = Comment.post(RecipeId.generate(), user_id, "  Lovely!  ")

        assert comment.text == "Lovely!"
        assert comment.user_id == user_id

    @pytest.mark.parametrize("text", ["", "   ", "x" * 2001])
    def test_rejects_invalid_text(self, user_id, text):
        with pytest.raises(ValueError):
            Comment.post(RecipeId.generate(), user_id, text)

    def test_edit(self, user_id):
        comment = Comment.post(RecipeId.generate(), user_id, "First")

        comment.edit(" Second ")

        assert comment.text == "Second"


class TestTaxonomyKind:
    def test_category_capabilities(self):
        kind = TaxonomyKind.CATEGORY

        assert kind.resource_type == ResourceType.CATEGORY
        assert kind.create_capability == Capability.CATEGORY_CREATE
        assert kind.update_capability == Capability.CATEGORY_UPDATE
        assert kind.delete_capability == Capability.CATEGORY_DELETE

    def test_tag_capabilities(self):
        assert TaxonomyKind.TAG.delete_capability == Capability.TAG_DELETE
        assert TaxonomyKind.TAG.resource_type == ResourceType.TAG


class TestTaxonomyTerm:
    def test_create_picks_id_type_by_kind(self, group_id):
        category = TaxonomyTerm.create(TaxonomyKind.CATEGORY, group_id, "Soups", "soups")
        tag = TaxonomyTerm.create(TaxonomyKind.TAG, group_id, "Quick", "quick")

        assert isinstance(category.id, CategoryId)
        assert isinstance(tag.id, TagId)

    @pytest.mark.parametrize("name", ["", "  ", "x" * 51])
    def test_rejects_invalid_names(self, group_id, name):
        with pytest.raises(ValueError):
            TaxonomyTerm.create(TaxonomyKind.TAG, group_id, name, "slug")

    def test_rename(self, group_id):
        term = TaxonomyTerm.create(TaxonomyKind.TAG, group_id, "Quick", "quick")

        term.rename(" Fast ", "fast")

        assert (term.name, term.slug) == ("Fast", "fast")
