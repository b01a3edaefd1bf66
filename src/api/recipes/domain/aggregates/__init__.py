"""Domain aggregates for Recipes context."""

from recipes.domain.aggregates.comment import Comment
from recipes.domain.aggregates.recipe import Recipe
from recipes.domain.aggregates.taxonomy import TaxonomyKind, TaxonomyTerm

__all__ = [
    "Comment",
    "Recipe",
    "TaxonomyKind",
    "TaxonomyTerm",
]
