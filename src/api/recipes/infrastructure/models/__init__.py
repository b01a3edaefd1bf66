"""SQLAlchemy ORM models for Recipes bounded context."""

from recipes.infrastructure.models.engagement import (
    CommentModel,
    FavoriteModel,
    ImportAttemptModel,
)
from recipes.infrastructure.models.recipe import (
    RecipeModel,
    recipe_categories,
    recipe_tags,
)
from recipes.infrastructure.models.taxonomy import CategoryModel, TagModel

__all__ = [
    "CategoryModel",
    "CommentModel",
    "FavoriteModel",
    "ImportAttemptModel",
    "RecipeModel",
    "TagModel",
    "recipe_categories",
    "recipe_tags",
]
