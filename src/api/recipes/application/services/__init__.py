"""Application services for Recipes bounded context."""

from recipes.application.services.comment_service import CommentService
from recipes.application.services.favorite_service import FavoriteService
from recipes.application.services.import_service import RecipeImportService
from recipes.application.services.recipe_service import RecipeService
from recipes.application.services.taxonomy_service import TaxonomyService
from recipes.application.services.tenant_isolation_guard import (
    RecipeVisibility,
    TenantIsolationGuard,
)

__all__ = [
    "CommentService",
    "FavoriteService",
    "RecipeImportService",
    "RecipeService",
    "RecipeVisibility",
    "TaxonomyService",
    "TenantIsolationGuard",
]
