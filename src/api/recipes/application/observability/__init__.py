"""Domain-Oriented Observability for Recipes application layer."""

from recipes.application.observability.access_probe import (
    DefaultTenantIsolationProbe,
    TenantIsolationProbe,
)
from recipes.application.observability.catalog_probe import (
    CatalogProbe,
    DefaultCatalogProbe,
)
from recipes.application.observability.comment_service_probe import (
    CommentServiceProbe,
    DefaultCommentServiceProbe,
)
from recipes.application.observability.import_probe import (
    DefaultRecipeImportProbe,
    RecipeImportProbe,
)
from recipes.application.observability.recipe_service_probe import (
    DefaultRecipeServiceProbe,
    RecipeServiceProbe,
)

__all__ = [
    "CatalogProbe",
    "DefaultCatalogProbe",
    "CommentServiceProbe",
    "DefaultCommentServiceProbe",
    "RecipeImportProbe",
    "DefaultRecipeImportProbe",
    "RecipeServiceProbe",
    "DefaultRecipeServiceProbe",
    "TenantIsolationProbe",
    "DefaultTenantIsolationProbe",
]
