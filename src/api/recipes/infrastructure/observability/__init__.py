"""Domain-Oriented Observability for Recipes infrastructure layer."""

from recipes.infrastructure.observability.extractor_probe import (
    DefaultRecipeExtractorProbe,
    RecipeExtractorProbe,
)
from recipes.infrastructure.observability.repository_probe import (
    DefaultRecipeRepositoryProbe,
    DefaultTaxonomyRepositoryProbe,
    RecipeRepositoryProbe,
    TaxonomyRepositoryProbe,
)

__all__ = [
    "DefaultRecipeExtractorProbe",
    "RecipeExtractorProbe",
    "DefaultRecipeRepositoryProbe",
    "RecipeRepositoryProbe",
    "DefaultTaxonomyRepositoryProbe",
    "TaxonomyRepositoryProbe",
]
