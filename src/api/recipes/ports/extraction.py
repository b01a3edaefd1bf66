"""Ports for the recipe import pipeline's external collaborators."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from recipes.ports.extraction_models import ExtractedRecipe


@runtime_checkable
class IRecipeExtractor(Protocol):
    """Black box that turns a web page into a candidate recipe."""

    async def extract(self, url: str) -> ExtractedRecipe:
        """Extract a recipe from the page at url.

        Raises:
            RecipeExtractionError: If no recipe could be extracted
        """
        ...


@runtime_checkable
class IImportRateLimiter(Protocol):
    """Keyed counter store bounding how often a key may import.

    State lives outside the process so that every API replica enforces
    the same allowance.
    """

    @property
    def limit(self) -> int: ...

    @property
    def window_seconds(self) -> int: ...

    async def try_acquire(self, key: str) -> bool:
        """Record an attempt for key if the allowance permits it.

        Returns:
            False when the key has used its allowance for the current window
        """
        ...
