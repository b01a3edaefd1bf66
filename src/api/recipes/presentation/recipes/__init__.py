"""Recipe presentation package."""

from recipes.presentation.recipes.routes import router

__all__ = ["router"]
