"""Favorites presentation package."""

from recipes.presentation.favorites.routes import router

__all__ = ["router"]
