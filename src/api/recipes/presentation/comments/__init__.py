"""Comment presentation package."""

from recipes.presentation.comments.routes import router

__all__ = ["router"]
