"""Category and tag presentation package."""

from recipes.presentation.taxonomy.routes import categories_router, tags_router

__all__ = ["categories_router", "tags_router"]
