"""Recipes presentation layer, organized by resource."""

from __future__ import annotations

from fastapi import APIRouter

from recipes.presentation import comments, favorites, recipes, taxonomy

router = APIRouter()

router.include_router(recipes.router)
router.include_router(comments.router)
router.include_router(taxonomy.categories_router)
router.include_router(taxonomy.tags_router)
router.include_router(favorites.router)

__all__ = ["router"]
