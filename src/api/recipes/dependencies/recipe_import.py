from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import MembershipResolver
from iam.dependencies.group import get_membership_resolver
from infrastructure.database.dependencies import get_session
from infrastructure.settings import ImportSettings, get_import_settings
from recipes.application.observability import (
    DefaultRecipeImportProbe,
    RecipeImportProbe,
)
from recipes.application.services import RecipeImportService
from recipes.dependencies.recipe import get_recipe_repository
from recipes.infrastructure.import_rate_limiter import PostgresImportRateLimiter
from recipes.infrastructure.recipe_extractor import HttpRecipeExtractor
from recipes.infrastructure.recipe_repository import RecipeRepository
from recipes.ports.extraction import IRecipeExtractor


def get_recipe_import_probe() -> RecipeImportProbe:
    return DefaultRecipeImportProbe()


def get_recipe_extractor(
    settings: Annotated[ImportSettings, Depends(get_import_settings)],
) -> IRecipeExtractor | None:
    """Get the extraction client, or None when no endpoint is configured."""
    if settings.extractor_url is None:
        return None
    return HttpRecipeExtractor(
        endpoint=str(settings.extractor_url),
        timeout=settings.extractor_timeout_seconds,
    )


def get_import_rate_limiter(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[ImportSettings, Depends(get_import_settings)],
) -> PostgresImportRateLimiter:
    """Get the import limiter bound to the request session."""
    return PostgresImportRateLimiter(
        session=session,
        limit=settings.max_imports_per_window,
        window_seconds=settings.window_seconds,
    )


def get_recipe_import_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    rate_limiter: Annotated[
        PostgresImportRateLimiter, Depends(get_import_rate_limiter)
    ],
    extractor: Annotated[IRecipeExtractor | None, Depends(get_recipe_extractor)],
    probe: Annotated[RecipeImportProbe, Depends(get_recipe_import_probe)],
) -> RecipeImportService:
    """Get RecipeImportService instance."""
    return RecipeImportService(
        session=session,
        recipe_repository=recipes,
        membership_resolver=resolver,
        rate_limiter=rate_limiter,
        extractor=extractor,
        probe=probe,
    )
