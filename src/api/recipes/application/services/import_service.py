"""Recipe import pipeline.

Flow: capability and URL checks, a throttling slot from the keyed counter
store, extraction by the external service, sanitization, then a DRAFT
owned by the importer. The extraction call runs outside any database
transaction, so the capability is checked again before the draft is
stored.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import MembershipResolver
from iam.application.value_objects import CurrentUser
from recipes.application.observability import (
    DefaultRecipeImportProbe,
    RecipeImportProbe,
)
from recipes.domain.aggregates import Recipe
from recipes.domain.content import RecipeContent
from recipes.domain.imports import sanitize_extracted_recipe, validate_import_url
from recipes.ports.exceptions import (
    ExtractorNotConfiguredError,
    ImportRateLimitExceededError,
    RecipeExtractionError,
)
from recipes.ports.extraction import IImportRateLimiter, IRecipeExtractor
from recipes.ports.repositories import IRecipeRepository
from shared_kernel.authorization.types import Capability


def import_throttle_key(user_id: str) -> str:
    return f"recipe-import:{user_id}"


class RecipeImportService:
    """Creates draft recipes from web pages."""

    def __init__(
        self,
        session: AsyncSession,
        recipe_repository: IRecipeRepository,
        membership_resolver: MembershipResolver,
        rate_limiter: IImportRateLimiter,
        extractor: IRecipeExtractor | None,
        probe: RecipeImportProbe | None = None,
    ):
        self._session = session
        self._recipes = recipe_repository
        self._resolver = membership_resolver
        self._rate_limiter = rate_limiter
        self._extractor = extractor
        self._probe = probe or DefaultRecipeImportProbe()

    async def import_recipe(self, current_user: CurrentUser, url: str) -> Recipe:
        """Import the recipe at url as a DRAFT in the caller's active group.

        Raises:
            ExtractorNotConfiguredError: If no extraction service is configured
            MissingCapabilityError: If the role lacks recipe:create
            InvalidImportUrlError: If the URL is refused
            ImportRateLimitExceededError: If the caller is throttled
            RecipeExtractionError: If extraction fails
            ValueError: If the extracted recipe is incomplete
        """
        if self._extractor is None:
            raise ExtractorNotConfiguredError()

        user_id = current_user.user_id
        self._probe.recipe_import_requested(user_id=user_id.value, url=url)

        async with self._session.begin():
            await self._resolver.require_capability(
                user_id, current_user.group_id, Capability.RECIPE_CREATE
            )
            try:
                url = validate_import_url(url)
            except ValueError as e:
                self._probe.recipe_import_rejected(
                    user_id=user_id.value, url=url, reason=str(e)
                )
                raise
            if not await self._rate_limiter.try_acquire(
                import_throttle_key(user_id.value)
            ):
                self._probe.recipe_import_throttled(
                    user_id=user_id.value, limit=self._rate_limiter.limit
                )
                raise ImportRateLimitExceededError(
                    limit=self._rate_limiter.limit,
                    window_seconds=self._rate_limiter.window_seconds,
                )

        try:
            extracted = await self._extractor.extract(url)
        except RecipeExtractionError as e:
            self._probe.recipe_import_failed(
                user_id=user_id.value, url=url, error=str(e)
            )
            raise

        try:
            content = RecipeContent.create(
                **sanitize_extracted_recipe(extracted.model_dump())
            )
        except ValueError as e:
            self._probe.recipe_import_rejected(
                user_id=user_id.value, url=url, reason=str(e)
            )
            raise

        async with self._session.begin():
            membership = await self._resolver.require_capability(
                user_id, current_user.group_id, Capability.RECIPE_CREATE
            )
            recipe = Recipe.import_draft(
                group_id=membership.group_id,
                created_by=user_id,
                content=content,
                source_url=url,
            )
            await self._recipes.save(recipe)

        self._probe.recipe_imported(
            recipe_id=recipe.id.value, user_id=user_id.value, url=url
        )
        return recipe
