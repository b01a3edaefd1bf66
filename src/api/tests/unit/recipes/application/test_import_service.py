"""Unit tests for RecipeImportService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from recipes.application.observability import RecipeImportProbe
from recipes.application.services import RecipeImportService
from recipes.application.services.import_service import import_throttle_key
from recipes.domain.imports import InvalidImportUrlError
from recipes.domain.value_objects import RecipeStatus
from recipes.ports.exceptions import (
    ExtractorNotConfiguredError,
    ImportRateLimitExceededError,
    RecipeExtractionError,
)
from recipes.ports.extraction_models import (
    ExtractedIngredient,
    ExtractedRecipe,
    ExtractedStep,
)
from shared_kernel.authorization import (
    MissingCapabilityError,
    NotAMemberError,
    Role,
)

URL = "https://example.com/recipes/bread"


@pytest.fixture
def extracted() -> ExtractedRecipe:
    return ExtractedRecipe(
        title="<b>Bread</b>",
        ingredients=[ExtractedIngredient(name="Flour", quantity="500", unit="g")],
        steps=[ExtractedStep(step_number=3, instruction="Knead the dough.")],
        servings=0,
        prep_time=20,
    )


@pytest.fixture
def mock_extractor(extracted):
    extractor = MagicMock()
    extractor.extract = AsyncMock(return_value=extracted)
    return extractor


@pytest.fixture
def mock_rate_limiter():
    limiter = MagicMock()
    limiter.limit = 10
    limiter.window_seconds = 3600
    limiter.try_acquire = AsyncMock(return_value=True)
    return limiter


@pytest.fixture
def mock_probe():
    return MagicMock(spec=RecipeImportProbe)


@pytest.fixture
def make_service(
    mock_session,
    mock_recipe_repository,
    membership_resolver,
    mock_rate_limiter,
    mock_extractor,
    mock_probe,
):
    def _make(extractor=mock_extractor) -> RecipeImportService:
        return RecipeImportService(
            session=mock_session,
            recipe_repository=mock_recipe_repository,
            membership_resolver=membership_resolver,
            rate_limiter=mock_rate_limiter,
            extractor=extractor,
            probe=mock_probe,
        )

    return _make


class TestImportRecipe:
    @pytest.mark.asyncio
    async def test_creates_sanitized_draft_owned_by_importer(
        self,
        make_service,
        join,
        current_user,
        mock_session,
        mock_rate_limiter,
        mock_probe,
        stored_recipes,
    ):
        join(current_user.user_id, Role.POWER_USER)

        recipe = await make_service().import_recipe(current_user, f"  {URL} ")

        assert recipe.status == RecipeStatus.DRAFT
        assert recipe.created_by == current_user.user_id
        assert recipe.group_id == current_user.group_id
        assert recipe.source_url == URL
        assert recipe.content.title == "Bread"
        assert recipe.content.servings is None
        assert recipe.content.prep_time == 20
        assert recipe.content.steps[0].step_number == 1
        assert stored_recipes[recipe.id.value] is recipe
        assert mock_session.begin.call_count == 2
        mock_rate_limiter.try_acquire.assert_awaited_once_with(
            import_throttle_key(current_user.user_id.value)
        )
        mock_probe.recipe_imported.assert_called_once()

    @pytest.mark.asyncio
    async def test_requires_configured_extractor(
        self, make_service, current_user, mock_session
    ):
        with pytest.raises(ExtractorNotConfiguredError):
            await make_service(extractor=None).import_recipe(current_user, URL)

        mock_session.begin.assert_not_called()

    @pytest.mark.asyncio
    async def test_read_only_cannot_import(
        self, make_service, join, current_user, mock_extractor
    ):
        join(current_user.user_id, Role.READ_ONLY)

        with pytest.raises(MissingCapabilityError):
            await make_service().import_recipe(current_user, URL)

        mock_extractor.extract.assert_not_called()

    @pytest.mark.asyncio
    async def test_refuses_private_urls_before_throttling(
        self, make_service, join, current_user, mock_rate_limiter, mock_probe
    ):
        join(current_user.user_id, Role.ADMIN)

        with pytest.raises(InvalidImportUrlError):
            await make_service().import_recipe(current_user, "http://10.1.2.3/admin")

        mock_rate_limiter.try_acquire.assert_not_called()
        mock_probe.recipe_import_rejected.assert_called_once()

    @pytest.mark.asyncio
    async def test_throttled_user_is_refused(
        self,
        make_service,
        join,
        current_user,
        mock_rate_limiter,
        mock_extractor,
        mock_probe,
    ):
        join(current_user.user_id, Role.ADMIN)
        mock_rate_limiter.try_acquire.return_value = False

        with pytest.raises(ImportRateLimitExceededError) as exc_info:
            await make_service().import_recipe(current_user, URL)

        assert str(exc_info.value) == "Rate limit exceeded. Maximum 10 imports per hour."
        mock_extractor.extract.assert_not_called()
        mock_probe.recipe_import_throttled.assert_called_once()

    @pytest.mark.asyncio
    async def test_extraction_failure_stores_nothing(
        self,
        make_service,
        join,
        current_user,
        mock_extractor,
        mock_probe,
        mock_recipe_repository,
    ):
        join(current_user.user_id, Role.ADMIN)
        mock_extractor.extract.side_effect = RecipeExtractionError("Page not found")

        with pytest.raises(RecipeExtractionError, match="Page not found"):
            await make_service().import_recipe(current_user, URL)

        mock_probe.recipe_import_failed.assert_called_once()
        mock_recipe_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_incomplete_extraction_is_rejected(
        self,
        make_service,
        join,
        current_user,
        mock_extractor,
        mock_recipe_repository,
    ):
        join(current_user.user_id, Role.ADMIN)
        mock_extractor.extract.return_value = ExtractedRecipe(title="Only a title")

        with pytest.raises(ValueError, match="ingredient"):
            await make_service().import_recipe(current_user, URL)

        mock_recipe_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_membership_rechecked_after_extraction(
        self,
        make_service,
        join,
        current_user,
        memberships,
        mock_extractor,
        extracted,
        mock_recipe_repository,
    ):
        join(current_user.user_id, Role.POWER_USER)

        async def _extract_while_removed(url):
            memberships.clear()
            return extracted

        mock_extractor.extract.side_effect = _extract_while_removed

        with pytest.raises(NotAMemberError):
            await make_service().import_recipe(current_user, URL)

        mock_recipe_repository.save.assert_not_called()
