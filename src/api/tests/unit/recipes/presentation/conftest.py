"""Route test fixtures: every Recipes service replaced by an AsyncMock."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from iam.application.value_objects import CurrentUser
from recipes.application.services import (
    CommentService,
    FavoriteService,
    RecipeImportService,
    RecipeService,
    TaxonomyService,
)


@pytest.fixture
def mock_recipe_service() -> AsyncMock:
    return AsyncMock(spec=RecipeService)


@pytest.fixture
def mock_comment_service() -> AsyncMock:
    return AsyncMock(spec=CommentService)


@pytest.fixture
def mock_taxonomy_service() -> AsyncMock:
    return AsyncMock(spec=TaxonomyService)


@pytest.fixture
def mock_favorite_service() -> AsyncMock:
    return AsyncMock(spec=FavoriteService)


@pytest.fixture
def mock_import_service() -> AsyncMock:
    return AsyncMock(spec=RecipeImportService)


@pytest.fixture
def test_client(
    mock_recipe_service,
    mock_comment_service,
    mock_taxonomy_service,
    mock_favorite_service,
    mock_import_service,
    current_user: CurrentUser,
) -> TestClient:
    from iam.dependencies.user import get_current_user
    from recipes.dependencies.recipe import (
        get_comment_service,
        get_favorite_service,
        get_recipe_service,
        get_taxonomy_service,
    )
    from recipes.dependencies.recipe_import import get_recipe_import_service
    from recipes.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.dependency_overrides[get_recipe_service] = lambda: mock_recipe_service
    app.dependency_overrides[get_comment_service] = lambda: mock_comment_service
    app.dependency_overrides[get_taxonomy_service] = lambda: mock_taxonomy_service
    app.dependency_overrides[get_favorite_service] = lambda: mock_favorite_service
    app.dependency_overrides[get_recipe_import_service] = lambda: mock_import_service
    app.include_router(router)

    return TestClient(app)


@pytest.fixture
def recipe_body() -> dict:
    return {
        "title": "Soup",
        "ingredients": [{"name": "Water"}],
        "steps": [{"instruction": "Boil."}],
    }
