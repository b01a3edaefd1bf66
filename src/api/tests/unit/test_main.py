"""Unit tests for main FastAPI application wiring."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from iam.application.value_objects import CurrentUser


@pytest.fixture
def client():
    from main import app

    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok"}

    def test_db_health_reports_connected(self, client: TestClient) -> None:
        from infrastructure.database.dependencies import get_session
        from main import app

        session = AsyncMock()
        app.dependency_overrides[get_session] = lambda: session

        response = client.get("/health/db")

        assert response.json() == {"status": "ok", "connected": True}

    def test_db_health_reports_failure(self, client: TestClient) -> None:
        from infrastructure.database.dependencies import get_session
        from main import app

        session = AsyncMock()
        session.execute.side_effect = ConnectionError("refused")
        app.dependency_overrides[get_session] = lambda: session

        response = client.get("/health/db")

        assert response.json()["connected"] is False


class TestRouting:
    def test_mounts_both_contexts(self) -> None:
        from main import app

        paths = {route.path for route in app.routes}

        assert "/iam/groups" in paths
        assert "/recipes" in paths
        assert "/recipes/{recipe_id}/comments" in paths
        assert "/categories" in paths
        assert "/favorites" in paths

    def test_unauthenticated_request_returns_401(self, client: TestClient) -> None:
        response = client.get("/recipes")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestValidationErrors:
    def test_malformed_body_returns_400(
        self, client: TestClient, current_user: CurrentUser
    ) -> None:
        from iam.dependencies.user import get_current_user
        from main import app
        from recipes.application.services import RecipeService
        from recipes.dependencies.recipe import get_recipe_service

        app.dependency_overrides[get_current_user] = lambda: current_user
        app.dependency_overrides[get_recipe_service] = lambda: AsyncMock(
            spec=RecipeService
        )

        response = client.post("/recipes", json={"ingredients": "not-a-list"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        locations = [error["loc"] for error in response.json()["detail"]]
        assert ["body", "title"] in locations
