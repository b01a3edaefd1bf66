"""Unit tests for HttpRecipeExtractor using an in-process transport."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest

from recipes.infrastructure.observability import RecipeExtractorProbe
from recipes.infrastructure.recipe_extractor import HttpRecipeExtractor
from recipes.ports.exceptions import RecipeExtractionError

ENDPOINT = "http://extractor.internal/extract"
URL = "https://example.com/recipes/bread"

RECIPE_PAYLOAD = {
    "title": "Bread",
    "ingredients": [{"name": "Flour", "quantity": "500", "unit": "g"}],
    "steps": [{"stepNumber": 1, "instruction": "Knead."}],
    "prepTime": 15,
    "sourceUrl": URL,
}


@pytest.fixture
def mock_probe():
    return MagicMock(spec=RecipeExtractorProbe)


def make_extractor(handler, probe) -> HttpRecipeExtractor:
    return HttpRecipeExtractor(
        endpoint=ENDPOINT, probe=probe, transport=httpx.MockTransport(handler)
    )


class TestSuccessfulExtraction:
    @pytest.mark.asyncio
    async def test_posts_url_and_parses_recipe(self, mock_probe):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=RECIPE_PAYLOAD)

        recipe = await make_extractor(handler, mock_probe).extract(URL)

        assert seen == {"url": ENDPOINT, "body": {"url": URL}}
        assert recipe.title == "Bread"
        assert recipe.prep_time == 15
        assert recipe.steps[0].step_number == 1
        mock_probe.extraction_succeeded.assert_called_once_with(url=URL, title="Bread")

    @pytest.mark.asyncio
    async def test_accepts_wrapped_recipe(self, mock_probe):
        def handler(request):
            return httpx.Response(200, json={"recipe": RECIPE_PAYLOAD})

        recipe = await make_extractor(handler, mock_probe).extract(URL)

        assert recipe.ingredients[0].name == "Flour"


class TestFailedExtraction:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "message"),
        [
            (404, "URL not found"),
            (408, "Request timeout"),
            (429, "Rate limited"),
            (500, "Failed to extract recipe from URL"),
        ],
    )
    async def test_maps_status_codes(self, mock_probe, status_code, message):
        def handler(request):
            return httpx.Response(status_code)

        with pytest.raises(RecipeExtractionError, match=message):
            await make_extractor(handler, mock_probe).extract(URL)

        mock_probe.extraction_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_error_payload(self, mock_probe):
        def handler(request):
            return httpx.Response(200, json={"error": "no recipe on page"})

        with pytest.raises(RecipeExtractionError, match="No recipe data"):
            await make_extractor(handler, mock_probe).extract(URL)

    @pytest.mark.asyncio
    async def test_non_json_body(self, mock_probe):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(RecipeExtractionError, match="Failed to extract"):
            await make_extractor(handler, mock_probe).extract(URL)

    @pytest.mark.asyncio
    async def test_transport_timeout(self, mock_probe):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(RecipeExtractionError, match="timeout"):
            await make_extractor(handler, mock_probe).extract(URL)

    @pytest.mark.asyncio
    async def test_connection_error(self, mock_probe):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(RecipeExtractionError, match="Failed to extract"):
            await make_extractor(handler, mock_probe).extract(URL)

        mock_probe.extraction_succeeded.assert_not_called()
