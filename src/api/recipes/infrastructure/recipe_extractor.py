"""HTTP client for the external recipe extraction service.

The service accepts {"url": ...} and answers with a candidate recipe in
JSON, or {"error": ...} when the page holds no recipe.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from recipes.infrastructure.observability import (
    DefaultRecipeExtractorProbe,
    RecipeExtractorProbe,
)
from recipes.ports.exceptions import RecipeExtractionError
from recipes.ports.extraction import IRecipeExtractor
from recipes.ports.extraction_models import ExtractedRecipe

_STATUS_MESSAGES = {
    404: "URL not found or page does not exist",
    408: "Request timeout: The website took too long to respond",
    429: "Rate limited: Please wait a moment and try again",
}


class HttpRecipeExtractor(IRecipeExtractor):
    def __init__(
        self,
        endpoint: str,
        timeout: float = 60.0,
        probe: RecipeExtractorProbe | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._endpoint = endpoint
        self._timeout = timeout
        self._probe = probe or DefaultRecipeExtractorProbe()
        self._transport = transport

    async def extract(self, url: str) -> ExtractedRecipe:
        """Ask the extraction service for the recipe at url.

        Raises:
            RecipeExtractionError: On transport failure, a non-200 answer,
                an error payload, or a payload that is not a recipe
        """
        self._probe.extraction_requested(url=url)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(self._endpoint, json={"url": url})
        except httpx.TimeoutException as e:
            self._probe.extraction_failed(url=url, reason=repr(e))
            raise RecipeExtractionError(
                "Request timeout: The website took too long to respond"
            ) from e
        except httpx.HTTPError as e:
            self._probe.extraction_failed(url=url, reason=repr(e))
            raise RecipeExtractionError() from e

        if response.status_code != 200:
            self._probe.extraction_failed(
                url=url, reason="HTTP error", status_code=response.status_code
            )
            raise RecipeExtractionError(
                _STATUS_MESSAGES.get(
                    response.status_code, "Failed to extract recipe from URL"
                )
            )

        try:
            payload = response.json()
        except ValueError as e:
            self._probe.extraction_failed(url=url, reason="invalid JSON")
            raise RecipeExtractionError() from e

        if not isinstance(payload, dict) or payload.get("error"):
            reason = (
                str(payload["error"]) if isinstance(payload, dict) else "not an object"
            )
            self._probe.extraction_failed(url=url, reason=reason)
            raise RecipeExtractionError(
                "No recipe data could be extracted from this URL"
            )

        try:
            recipe = ExtractedRecipe.model_validate(payload.get("recipe", payload))
        except ValidationError as e:
            self._probe.extraction_failed(url=url, reason=str(e))
            raise RecipeExtractionError(
                "No recipe data could be extracted from this URL"
            ) from e

        self._probe.extraction_succeeded(url=url, title=recipe.title)
        return recipe
