"""Unit tests for the exception to HTTP status mapping."""

import pytest
from fastapi import status

from recipes.presentation.errors import http_error
from shared_kernel.authorization import (
    NotAMemberError,
    ResourceNotFoundError,
    UnauthorizedError,
)


class TestHttpError:
    def test_unauthorized_carries_bearer_challenge(self):
        error = http_error(UnauthorizedError(), failure="x")

        assert error.status_code == status.HTTP_401_UNAUTHORIZED
        assert error.headers == {"WWW-Authenticate": "Bearer"}

    def test_non_member_is_403_on_collection_routes(self):
        error = http_error(NotAMemberError("u", "g"), failure="x")

        assert error.status_code == status.HTTP_403_FORBIDDEN

    def test_non_member_is_404_on_resource_routes(self):
        error = http_error(NotAMemberError("u", "g"), failure="x", not_found="Gone")

        assert error.status_code == status.HTTP_404_NOT_FOUND
        assert error.detail == "Gone"

    def test_not_found_uses_route_detail(self):
        error = http_error(
            ResourceNotFoundError("recipe", "r1"), failure="x", not_found="Recipe not found"
        )

        assert error.detail == "Recipe not found"

    @pytest.mark.parametrize("exc", [RuntimeError("boom"), KeyError("k")])
    def test_unexpected_errors_hide_details(self, exc):
        error = http_error(exc, failure="Failed to do it")

        assert error.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert error.detail == "Failed to do it"
