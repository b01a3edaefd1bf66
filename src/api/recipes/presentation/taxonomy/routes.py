"""HTTP routes for categories and tags.

Both resources share one set of handlers; build_router binds them to a
TaxonomyKind.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from iam.application.value_objects import CurrentUser
from iam.dependencies.user import get_current_user
from recipes.application.services import TaxonomyService
from recipes.dependencies.recipe import get_taxonomy_service
from recipes.domain.aggregates import TaxonomyKind
from recipes.presentation.errors import http_error
from recipes.presentation.taxonomy.models import TermRequest, TermResponse


def build_router(kind: TaxonomyKind, prefix: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])
    label = kind.value
    not_found = f"{label.capitalize()} not found"

    @router.get("")
    async def list_terms(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        service: Annotated[TaxonomyService, Depends(get_taxonomy_service)],
    ) -> list[TermResponse]:
        try:
            terms = await service.list_terms(kind, current_user)
            return [TermResponse.from_domain(t) for t in terms]

        except Exception as e:
            raise http_error(e, failure=f"Failed to list {label} entries")

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_term(
        request: TermRequest,
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        service: Annotated[TaxonomyService, Depends(get_taxonomy_service)],
    ) -> TermResponse:
        try:
            term = await service.create_term(kind, current_user, request.name)
            return TermResponse.from_domain(term)

        except Exception as e:
            raise http_error(e, failure=f"Failed to create {label}")

    @router.patch("/{term_id}")
    async def update_term(
        term_id: str,
        request: TermRequest,
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        service: Annotated[TaxonomyService, Depends(get_taxonomy_service)],
    ) -> TermResponse:
        try:
            term = await service.update_term(
                kind, current_user.user_id, term_id, request.name
            )
            return TermResponse.from_domain(term)

        except Exception as e:
            raise http_error(e, failure=f"Failed to update {label}", not_found=not_found)

    @router.delete("/{term_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_term(
        term_id: str,
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        service: Annotated[TaxonomyService, Depends(get_taxonomy_service)],
    ) -> None:
        try:
            await service.delete_term(kind, current_user.user_id, term_id)

        except Exception as e:
            raise http_error(e, failure=f"Failed to delete {label}", not_found=not_found)

    return router


categories_router = build_router(TaxonomyKind.CATEGORY, "/categories")
tags_router = build_router(TaxonomyKind.TAG, "/tags")
