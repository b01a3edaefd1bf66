"""Pydantic models for category and tag API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from recipes.domain.aggregates import TaxonomyTerm


class TermRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)


class TermResponse(BaseModel):
    id: str
    group_id: str
    name: str
    slug: str
    created_at: datetime

    @classmethod
    def from_domain(cls, term: TaxonomyTerm) -> TermResponse:
        return cls(
            id=term.id.value,
            group_id=term.group_id.value,
            name=term.name,
            slug=term.slug,
            created_at=term.created_at,
        )
