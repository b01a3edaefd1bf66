"""PostgreSQL implementation of ITaxonomyRepository."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import GroupId
from recipes.domain.aggregates import TaxonomyKind, TaxonomyTerm
from recipes.domain.value_objects import CategoryId, TagId
from recipes.infrastructure.models import CategoryModel, TagModel
from recipes.infrastructure.observability import (
    DefaultTaxonomyRepositoryProbe,
    TaxonomyRepositoryProbe,
)
from recipes.ports.exceptions import DuplicateSlugError
from recipes.ports.repositories import ITaxonomyRepository

_MODELS: dict[TaxonomyKind, type[CategoryModel] | type[TagModel]] = {
    TaxonomyKind.CATEGORY: CategoryModel,
    TaxonomyKind.TAG: TagModel,
}


class TaxonomyRepository(ITaxonomyRepository):
    """PostgreSQL-backed repository for categories and tags."""

    def __init__(
        self,
        session: AsyncSession,
        probe: TaxonomyRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultTaxonomyRepositoryProbe()

    async def save(self, term: TaxonomyTerm) -> None:
        """Insert or rename a term.

        Raises:
            DuplicateSlugError: If the slug is taken in the term's group
        """
        model_cls = _MODELS[term.kind]
        model = await self._session.get(model_cls, term.id.value)
        if model is None:
            self._session.add(
                model_cls(
                    id=term.id.value,
                    group_id=term.group_id.value,
                    name=term.name,
                    slug=term.slug,
                    created_at=term.created_at,
                )
            )
        else:
            model.name = term.name
            model.slug = term.slug

        try:
            await self._session.flush()
        except IntegrityError as e:
            self._probe.duplicate_slug(term.kind.value, term.group_id.value, term.slug)
            raise DuplicateSlugError(
                f"A {term.kind.value} with slug '{term.slug}' already exists"
            ) from e

        self._probe.term_saved(term.kind.value, term.id.value, term.slug)

    async def get_by_id(self, kind: TaxonomyKind, term_id: str) -> TaxonomyTerm | None:
        model = await self._session.get(_MODELS[kind], term_id)
        return self._to_domain(kind, model) if model else None

    async def list_by_group(
        self, kind: TaxonomyKind, group_id: GroupId
    ) -> list[TaxonomyTerm]:
        model_cls = _MODELS[kind]
        stmt = (
            select(model_cls)
            .where(model_cls.group_id == group_id.value)
            .order_by(model_cls.name.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(kind, m) for m in result.scalars().all()]

    async def slug_exists(
        self,
        kind: TaxonomyKind,
        group_id: GroupId,
        slug: str,
        exclude_id: str | None = None,
    ) -> bool:
        model_cls = _MODELS[kind]
        stmt = select(model_cls.id).where(
            model_cls.group_id == group_id.value, model_cls.slug == slug
        )
        if exclude_id is not None:
            stmt = stmt.where(model_cls.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def count_in_group(
        self, kind: TaxonomyKind, group_id: GroupId, term_ids: Collection[str]
    ) -> int:
        if not term_ids:
            return 0
        model_cls = _MODELS[kind]
        stmt = select(func.count()).where(
            model_cls.group_id == group_id.value,
            model_cls.id.in_(list(term_ids)),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete(self, kind: TaxonomyKind, term_id: str) -> bool:
        model_cls = _MODELS[kind]
        result = await self._session.execute(
            delete(model_cls).where(model_cls.id == term_id)
        )
        return result.rowcount > 0

    @staticmethod
    def _to_domain(kind: TaxonomyKind, model: CategoryModel | TagModel) -> TaxonomyTerm:
        term_id = (
            CategoryId(value=model.id)
            if kind == TaxonomyKind.CATEGORY
            else TagId(value=model.id)
        )
        return TaxonomyTerm(
            id=term_id,
            kind=kind,
            group_id=GroupId(value=model.group_id),
            name=model.name,
            slug=model.slug,
            created_at=model.created_at,
        )
