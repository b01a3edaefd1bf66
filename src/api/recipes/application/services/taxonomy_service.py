"""Category and tag application service."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import MembershipResolver
from iam.application.value_objects import CurrentUser
from iam.domain.value_objects import GroupId, UserId
from recipes.application.observability import CatalogProbe, DefaultCatalogProbe
from recipes.application.services.tenant_isolation_guard import TenantIsolationGuard
from recipes.domain.aggregates import TaxonomyKind, TaxonomyTerm
from recipes.domain.aggregates.taxonomy import normalize_term_name
from recipes.ports.repositories import ITaxonomyRepository
from shared_kernel.authorization.exceptions import ResourceNotFoundError
from shared_kernel.authorization.types import Capability
from shared_kernel.slugs import candidate_slugs, slugify


class TaxonomyService:
    """Manages a group's categories and tags.

    Both kinds share the same rules; the kind decides which capability
    applies and where terms are stored.
    """

    def __init__(
        self,
        session: AsyncSession,
        taxonomy_repository: ITaxonomyRepository,
        membership_resolver: MembershipResolver,
        isolation_guard: TenantIsolationGuard,
        probe: CatalogProbe | None = None,
    ):
        self._session = session
        self._terms = taxonomy_repository
        self._resolver = membership_resolver
        self._guard = isolation_guard
        self._probe = probe or DefaultCatalogProbe()

    async def list_terms(
        self, kind: TaxonomyKind, current_user: CurrentUser
    ) -> list[TaxonomyTerm]:
        """List the active group's terms ordered by name."""
        async with self._session.begin():
            membership = await self._resolver.require_capability(
                current_user.user_id, current_user.group_id, Capability.RECIPE_READ
            )
            return await self._terms.list_by_group(kind, membership.group_id)

    async def create_term(
        self, kind: TaxonomyKind, current_user: CurrentUser, name: str
    ) -> TaxonomyTerm:
        """Create a term in the caller's active group.

        Raises:
            MissingCapabilityError: If the role lacks <kind>:create
            ValueError: If the name is invalid
            DuplicateSlugError: If a concurrent request took the slug
        """
        name = normalize_term_name(name)
        async with self._session.begin():
            membership = await self._resolver.require_capability(
                current_user.user_id, current_user.group_id, kind.create_capability
            )
            slug = await self._unique_slug(kind, membership.group_id, name)
            term = TaxonomyTerm.create(kind, membership.group_id, name, slug)
            await self._terms.save(term)

        self._probe.term_created(
            kind=kind.value,
            term_id=term.id.value,
            group_id=term.group_id.value,
            slug=term.slug,
        )
        return term

    async def update_term(
        self, kind: TaxonomyKind, user_id: UserId, term_id: str, name: str
    ) -> TaxonomyTerm:
        """Rename a term, regenerating its slug.

        Raises:
            ResourceNotFoundError: If the term does not exist
            NotAMemberError: If the term belongs to another group
            MissingCapabilityError: If the role lacks <kind>:update
        """
        name = normalize_term_name(name)
        async with self._session.begin():
            membership = await self._guard.require_resource_access(
                user_id, kind.resource_type, term_id
            )
            self._resolver.check_capability(membership, kind.update_capability)
            term = await self._get(kind, term_id)
            slug = await self._unique_slug(kind, term.group_id, name, exclude=term_id)
            term.rename(name, slug)
            await self._terms.save(term)

        self._probe.term_updated(kind=kind.value, term_id=term_id, slug=term.slug)
        return term

    async def delete_term(
        self, kind: TaxonomyKind, user_id: UserId, term_id: str
    ) -> None:
        """Delete a term. Recipes lose the link; they are not deleted.

        Raises:
            ResourceNotFoundError: If the term does not exist
            NotAMemberError: If the term belongs to another group
            MissingCapabilityError: If the role lacks <kind>:delete
        """
        async with self._session.begin():
            membership = await self._guard.require_resource_access(
                user_id, kind.resource_type, term_id
            )
            self._resolver.check_capability(membership, kind.delete_capability)
            await self._terms.delete(kind, term_id)

        self._probe.term_deleted(kind=kind.value, term_id=term_id)

    async def _get(self, kind: TaxonomyKind, term_id: str) -> TaxonomyTerm:
        term = await self._terms.get_by_id(kind, term_id)
        if term is None:
            raise ResourceNotFoundError(kind.value, term_id)
        return term

    async def _unique_slug(
        self,
        kind: TaxonomyKind,
        group_id: GroupId,
        name: str,
        exclude: str | None = None,
    ) -> str:
        base = slugify(name) or kind.value
        for candidate in candidate_slugs(base):
            if not await self._terms.slug_exists(
                kind, group_id, candidate, exclude_id=exclude
            ):
                return candidate
        raise AssertionError("unreachable")
