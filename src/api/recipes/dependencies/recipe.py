from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import GovernancePolicy, MembershipResolver
from iam.dependencies.group import get_governance_policy, get_membership_resolver
from infrastructure.database.dependencies import get_session
from recipes.application.observability import (
    CatalogProbe,
    CommentServiceProbe,
    DefaultCatalogProbe,
    DefaultCommentServiceProbe,
    DefaultRecipeServiceProbe,
    DefaultTenantIsolationProbe,
    RecipeServiceProbe,
    TenantIsolationProbe,
)
from recipes.application.services import (
    CommentService,
    FavoriteService,
    RecipeService,
    RecipeVisibility,
    TaxonomyService,
    TenantIsolationGuard,
)
from recipes.infrastructure.comment_repository import CommentRepository
from recipes.infrastructure.favorite_repository import FavoriteRepository
from recipes.infrastructure.recipe_repository import RecipeRepository
from recipes.infrastructure.resource_locator import ResourceLocator
from recipes.infrastructure.taxonomy_repository import TaxonomyRepository


def get_tenant_isolation_probe() -> TenantIsolationProbe:
    return DefaultTenantIsolationProbe()


def get_recipe_service_probe() -> RecipeServiceProbe:
    return DefaultRecipeServiceProbe()


def get_comment_service_probe() -> CommentServiceProbe:
    return DefaultCommentServiceProbe()


def get_catalog_probe() -> CatalogProbe:
    return DefaultCatalogProbe()


def get_recipe_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RecipeRepository:
    """Get RecipeRepository instance bound to the request session."""
    return RecipeRepository(session=session)


def get_comment_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CommentRepository:
    """Get CommentRepository instance bound to the request session."""
    return CommentRepository(session=session)


def get_taxonomy_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> TaxonomyRepository:
    """Get TaxonomyRepository instance bound to the request session."""
    return TaxonomyRepository(session=session)


def get_favorite_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> FavoriteRepository:
    """Get FavoriteRepository instance bound to the request session."""
    return FavoriteRepository(session=session)


def get_resource_locator(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ResourceLocator:
    return ResourceLocator(session=session)


def get_tenant_isolation_guard(
    locator: Annotated[ResourceLocator, Depends(get_resource_locator)],
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    probe: Annotated[TenantIsolationProbe, Depends(get_tenant_isolation_probe)],
) -> TenantIsolationGuard:
    """Get TenantIsolationGuard instance."""
    return TenantIsolationGuard(
        resource_locator=locator, membership_resolver=resolver, probe=probe
    )


def get_recipe_visibility(
    guard: Annotated[TenantIsolationGuard, Depends(get_tenant_isolation_guard)],
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
    probe: Annotated[TenantIsolationProbe, Depends(get_tenant_isolation_probe)],
) -> RecipeVisibility:
    """Get RecipeVisibility instance."""
    return RecipeVisibility(
        isolation_guard=guard, recipe_repository=recipes, probe=probe
    )


def get_recipe_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
    taxonomy: Annotated[TaxonomyRepository, Depends(get_taxonomy_repository)],
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    governance: Annotated[GovernancePolicy, Depends(get_governance_policy)],
    visibility: Annotated[RecipeVisibility, Depends(get_recipe_visibility)],
    probe: Annotated[RecipeServiceProbe, Depends(get_recipe_service_probe)],
) -> RecipeService:
    """Get RecipeService instance.

    Repositories, resolver and policy all share the request session via
    FastAPI dependency caching.
    """
    return RecipeService(
        session=session,
        recipe_repository=recipes,
        taxonomy_repository=taxonomy,
        membership_resolver=resolver,
        governance_policy=governance,
        visibility=visibility,
        probe=probe,
    )


def get_comment_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    comments: Annotated[CommentRepository, Depends(get_comment_repository)],
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    guard: Annotated[TenantIsolationGuard, Depends(get_tenant_isolation_guard)],
    visibility: Annotated[RecipeVisibility, Depends(get_recipe_visibility)],
    probe: Annotated[CommentServiceProbe, Depends(get_comment_service_probe)],
) -> CommentService:
    """Get CommentService instance."""
    return CommentService(
        session=session,
        comment_repository=comments,
        membership_resolver=resolver,
        isolation_guard=guard,
        visibility=visibility,
        probe=probe,
    )


def get_taxonomy_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    taxonomy: Annotated[TaxonomyRepository, Depends(get_taxonomy_repository)],
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    guard: Annotated[TenantIsolationGuard, Depends(get_tenant_isolation_guard)],
    probe: Annotated[CatalogProbe, Depends(get_catalog_probe)],
) -> TaxonomyService:
    """Get TaxonomyService instance."""
    return TaxonomyService(
        session=session,
        taxonomy_repository=taxonomy,
        membership_resolver=resolver,
        isolation_guard=guard,
        probe=probe,
    )


def get_favorite_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    favorites: Annotated[FavoriteRepository, Depends(get_favorite_repository)],
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    visibility: Annotated[RecipeVisibility, Depends(get_recipe_visibility)],
    probe: Annotated[CatalogProbe, Depends(get_catalog_probe)],
) -> FavoriteService:
    """Get FavoriteService instance."""
    return FavoriteService(
        session=session,
        favorite_repository=favorites,
        recipe_repository=recipes,
        membership_resolver=resolver,
        visibility=visibility,
        probe=probe,
    )
