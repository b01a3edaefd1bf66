"""Tenant isolation for group-scoped resources.

Every resource-scoped request passes through here before any capability
is evaluated, so a role held in one group is never applied to another
group's data.
"""

from __future__ import annotations

from iam.application.services import MembershipResolver
from iam.domain.value_objects import Membership, UserId
from recipes.application.observability import (
    DefaultTenantIsolationProbe,
    TenantIsolationProbe,
)
from recipes.domain.aggregates import Recipe
from recipes.domain.value_objects import RecipeId
from recipes.ports.repositories import IRecipeRepository, IResourceLocator
from shared_kernel.authorization.exceptions import (
    NotAMemberError,
    ResourceNotFoundError,
)
from shared_kernel.authorization.types import ResourceType


class TenantIsolationGuard:
    """Confirms that a requested resource belongs to one of the requester's groups."""

    def __init__(
        self,
        resource_locator: IResourceLocator,
        membership_resolver: MembershipResolver,
        probe: TenantIsolationProbe | None = None,
    ):
        self._locator = resource_locator
        self._resolver = membership_resolver
        self._probe = probe or DefaultTenantIsolationProbe()

    async def require_resource_access(
        self, user_id: UserId, resource_type: ResourceType, resource_id: str
    ) -> Membership:
        """Return the requester's membership in the resource's owning group.

        Raises:
            ResourceNotFoundError: If the resource does not exist
            NotAMemberError: If the requester is not in the owning group
        """
        group_id = await self._locator.find_group_id(resource_type, resource_id)
        if group_id is None:
            self._probe.resource_not_found(
                resource_type=resource_type.value,
                resource_id=resource_id,
                user_id=user_id.value,
            )
            raise ResourceNotFoundError(resource_type.value, resource_id)

        try:
            membership = await self._resolver.require_membership(user_id, group_id)
        except NotAMemberError:
            self._probe.cross_tenant_denied(
                resource_type=resource_type.value,
                resource_id=resource_id,
                user_id=user_id.value,
                group_id=group_id.value,
            )
            raise

        self._probe.resource_access_granted(
            resource_type=resource_type.value,
            resource_id=resource_id,
            user_id=user_id.value,
            role=membership.role.value,
        )
        return membership


class RecipeVisibility:
    """Applies the draft visibility rule on top of tenant isolation.

    A DRAFT behaves as if it does not exist for everyone but its creator,
    including ADMINs of the owning group.
    """

    def __init__(
        self,
        isolation_guard: TenantIsolationGuard,
        recipe_repository: IRecipeRepository,
        probe: TenantIsolationProbe | None = None,
    ):
        self._guard = isolation_guard
        self._recipes = recipe_repository
        self._probe = probe or DefaultTenantIsolationProbe()

    async def require_visible(
        self, user_id: UserId, recipe_id: RecipeId
    ) -> tuple[Recipe, Membership]:
        """Load a recipe the user may see, with their membership in its group.

        Raises:
            ResourceNotFoundError: If the recipe is absent or a foreign draft
            NotAMemberError: If the recipe belongs to another group
        """
        membership = await self._guard.require_resource_access(
            user_id, ResourceType.RECIPE, recipe_id.value
        )
        recipe = await self._recipes.get_by_id(recipe_id)
        if recipe is None:
            raise ResourceNotFoundError(ResourceType.RECIPE.value, recipe_id.value)
        if not recipe.is_visible_to(user_id):
            self._probe.recipe_draft_hidden(
                recipe_id=recipe_id.value, user_id=user_id.value
            )
            raise ResourceNotFoundError(ResourceType.RECIPE.value, recipe_id.value)
        return recipe, membership
