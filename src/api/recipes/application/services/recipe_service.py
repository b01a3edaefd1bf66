"""Recipe application service.

Orchestrates listing, authoring, editing, deleting and discarding
recipes. Each public method is one use case and owns its transaction.
"""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import GovernancePolicy, MembershipResolver
from iam.application.value_objects import CurrentUser
from iam.domain.value_objects import GroupId, UserId
from recipes.application.observability import (
    DefaultRecipeServiceProbe,
    RecipeServiceProbe,
)
from recipes.application.services.tenant_isolation_guard import RecipeVisibility
from recipes.domain.aggregates import Recipe, TaxonomyKind
from recipes.domain.content import RecipeContent
from recipes.domain.value_objects import (
    CategoryId,
    RecipeId,
    RecipeSort,
    RecipeStatus,
    TagId,
)
from recipes.ports.queries import RecipePage, RecipeSearch
from recipes.ports.repositories import IRecipeRepository, ITaxonomyRepository
from shared_kernel.authorization.exceptions import (
    GovernanceDeniedError,
    MissingCapabilityError,
)
from shared_kernel.authorization.types import Capability


class RecipeService:
    """Application service for recipes.

    Authorization order for resource operations: tenant isolation, then
    draft visibility, then the static capability, then governance.
    """

    def __init__(
        self,
        session: AsyncSession,
        recipe_repository: IRecipeRepository,
        taxonomy_repository: ITaxonomyRepository,
        membership_resolver: MembershipResolver,
        governance_policy: GovernancePolicy,
        visibility: RecipeVisibility,
        probe: RecipeServiceProbe | None = None,
    ):
        self._session = session
        self._recipes = recipe_repository
        self._taxonomy = taxonomy_repository
        self._resolver = membership_resolver
        self._governance = governance_policy
        self._visibility = visibility
        self._probe = probe or DefaultRecipeServiceProbe()

    async def list_recipes(
        self,
        current_user: CurrentUser,
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        category_ids: frozenset[CategoryId] = frozenset(),
        tag_ids: frozenset[TagId] = frozenset(),
        favorites_only: bool = False,
        sort: RecipeSort = RecipeSort.RECENT,
    ) -> RecipePage:
        """List recipes of the caller's active group.

        Contains every PUBLISHED recipe and the caller's own DRAFTs.
        """
        async with self._session.begin():
            membership = await self._resolver.require_capability(
                current_user.user_id, current_user.group_id, Capability.RECIPE_READ
            )
            return await self._recipes.search(
                RecipeSearch.create(
                    group_id=membership.group_id,
                    viewer_id=current_user.user_id,
                    page=page,
                    limit=limit,
                    search=search,
                    category_ids=category_ids,
                    tag_ids=tag_ids,
                    favorites_only=favorites_only,
                    sort=sort,
                )
            )

    async def get_recipe(self, user_id: UserId, recipe_id: RecipeId) -> Recipe:
        """Fetch a recipe visible to the user.

        Raises:
            ResourceNotFoundError: If absent or someone else's draft
            NotAMemberError: If the recipe belongs to another group
        """
        async with self._session.begin():
            recipe, _ = await self._visibility.require_visible(user_id, recipe_id)
        return recipe

    async def create_recipe(
        self,
        current_user: CurrentUser,
        content: RecipeContent,
        category_ids: frozenset[CategoryId] = frozenset(),
        tag_ids: frozenset[TagId] = frozenset(),
    ) -> Recipe:
        """Author a recipe in the caller's active group. It is published at once.

        Governed by the static permission table only; the group's
        power-user edit setting does not restrict creation.

        Raises:
            MissingCapabilityError: If the caller lacks recipe:create
            ValueError: If a category or tag belongs to another group
        """
        async with self._session.begin():
            membership = await self._resolver.require_capability(
                current_user.user_id, current_user.group_id, Capability.RECIPE_CREATE
            )
            await self._require_group_terms(
                membership.group_id, category_ids, tag_ids
            )
            recipe = Recipe.author(
                group_id=membership.group_id,
                created_by=current_user.user_id,
                content=content,
                category_ids=category_ids,
                tag_ids=tag_ids,
            )
            await self._recipes.save(recipe)

        self._probe.recipe_created(
            recipe_id=recipe.id.value,
            group_id=recipe.group_id.value,
            user_id=current_user.user_id.value,
        )
        return recipe

    async def update_recipe(
        self,
        user_id: UserId,
        recipe_id: RecipeId,
        content: RecipeContent,
        category_ids: frozenset[CategoryId] = frozenset(),
        tag_ids: frozenset[TagId] = frozenset(),
        status: RecipeStatus | None = None,
    ) -> Recipe:
        """Replace a recipe's content, optionally publishing a draft.

        Every edit passes the group's governance. A DRAFT is further
        limited to its creator, who alone can see it.

        Raises:
            ResourceNotFoundError: If absent or someone else's draft
            NotAMemberError: If the recipe belongs to another group
            MissingCapabilityError: If the role lacks recipe:update
            GovernanceDeniedError: If group settings forbid the edit
            InvalidRecipeTransitionError: If asked to move back to DRAFT
            ValueError: If a category or tag belongs to another group
        """
        async with self._session.begin():
            recipe, membership = await self._visibility.require_visible(
                user_id, recipe_id
            )
            try:
                self._resolver.check_capability(membership, Capability.RECIPE_UPDATE)
                await self._governance.require_edit(membership)
            except (MissingCapabilityError, GovernanceDeniedError) as e:
                self._probe.recipe_edit_denied(
                    recipe_id=recipe_id.value, user_id=user_id.value, reason=str(e)
                )
                raise

            await self._require_group_terms(recipe.group_id, category_ids, tag_ids)
            recipe.revise(content, category_ids, tag_ids)
            was_draft = recipe.is_draft
            if status is not None:
                recipe.transition_to(status, user_id)
            await self._recipes.save(recipe)

        self._probe.recipe_updated(recipe_id=recipe_id.value, user_id=user_id.value)
        if was_draft and not recipe.is_draft:
            self._probe.recipe_published(
                recipe_id=recipe_id.value, user_id=user_id.value
            )
        return recipe

    async def delete_recipe(self, user_id: UserId, recipe_id: RecipeId) -> None:
        """Hard-delete a recipe. ADMIN only, with no governance override.

        Raises:
            ResourceNotFoundError: If absent or someone else's draft
            NotAMemberError: If the recipe belongs to another group
            MissingCapabilityError: If the role lacks recipe:delete
        """
        async with self._session.begin():
            _, membership = await self._visibility.require_visible(user_id, recipe_id)
            self._resolver.check_capability(membership, Capability.RECIPE_DELETE)
            await self._recipes.delete(recipe_id)

        self._probe.recipe_deleted(recipe_id=recipe_id.value, user_id=user_id.value)

    async def discard_draft(self, user_id: UserId, recipe_id: RecipeId) -> None:
        """Hard-delete a draft on behalf of its creator.

        Raises:
            ResourceNotFoundError: If absent or someone else's draft
            NotAMemberError: If the recipe belongs to another group
            InvalidRecipeTransitionError: If the recipe is published
        """
        async with self._session.begin():
            recipe, _ = await self._visibility.require_visible(user_id, recipe_id)
            recipe.ensure_discardable_by(user_id)
            await self._recipes.delete(recipe_id)

        self._probe.recipe_draft_discarded(
            recipe_id=recipe_id.value, user_id=user_id.value
        )

    async def _require_group_terms(
        self,
        group_id: GroupId,
        category_ids: Collection[CategoryId],
        tag_ids: Collection[TagId],
    ) -> None:
        for kind, ids in (
            (TaxonomyKind.CATEGORY, category_ids),
            (TaxonomyKind.TAG, tag_ids),
        ):
            if not ids:
                continue
            found = await self._taxonomy.count_in_group(
                kind, group_id, [term_id.value for term_id in ids]
            )
            if found != len(ids):
                raise ValueError(f"Unknown {kind.value} for this group")
