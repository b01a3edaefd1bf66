"""Fixtures shared by Recipes unit tests.

Application tests run the real authorization components (membership
resolver, governance policy, tenant isolation guard) against in-memory
mocks of the repositories they read from.
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from iam.application.observability import (
    GovernancePolicyProbe,
    MembershipResolverProbe,
)
from iam.application.services import GovernancePolicy, MembershipResolver
from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupId, Membership, UserId
from iam.ports.repositories import IGroupRepository, IMembershipRepository
from recipes.application.observability import TenantIsolationProbe
from recipes.application.services import RecipeVisibility, TenantIsolationGuard
from recipes.domain.aggregates import Comment, Recipe, TaxonomyTerm
from recipes.domain.content import RecipeContent
from recipes.domain.value_objects import RecipeId, RecipeStatus
from recipes.ports.repositories import IRecipeRepository, IResourceLocator
from shared_kernel.authorization.types import ResourceType, Role


@pytest.fixture
def content() -> RecipeContent:
    return RecipeContent.create(
        title="Grandma's Soup",
        ingredients=[{"name": "Carrots", "quantity": "2"}],
        steps=[{"instruction": "Simmer everything."}],
    )


@pytest.fixture
def make_recipe(
    group_id: GroupId, content: RecipeContent
) -> Callable[..., Recipe]:
    """Build a recipe in the default test group."""

    def _make(
        created_by: UserId,
        status: RecipeStatus = RecipeStatus.PUBLISHED,
        group: GroupId | None = None,
    ) -> Recipe:
        if status == RecipeStatus.DRAFT:
            return Recipe.import_draft(
                group_id=group or group_id,
                created_by=created_by,
                content=content,
                source_url="https://example.com/soup",
            )
        return Recipe.author(
            group_id=group or group_id, created_by=created_by, content=content
        )

    return _make


@pytest.fixture
def group(group_id: GroupId) -> Group:
    return Group(id=group_id, name="Kitchen", slug="kitchen")


@pytest.fixture
def memberships() -> dict[tuple[UserId, GroupId], Membership]:
    return {}


@pytest.fixture
def join(memberships, make_membership) -> Callable[..., Membership]:
    """Give a user a role in a group (the default test group if none given)."""

    def _join(user_id: UserId, role: Role, group: GroupId | None = None) -> Membership:
        membership = make_membership(user_id, role, group)
        memberships[(membership.user_id, membership.group_id)] = membership
        return membership

    return _join


@pytest.fixture
def stored_recipes() -> dict[str, Recipe]:
    return {}


@pytest.fixture
def stored_comments() -> dict[str, Comment]:
    return {}


@pytest.fixture
def stored_terms() -> dict[str, TaxonomyTerm]:
    return {}


@pytest.fixture
def store_recipe(stored_recipes) -> Callable[[Recipe], Recipe]:
    def _store(recipe: Recipe) -> Recipe:
        stored_recipes[recipe.id.value] = recipe
        return recipe

    return _store


@pytest.fixture
def membership_resolver(memberships) -> MembershipResolver:
    repo = create_autospec(IMembershipRepository, instance=True)

    async def _get(user_id, group_id):
        return memberships.get((user_id, group_id))

    repo.get = AsyncMock(side_effect=_get)
    return MembershipResolver(
        membership_repository=repo, probe=MagicMock(spec=MembershipResolverProbe)
    )


@pytest.fixture
def mock_group_repository(group) -> IGroupRepository:
    repo = create_autospec(IGroupRepository, instance=True)
    repo.get_by_id = AsyncMock(return_value=group)
    return repo


@pytest.fixture
def governance_policy(membership_resolver, mock_group_repository) -> GovernancePolicy:
    return GovernancePolicy(
        membership_resolver=membership_resolver,
        group_repository=mock_group_repository,
        probe=MagicMock(spec=GovernancePolicyProbe),
    )


@pytest.fixture
def mock_locator(stored_recipes, stored_comments, stored_terms) -> IResourceLocator:
    """Resolve owning groups from the in-memory stores."""
    locator = create_autospec(IResourceLocator, instance=True)

    async def _find(resource_type: ResourceType, resource_id: str):
        if resource_type == ResourceType.RECIPE:
            recipe = stored_recipes.get(resource_id)
            return recipe.group_id if recipe else None
        if resource_type == ResourceType.COMMENT:
            comment = stored_comments.get(resource_id)
            recipe = stored_recipes.get(comment.recipe_id.value) if comment else None
            return recipe.group_id if recipe else None
        term = stored_terms.get(resource_id)
        return term.group_id if term else None

    locator.find_group_id = AsyncMock(side_effect=_find)
    return locator


@pytest.fixture
def mock_recipe_repository(stored_recipes) -> IRecipeRepository:
    repo = create_autospec(IRecipeRepository, instance=True)

    async def _get(recipe_id: RecipeId):
        return stored_recipes.get(recipe_id.value)

    async def _save(recipe: Recipe):
        stored_recipes[recipe.id.value] = recipe

    async def _delete(recipe_id: RecipeId):
        return stored_recipes.pop(recipe_id.value, None) is not None

    repo.get_by_id = AsyncMock(side_effect=_get)
    repo.save = AsyncMock(side_effect=_save)
    repo.delete = AsyncMock(side_effect=_delete)
    repo.search = AsyncMock()
    return repo


@pytest.fixture
def isolation_probe() -> MagicMock:
    return MagicMock(spec=TenantIsolationProbe)


@pytest.fixture
def isolation_guard(mock_locator, membership_resolver, isolation_probe):
    return TenantIsolationGuard(
        resource_locator=mock_locator,
        membership_resolver=membership_resolver,
        probe=isolation_probe,
    )


@pytest.fixture
def visibility(isolation_guard, mock_recipe_repository, isolation_probe):
    return RecipeVisibility(
        isolation_guard=isolation_guard,
        recipe_repository=mock_recipe_repository,
        probe=isolation_probe,
    )


@pytest.fixture
def foreign_group_id() -> GroupId:
    return GroupId.generate()
