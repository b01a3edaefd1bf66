"""PostgreSQL implementation of IRecipeRepository."""

from __future__ import annotations

from sqlalchemy import Select, delete, func, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import GroupId, UserId
from recipes.domain.aggregates import Recipe
from recipes.domain.content import RecipeContent
from recipes.domain.value_objects import (
    CategoryId,
    Ingredient,
    RecipeId,
    RecipeSort,
    RecipeStatus,
    RecipeStep,
    TagId,
)
from recipes.infrastructure.models import (
    FavoriteModel,
    RecipeModel,
    recipe_categories,
    recipe_tags,
)
from recipes.infrastructure.observability import (
    DefaultRecipeRepositoryProbe,
    RecipeRepositoryProbe,
)
from recipes.ports.queries import RecipePage, RecipeSearch
from recipes.ports.repositories import IRecipeRepository

LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """Build an ILIKE pattern matching `text` literally anywhere in a column."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class RecipeRepository(IRecipeRepository):
    """PostgreSQL-backed repository for Recipe aggregates.

    Category and tag links are rewritten on every save. Joins the caller's
    transaction; never begins or commits on its own.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: RecipeRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultRecipeRepositoryProbe()

    async def save(self, recipe: Recipe) -> None:
        content = recipe.content
        model = await self._session.get(RecipeModel, recipe.id.value)
        if model is None:
            model = RecipeModel(
                id=recipe.id.value,
                group_id=recipe.group_id.value,
                created_by=recipe.created_by.value,
                created_at=recipe.created_at,
            )
            self._session.add(model)

        model.title = content.title
        model.description = content.description
        model.ingredients = [i.to_dict() for i in content.ingredients]
        model.steps = [s.to_dict() for s in content.steps]
        model.servings = content.servings
        model.prep_time = content.prep_time
        model.cook_time = content.cook_time
        model.notes = content.notes
        model.family_story = content.family_story
        model.photo_url = content.photo_url
        model.status = recipe.status
        model.source_url = recipe.source_url
        model.updated_at = recipe.updated_at
        await self._session.flush()

        await self._replace_links(
            recipe_categories,
            "category_id",
            recipe.id,
            [c.value for c in recipe.category_ids],
        )
        await self._replace_links(
            recipe_tags, "tag_id", recipe.id, [t.value for t in recipe.tag_ids]
        )
        self._probe.recipe_saved(recipe.id.value, recipe.status.value)

    async def get_by_id(self, recipe_id: RecipeId) -> Recipe | None:
        model = await self._session.get(RecipeModel, recipe_id.value)
        if model is None:
            self._probe.recipe_not_found(recipe_id.value)
            return None
        links = await self._load_links([model.id])
        return self._to_domain(model, *links.get(model.id, ((), ())))

    async def delete(self, recipe_id: RecipeId) -> bool:
        result = await self._session.execute(
            delete(RecipeModel).where(RecipeModel.id == recipe_id.value)
        )
        deleted = result.rowcount > 0
        if deleted:
            self._probe.recipe_deleted(recipe_id.value)
        return deleted

    async def search(self, criteria: RecipeSearch) -> RecipePage:
        filtered = self._apply_filters(select(RecipeModel), criteria)

        total = (
            await self._session.execute(
                select(func.count()).select_from(filtered.subquery())
            )
        ).scalar_one()

        stmt = (
            filtered.order_by(*self._ordering(criteria.sort))
            .offset(criteria.offset)
            .limit(criteria.limit)
        )
        models = (await self._session.execute(stmt)).scalars().all()
        links = await self._load_links([m.id for m in models])

        return RecipePage(
            items=[
                self._to_domain(m, *links.get(m.id, ((), ()))) for m in models
            ],
            total=total,
            page=criteria.page,
            limit=criteria.limit,
        )

    @staticmethod
    def _apply_filters(stmt: Select, criteria: RecipeSearch) -> Select:
        stmt = stmt.where(
            RecipeModel.group_id == criteria.group_id.value,
            or_(
                RecipeModel.status == RecipeStatus.PUBLISHED,
                RecipeModel.created_by == criteria.viewer_id.value,
            ),
        )
        if criteria.search:
            pattern = contains_pattern(criteria.search)
            stmt = stmt.where(
                or_(
                    RecipeModel.title.ilike(pattern, escape=LIKE_ESCAPE),
                    RecipeModel.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if criteria.category_ids:
            stmt = stmt.where(
                RecipeModel.id.in_(
                    select(recipe_categories.c.recipe_id).where(
                        recipe_categories.c.category_id.in_(
                            [c.value for c in criteria.category_ids]
                        )
                    )
                )
            )
        if criteria.tag_ids:
            stmt = stmt.where(
                RecipeModel.id.in_(
                    select(recipe_tags.c.recipe_id).where(
                        recipe_tags.c.tag_id.in_([t.value for t in criteria.tag_ids])
                    )
                )
            )
        if criteria.favorites_only:
            stmt = stmt.where(
                RecipeModel.id.in_(
                    select(FavoriteModel.recipe_id).where(
                        FavoriteModel.user_id == criteria.viewer_id.value
                    )
                )
            )
        return stmt

    @staticmethod
    def _ordering(sort: RecipeSort) -> tuple:
        if sort == RecipeSort.TITLE:
            return (RecipeModel.title.asc(), RecipeModel.id.asc())
        if sort == RecipeSort.PREP_TIME:
            return (RecipeModel.prep_time.asc().nulls_last(), RecipeModel.id.asc())
        return (RecipeModel.created_at.desc(), RecipeModel.id.desc())

    async def _replace_links(
        self, table, column: str, recipe_id: RecipeId, target_ids: list[str]
    ) -> None:
        await self._session.execute(
            delete(table).where(table.c.recipe_id == recipe_id.value)
        )
        if target_ids:
            await self._session.execute(
                insert(table),
                [{"recipe_id": recipe_id.value, column: tid} for tid in target_ids],
            )

    async def _load_links(
        self, recipe_ids: list[str]
    ) -> dict[str, tuple[list[str], list[str]]]:
        links: dict[str, tuple[list[str], list[str]]] = {
            rid: ([], []) for rid in recipe_ids
        }
        if not recipe_ids:
            return links

        categories = await self._session.execute(
            select(recipe_categories.c.recipe_id, recipe_categories.c.category_id).where(
                recipe_categories.c.recipe_id.in_(recipe_ids)
            )
        )
        for recipe_id, category_id in categories.all():
            links[recipe_id][0].append(category_id)

        tags = await self._session.execute(
            select(recipe_tags.c.recipe_id, recipe_tags.c.tag_id).where(
                recipe_tags.c.recipe_id.in_(recipe_ids)
            )
        )
        for recipe_id, tag_id in tags.all():
            links[recipe_id][1].append(tag_id)

        return links

    @staticmethod
    def _to_domain(model: RecipeModel, category_ids, tag_ids) -> Recipe:
        content = RecipeContent(
            title=model.title,
            ingredients=tuple(Ingredient(**item) for item in model.ingredients),
            steps=tuple(RecipeStep(**step) for step in model.steps),
            description=model.description,
            servings=model.servings,
            prep_time=model.prep_time,
            cook_time=model.cook_time,
            notes=model.notes,
            family_story=model.family_story,
            photo_url=model.photo_url,
        )
        return Recipe(
            id=RecipeId(value=model.id),
            group_id=GroupId(value=model.group_id),
            created_by=UserId(value=model.created_by),
            content=content,
            status=RecipeStatus(model.status),
            source_url=model.source_url,
            category_ids=frozenset(CategoryId(value=c) for c in category_ids),
            tag_ids=frozenset(TagId(value=t) for t in tag_ids),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
