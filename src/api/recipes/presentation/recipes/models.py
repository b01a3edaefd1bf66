"""Pydantic models for recipe API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from recipes.domain.aggregates import Recipe
from recipes.domain.content import RecipeContent
from recipes.domain.value_objects import CategoryId, RecipeStatus, TagId
from recipes.ports.queries import RecipePage


class IngredientModel(BaseModel):
    name: str = Field(..., max_length=200)
    quantity: str | None = Field(default=None, max_length=50)
    unit: str | None = Field(default=None, max_length=50)
    note: str | None = Field(default=None, max_length=200)


class StepModel(BaseModel):
    """One instruction. Step numbers are reassigned from list order."""

    model_config = ConfigDict(populate_by_name=True)

    step_number: int | None = Field(default=None, alias="stepNumber")
    instruction: str = Field(..., max_length=2000)
    notes: str | None = Field(default=None, max_length=500)


class RecipeRequest(BaseModel):
    """Request model for authoring a recipe."""

    title: str = Field(..., description="Recipe title", max_length=200)
    description: str | None = None
    ingredients: list[IngredientModel] = Field(default_factory=list)
    steps: list[StepModel] = Field(default_factory=list)
    servings: int | None = None
    prep_time: int | None = Field(default=None, description="Minutes")
    cook_time: int | None = Field(default=None, description="Minutes")
    notes: str | None = None
    family_story: str | None = None
    photo_url: str | None = Field(default=None, max_length=2000)
    category_ids: list[str] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)

    def to_content(self) -> RecipeContent:
        """Validate into domain content.

        Raises:
            ValueError: If the content breaks a recipe rule
        """
        return RecipeContent.create(
            title=self.title,
            ingredients=[i.model_dump() for i in self.ingredients],
            steps=[s.model_dump() for s in self.steps],
            description=self.description,
            servings=self.servings,
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            notes=self.notes,
            family_story=self.family_story,
            photo_url=self.photo_url,
        )

    def parsed_category_ids(self) -> frozenset[CategoryId]:
        return frozenset(CategoryId.from_string(c) for c in self.category_ids)

    def parsed_tag_ids(self) -> frozenset[TagId]:
        return frozenset(TagId.from_string(t) for t in self.tag_ids)


class UpdateRecipeRequest(RecipeRequest):
    """Request model for editing a recipe.

    Setting status to PUBLISHED publishes a draft; only its creator may.
    """

    status: RecipeStatus | None = None


class ImportRecipeRequest(BaseModel):
    url: str = Field(..., min_length=1, description="Page to import from")


class RecipeResponse(BaseModel):
    """Response model for a recipe."""

    id: str
    group_id: str
    created_by: str
    status: RecipeStatus
    title: str
    description: str | None
    ingredients: list[IngredientModel]
    steps: list[StepModel]
    servings: int | None
    prep_time: int | None
    cook_time: int | None
    notes: str | None
    family_story: str | None
    photo_url: str | None
    source_url: str | None
    category_ids: list[str]
    tag_ids: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, recipe: Recipe) -> RecipeResponse:
        """Convert domain Recipe aggregate to API response."""
        content = recipe.content
        return cls(
            id=recipe.id.value,
            group_id=recipe.group_id.value,
            created_by=recipe.created_by.value,
            status=recipe.status,
            title=content.title,
            description=content.description,
            ingredients=[IngredientModel(**i.to_dict()) for i in content.ingredients],
            steps=[
                StepModel(
                    step_number=s.step_number, instruction=s.instruction, notes=s.notes
                )
                for s in content.steps
            ],
            servings=content.servings,
            prep_time=content.prep_time,
            cook_time=content.cook_time,
            notes=content.notes,
            family_story=content.family_story,
            photo_url=content.photo_url,
            source_url=recipe.source_url,
            category_ids=sorted(c.value for c in recipe.category_ids),
            tag_ids=sorted(t.value for t in recipe.tag_ids),
            created_at=recipe.created_at,
            updated_at=recipe.updated_at,
        )


class RecipeListResponse(BaseModel):
    recipes: list[RecipeResponse]
    total: int
    page: int
    total_pages: int

    @classmethod
    def from_page(cls, page: RecipePage) -> RecipeListResponse:
        return cls(
            recipes=[RecipeResponse.from_domain(r) for r in page.items],
            total=page.total,
            page=page.page,
            total_pages=page.total_pages,
        )


class ImportRecipeResponse(BaseModel):
    draft: RecipeResponse
