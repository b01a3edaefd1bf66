from pydantic import BaseModel, ConfigDict, Field


class ExtractedIngredient(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    quantity: str | None = None
    unit: str | None = None
    note: str | None = None


class ExtractedStep(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    step_number: int | None = Field(default=None, alias="stepNumber")
    instruction: str = ""
    notes: str | None = None


class ExtractedRecipe(BaseModel):
    """Candidate recipe returned by the extraction service.

    Untrusted: every field must be sanitized before it is stored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str = ""
    description: str | None = None
    ingredients: list[ExtractedIngredient] = Field(default_factory=list)
    steps: list[ExtractedStep] = Field(default_factory=list)
    servings: float | None = None
    prep_time: float | None = Field(default=None, alias="prepTime")
    cook_time: float | None = Field(default=None, alias="cookTime")
    notes: str | None = None
