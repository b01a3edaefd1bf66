from pydantic import BaseModel, Field


class AddFavoriteRequest(BaseModel):
    recipe_id: str = Field(..., description="Recipe to favorite")
