"""SQLAlchemy ORM models for recipes and their classification links."""

from __future__ import annotations

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin
from recipes.domain.value_objects import RecipeStatus

recipe_categories = Table(
    "recipe_categories",
    Base.metadata,
    Column(
        "recipe_id",
        String(26),
        ForeignKey("recipes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        String(26),
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)

recipe_tags = Table(
    "recipe_tags",
    Base.metadata,
    Column(
        "recipe_id",
        String(26),
        ForeignKey("recipes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        String(26),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class RecipeModel(Base, TimestampMixin):
    """ORM model for recipes.

    Ingredients and steps are stored as JSONB arrays in their domain
    order. status and created_by together drive draft visibility.
    """

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    ingredients: Mapped[list] = mapped_column(JSONB, nullable=False)
    steps: Mapped[list] = mapped_column(JSONB, nullable=False)
    servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    prep_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cook_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    family_story: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    status: Mapped[RecipeStatus] = mapped_column(
        Enum(
            RecipeStatus,
            name="recipe_status",
            values_callable=lambda e: [s.value for s in e],
        ),
        nullable=False,
        index=True,
    )
    source_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RecipeModel(id={self.id}, status={self.status})>"
