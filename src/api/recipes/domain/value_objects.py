"""Value objects for Recipes domain.

Identifiers are ULID-backed for sortability. Ingredients and steps are
immutable and compared by value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Self

from ulid import ULID


@dataclass(frozen=True)
class _UlidId:
    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create identifier from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e
        return cls(value=value)


@dataclass(frozen=True)
class RecipeId(_UlidId):
    """Identifier for a Recipe aggregate."""


@dataclass(frozen=True)
class CommentId(_UlidId):
    """Identifier for a Comment aggregate."""


@dataclass(frozen=True)
class CategoryId(_UlidId):
    """Identifier for a Category."""


@dataclass(frozen=True)
class TagId(_UlidId):
    """Identifier for a Tag."""


class RecipeStatus(StrEnum):
    """Lifecycle state of a recipe.

    DRAFT recipes are visible only to their creator. PUBLISHED recipes are
    visible to every member of the owning group.
    """

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class RecipeSort(StrEnum):
    """Sort orders for recipe listings."""

    RECENT = "recent"
    TITLE = "title"
    PREP_TIME = "prepTime"


@dataclass(frozen=True)
class Ingredient:
    """One line of a recipe's ingredient list."""

    name: str
    quantity: str | None = None
    unit: str | None = None
    note: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "note": self.note,
        }


@dataclass(frozen=True)
class RecipeStep:
    """One numbered instruction of a recipe."""

    step_number: int
    instruction: str
    notes: str | None = None

    def to_dict(self) -> dict[str, str | int | None]:
        return {
            "step_number": self.step_number,
            "instruction": self.instruction,
            "notes": self.notes,
        }
