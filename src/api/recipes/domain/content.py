"""Validated recipe content.

Both manual authoring and the import pipeline funnel through
RecipeContent.create, so a stored recipe always satisfies the same rules.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from recipes.domain.value_objects import Ingredient, RecipeStep

TITLE_MAX_LENGTH = 200


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def _non_negative(name: str, value: int | None) -> int | None:
    if value is None:
        return None
    if value < 0:
        raise ValueError(f"{name} must be a non-negative integer")
    return value


@dataclass(frozen=True)
class RecipeContent:
    """The editable body of a recipe.

    Invariants:
    - title is 1..200 characters after trimming
    - at least one ingredient has a name; nameless lines are dropped
    - at least one step has an instruction; empty steps are dropped and
      the rest renumbered from 1
    - servings >= 1, prep and cook times >= 0 when given
    """

    title: str
    ingredients: tuple[Ingredient, ...]
    steps: tuple[RecipeStep, ...]
    description: str | None = None
    servings: int | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    notes: str | None = None
    family_story: str | None = None
    photo_url: str | None = None

    @classmethod
    def create(
        cls,
        title: str,
        ingredients: Iterable[Mapping[str, Any] | Ingredient],
        steps: Iterable[Mapping[str, Any] | RecipeStep],
        description: str | None = None,
        servings: int | None = None,
        prep_time: int | None = None,
        cook_time: int | None = None,
        notes: str | None = None,
        family_story: str | None = None,
        photo_url: str | None = None,
    ) -> RecipeContent:
        """Validate and normalize recipe content.

        Raises:
            ValueError: If any rule is violated
        """
        clean_title = _clean(title)
        if clean_title is None:
            raise ValueError("Title is required and must be a non-empty string")
        if len(clean_title) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title must be {TITLE_MAX_LENGTH} characters or less")

        clean_ingredients = tuple(
            i for i in (_to_ingredient(raw) for raw in ingredients) if i is not None
        )
        if not clean_ingredients:
            raise ValueError("At least one ingredient with a name is required")

        instructions = [s for s in (_to_step(raw) for raw in steps) if s is not None]
        if not instructions:
            raise ValueError("At least one step with instructions is required")
        clean_steps = tuple(
            RecipeStep(step_number=index, instruction=text, notes=step_notes)
            for index, (text, step_notes) in enumerate(instructions, start=1)
        )

        if servings is not None and servings < 1:
            raise ValueError("Servings must be a positive integer")

        return cls(
            title=clean_title,
            ingredients=clean_ingredients,
            steps=clean_steps,
            description=_clean(description),
            servings=servings,
            prep_time=_non_negative("Prep time", prep_time),
            cook_time=_non_negative("Cook time", cook_time),
            notes=_clean(notes),
            family_story=_clean(family_story),
            photo_url=_clean(photo_url),
        )


def _to_ingredient(raw: Mapping[str, Any] | Ingredient) -> Ingredient | None:
    if isinstance(raw, Ingredient):
        raw = raw.to_dict()
    name = _clean(raw.get("name"))
    if name is None:
        return None
    return Ingredient(
        name=name,
        quantity=_clean(raw.get("quantity")),
        unit=_clean(raw.get("unit")),
        note=_clean(raw.get("note")),
    )


def _to_step(raw: Mapping[str, Any] | RecipeStep) -> tuple[str, str | None] | None:
    if isinstance(raw, RecipeStep):
        raw = raw.to_dict()
    instruction = _clean(raw.get("instruction"))
    if instruction is None:
        return None
    return instruction, _clean(raw.get("notes"))
