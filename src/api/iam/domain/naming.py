"""Naming rules for groups."""

from __future__ import annotations

import re

from shared_kernel.slugs import random_suffix

_GROUP_SLUG = re.compile(r"^[a-z0-9-]+$")

GROUP_NAME_MAX_LENGTH = 100


def generate_group_slug() -> str:
    """Generate a random URL-friendly group slug such as `group-k3x9a0qz`."""
    return f"group-{random_suffix(8)}"


def default_group_name(user_name: str | None, user_email: str) -> str:
    """Derive a default group name from the creating user's profile."""
    if user_name:
        return f"{user_name}'s Recipe Group"
    return f"{user_email.split('@')[0]}'s Recipe Group"


def is_valid_group_slug(slug: str) -> bool:
    return bool(_GROUP_SLUG.match(slug)) and 3 <= len(slug) <= 50


def normalize_group_name(name: str) -> str:
    """Trim and validate a group name.

    Raises:
        ValueError: If the trimmed name is empty or too long
    """
    if not isinstance(name, str):
        raise TypeError(f"name must be str, got {type(name).__name__}")
    name = name.strip()
    if not name:
        raise ValueError("Group name cannot be empty")
    if len(name) > GROUP_NAME_MAX_LENGTH:
        raise ValueError(
            f"Group name must be {GROUP_NAME_MAX_LENGTH} characters or less"
        )
    return name
