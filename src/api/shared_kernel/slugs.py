"""URL-friendly slug helpers shared by groups, categories and tags."""

from __future__ import annotations

import re
import secrets
import string

_NON_WORD = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")
_SLUG_ALPHABET = string.ascii_lowercase + string.digits


def slugify(text: str) -> str:
    """Generate a URL-friendly slug from text.

    Lowercases, drops anything that is not a word character, whitespace or
    hyphen, then turns whitespace runs into single hyphens.

    Example:
        >>> slugify("Mom's Apple  Pie")
        'moms-apple-pie'
    """
    slug = text.lower().strip()
    slug = _NON_WORD.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    return _HYPHENS.sub("-", slug)


def candidate_slugs(base: str):
    """Yield `base`, then `base-1`, `base-2`, ... for collision handling."""
    yield base
    counter = 1
    while True:
        yield f"{base}-{counter}"
        counter += 1


def random_suffix(length: int = 8) -> str:
    """Return a random lowercase alphanumeric string."""
    return "".join(secrets.choice(_SLUG_ALPHABET) for _ in range(length))
