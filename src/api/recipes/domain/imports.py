"""Validation and sanitization for recipes imported from the web.

Extracted payloads are untrusted: every text field is stripped of markup,
whitespace-collapsed and truncated, and every number is clamped, before
the result is handed to RecipeContent validation.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlsplit

URL_MAX_LENGTH = 2000

TITLE_MAX = 200
DESCRIPTION_MAX = 1000
QUANTITY_MAX = 50
UNIT_MAX = 50
INGREDIENT_NAME_MAX = 200
INGREDIENT_NOTE_MAX = 200
INSTRUCTION_MAX = 2000
STEP_NOTES_MAX = 500
NOTES_MAX = 2000

SERVINGS_RANGE = (1, 100)
MINUTES_RANGE = (0, 1440)

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})
_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


class InvalidImportUrlError(ValueError):
    """Raised when a URL may not be fetched by the import pipeline."""

    pass


def _is_private_host(hostname: str) -> bool:
    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return address.is_private or address.is_loopback or address.is_link_local


def validate_import_url(url: str) -> str:
    """Check that a URL is safe to hand to the extractor.

    Only http(s) URLs of at most 2000 characters are accepted, and local
    or private-network hosts are refused.

    Returns:
        The stripped URL

    Raises:
        InvalidImportUrlError: Describing the first rule the URL breaks
    """
    url = url.strip()
    if not url:
        raise InvalidImportUrlError("URL is required")
    if len(url) > URL_MAX_LENGTH:
        raise InvalidImportUrlError("URL is too long")

    try:
        parts = urlsplit(url)
        hostname = (parts.hostname or "").lower()
    except ValueError as e:
        raise InvalidImportUrlError("Invalid URL format") from e

    if parts.scheme not in ("http", "https"):
        raise InvalidImportUrlError("Only HTTP and HTTPS URLs are allowed")
    if not hostname:
        raise InvalidImportUrlError("Invalid URL format")
    if hostname in _LOCAL_HOSTS:
        raise InvalidImportUrlError("Local URLs are not allowed")
    if _is_private_host(hostname):
        raise InvalidImportUrlError("Private network URLs are not allowed")

    return url


def sanitize_text(text: Any, max_length: int) -> str:
    """Strip tags, collapse whitespace and truncate to max_length."""
    if not isinstance(text, str) or not text:
        return ""
    cleaned = _TAG_PATTERN.sub("", text)
    cleaned = _WHITESPACE_PATTERN.sub(" ", cleaned).strip()
    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length].strip()
    return cleaned


def _optional_text(text: Any, max_length: int) -> str | None:
    return sanitize_text(text, max_length) or None


def clamp(value: Any, bounds: tuple[int, int]) -> int | None:
    """Round and clamp a number into bounds; missing or zero values become None."""
    if isinstance(value, bool) or not isinstance(value, int | float) or not value:
        return None
    low, high = bounds
    return max(low, min(high, round(value)))


def sanitize_extracted_recipe(candidate: Mapping[str, Any]) -> dict[str, Any]:
    """Produce RecipeContent keyword arguments from an extracted payload.

    Steps are renumbered from 1 in their extracted order.
    """
    ingredients: Iterable[Mapping[str, Any]] = candidate.get("ingredients") or []
    steps: Iterable[Mapping[str, Any]] = candidate.get("steps") or []

    return {
        "title": sanitize_text(candidate.get("title"), TITLE_MAX),
        "description": _optional_text(candidate.get("description"), DESCRIPTION_MAX),
        "ingredients": [
            {
                "quantity": _optional_text(item.get("quantity"), QUANTITY_MAX),
                "unit": _optional_text(item.get("unit"), UNIT_MAX),
                "name": sanitize_text(item.get("name"), INGREDIENT_NAME_MAX),
                "note": _optional_text(item.get("note"), INGREDIENT_NOTE_MAX),
            }
            for item in ingredients
        ],
        "steps": [
            {
                "step_number": index,
                "instruction": sanitize_text(
                    step.get("instruction"), INSTRUCTION_MAX
                ),
                "notes": _optional_text(step.get("notes"), STEP_NOTES_MAX),
            }
            for index, step in enumerate(steps, start=1)
        ],
        "servings": clamp(candidate.get("servings"), SERVINGS_RANGE),
        "prep_time": clamp(candidate.get("prep_time"), MINUTES_RANGE),
        "cook_time": clamp(candidate.get("cook_time"), MINUTES_RANGE),
        "notes": _optional_text(candidate.get("notes"), NOTES_MAX),
    }
