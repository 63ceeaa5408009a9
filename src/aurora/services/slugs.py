"""Slug derivation for categories and posts."""
from __future__ import annotations

import uuid
from typing import Final

from slugify import slugify

RESERVED_CATEGORY_NAMES: Final[frozenset[str]] = frozenset({"new"})
POST_SUFFIX_LENGTH: Final[int] = 8


def derive_slug(name: str) -> str:
    """Return the lowercase, dash-separated slug for a display name.

    May return an empty string when ``name`` holds nothing but punctuation;
    callers decide whether that is acceptable.
    """
    return slugify(name, lowercase=True, separator="-")


def category_slug(name: str) -> str:
    """Return the slug for a category name.

    Question marks are kept visible as ``qm`` so that names like ``?Why?``
    do not collapse onto ``why``.
    """
    return derive_slug(name.replace("?", "qm"))


def is_reserved_category_name(name: str) -> bool:
    """Return True for names whose slug would shadow a fixed route segment."""
    return (
        name.strip().lower() in RESERVED_CATEGORY_NAMES
        or category_slug(name) in RESERVED_CATEGORY_NAMES
    )


def post_slug(title: str) -> str:
    """Return a practically unique slug for a post title.

    A random eight-character suffix from a UUID4 is appended, so no lookup
    against existing posts is needed.
    """
    suffix = str(uuid.uuid4())[:POST_SUFFIX_LENGTH]
    return derive_slug(f"{title}-{suffix}")
