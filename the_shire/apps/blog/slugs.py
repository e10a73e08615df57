"""Slug derivation for post permalinks."""

import re

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Derive a URL-safe slug from a post title.

    Lower-cases the title, collapses every run of characters outside
    ``[a-z0-9]`` into a single hyphen, then strips a leading and trailing
    hyphen. Deterministic: the same title always gives the same slug.

    Examples:
        "The Hobbit: An Adventure!" -> "the-hobbit-an-adventure"
        "  Multiple   Spaces  " -> "multiple-spaces"

    Unlike ``django.utils.text.slugify`` this keeps no unicode letters and
    never transliterates, so "Éowyn" becomes "owyn".
    """
    slug = _NON_ALNUM_RUN.sub("-", title.lower())
    return slug.strip("-")
