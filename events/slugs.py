"""Slug derivation for event titles."""

import re
from collections.abc import Callable

from django.utils.text import slugify


FALLBACK_SLUG = "event"

_SEPARATORS = re.compile(r"[\s_]+")
_HYPHEN_RUNS = re.compile(r"[-_]+")


def generate_slug(title: str) -> str:
    """
    Turn a title into a URL-safe slug candidate.

    The result only contains ``[a-z0-9-]`` and never starts, ends with or repeats a hyphen.
    Titles made only of special characters produce an empty string.

    >>> generate_slug("Hello, World!  2025")
    'hello-world-2025'
    """
    # slugify keeps underscores, so turn them into separators first
    slug = slugify(_SEPARATORS.sub(" ", str(title).lower().strip()))
    return _HYPHEN_RUNS.sub("-", slug).strip("-")


def resolve_unique_slug(
    title: str,
    is_taken: Callable[[str], bool],
    max_length: int,
) -> str:
    """
    Return the first free slug for ``title``: the base slug, then ``base-1``, ``base-2``, ...

    ``is_taken`` answers whether a candidate is already used by another record. The base is
    truncated so that a numeric suffix still fits in ``max_length``.
    """
    base = generate_slug(title) or FALLBACK_SLUG
    base = base[: max_length - 8].rstrip("-") or FALLBACK_SLUG

    slug = base
    counter = 1
    while is_taken(slug):
        slug = f"{base}-{counter}"
        counter += 1
    return slug
