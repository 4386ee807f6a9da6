"""Exceptions raised while configuring models and resolving slugs."""

from typing import Any


class SlugError(Exception):
    """Base exception for slug errors."""

    def __init__(self, message: str, **context: Any):
        self.context = context
        super().__init__(message)


class ConfigurationError(SlugError):
    """Model slug configuration is unusable; raised at model setup time."""


class InvalidSlugSourceError(ConfigurationError):
    """The slug source does not resolve to a readable field or method."""


class EmptySlugSourceError(SlugError):
    """Source normalizes to nothing and the record has no slug to keep."""


class SlugConflictError(SlugError):
    """Store rejected a write because the slug is already taken in its scope."""

    def __init__(self, slug: str, **context: Any):
        self.slug = slug
        super().__init__(f"Slug already taken: {slug}", slug=slug, **context)


class SlugAllocationError(SlugError):
    """Could not allocate a unique slug within the length or retry limits."""


class StoreUnavailableError(SlugError):
    """Backing store could not be read or written."""
