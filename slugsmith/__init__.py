"""Unique, length-bounded URL slugs for stored records."""

from slugsmith.errors import (
    ConfigurationError,
    EmptySlugSourceError,
    InvalidSlugSourceError,
    SlugAllocationError,
    SlugConflictError,
    SlugError,
    StoreUnavailableError,
)
from slugsmith.lookup import is_numeric_key, slug_or_key_lookup
from slugsmith.models import SluggedRecord, SlugOptions, SlugSettings
from slugsmith.repository import Repository
from slugsmith.resolver import SlugResolver, allocate_slug, candidate_prefixes
from slugsmith.stores import JsonFileStore, MemoryStore
from slugsmith.utils.slug import normalize

__version__ = "1.0.0"

__all__ = [
    "normalize",
    "SlugResolver",
    "allocate_slug",
    "candidate_prefixes",
    "Repository",
    "SluggedRecord",
    "SlugOptions",
    "SlugSettings",
    "MemoryStore",
    "JsonFileStore",
    "is_numeric_key",
    "slug_or_key_lookup",
    "SlugError",
    "ConfigurationError",
    "InvalidSlugSourceError",
    "EmptySlugSourceError",
    "SlugConflictError",
    "SlugAllocationError",
    "StoreUnavailableError",
]
