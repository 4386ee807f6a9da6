"""Pydantic models for slug configuration and records."""

from slugsmith.models.config import (
    LoggingConfig,
    ResolverSettings,
    SlugOptions,
    SlugSettings,
)
from slugsmith.models.records import PersistedState, SluggedRecord
from slugsmith.models.slug import (
    FieldSelector,
    MethodSelector,
    SlugConfig,
    SlugQuery,
    UniqueConstraint,
    build_slug_config,
)

__all__ = [
    # Config
    "SlugOptions",
    "ResolverSettings",
    "LoggingConfig",
    "SlugSettings",
    # Slug
    "FieldSelector",
    "MethodSelector",
    "SlugConfig",
    "SlugQuery",
    "UniqueConstraint",
    "build_slug_config",
    # Records
    "PersistedState",
    "SluggedRecord",
]
