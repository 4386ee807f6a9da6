"""Configuration models for slug generation."""

import warnings
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from slugsmith.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_MAX_WAIT_SECONDS,
    DEFAULT_RETRY_WAIT_SECONDS,
    DEFAULT_SLUG_LENGTH,
    MAX_SUFFIX_DIGITS,
)
from slugsmith.utils.logging import get_logger

logger = get_logger(__name__)

SIZE_DEPRECATION_MESSAGE = "Slug with size option is deprecated, use length instead"


class SlugOptions(BaseModel):
    """Slug declaration for one model, as written by the user."""

    source: str | None = Field(
        default=None, description="Field or method that supplies the source text"
    )
    length: int | None = Field(default=None, ge=1, description="Maximum slug length")
    size: int | None = Field(default=None, ge=1, description="Deprecated alias of length")
    permanent: bool = Field(
        default=True, description="Keep an existing slug when the source changes"
    )
    scope: list[str] = Field(
        default_factory=list, description="Fields that partition the uniqueness space"
    )
    key: bool = Field(default=False, description="Slug is the record's primary key")

    @model_validator(mode="after")
    def _migrate_size(self) -> "SlugOptions":
        if self.size is not None:
            warnings.warn(SIZE_DEPRECATION_MESSAGE, DeprecationWarning, stacklevel=2)
            logger.warning(SIZE_DEPRECATION_MESSAGE, size=self.size)
            if self.length is None:
                self.length = self.size
        return self

    @field_validator("scope", mode="before")
    @classmethod
    def _scope_as_list(cls, value: Any) -> Any:
        # A single field name is accepted as shorthand
        if isinstance(value, str):
            return [value]
        return value


class ResolverSettings(BaseModel):
    """Slug resolution and retry settings."""

    default_length: int = Field(default=DEFAULT_SLUG_LENGTH, ge=1)
    suffix_digits: int = Field(default=MAX_SUFFIX_DIGITS, ge=1, le=10)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=1)
    retry_wait_seconds: float = Field(default=DEFAULT_RETRY_WAIT_SECONDS, ge=0.0)
    retry_max_wait_seconds: float = Field(default=DEFAULT_RETRY_MAX_WAIT_SECONDS, ge=0.0)


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    serialize: bool = Field(default=False, description="Serialize file logs to JSON")
    colorize: bool = Field(default=True, description="Colorize console output")
    file_path: str | None = Field(default=None, description="Optional log file")
    rotation: str = Field(default="500 MB", description="Log rotation size/time")
    retention: str = Field(default="30 days", description="Log retention period")
    compression: str = Field(default="zip", description="Compression format for rotated logs")


class SlugSettings(BaseModel):
    """Complete library configuration."""

    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    models: dict[str, SlugOptions] = Field(
        default_factory=dict, description="Slug options keyed by model name"
    )
