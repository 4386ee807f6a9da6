"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from slugsmith.constants import DEFAULT_SLUG_LENGTH, MAX_SUFFIX_DIGITS
from slugsmith.models.config import LoggingConfig, ResolverSettings, SlugOptions, SlugSettings


class TestSlugOptions:
    """Test SlugOptions model."""

    def test_defaults(self) -> None:
        """Test default option values."""
        options = SlugOptions(source="title")
        assert options.permanent is True
        assert options.scope == []
        assert options.length is None
        assert options.key is False

    def test_scope_string_shorthand(self) -> None:
        """Test a single scope field may be given as a string."""
        assert SlugOptions(source="title", scope="category").scope == ["category"]

    def test_length_must_be_positive(self) -> None:
        """Test non-positive lengths are rejected."""
        with pytest.raises(ValidationError):
            SlugOptions(source="title", length=0)

    def test_size_is_deprecated_alias(self) -> None:
        """Test the size option warns and maps to length."""
        with pytest.warns(DeprecationWarning, match="use length instead"):
            options = SlugOptions(source="title", size=20)
        assert options.length == 20

    def test_length_wins_over_size(self) -> None:
        """Test an explicit length is kept when size is also given."""
        with pytest.warns(DeprecationWarning):
            options = SlugOptions(source="title", size=20, length=40)
        assert options.length == 40


class TestSettings:
    """Test settings models."""

    def test_resolver_defaults(self) -> None:
        """Test resolver defaults match the library constants."""
        settings = ResolverSettings()
        assert settings.default_length == DEFAULT_SLUG_LENGTH
        assert settings.suffix_digits == MAX_SUFFIX_DIGITS
        assert settings.max_retries >= 1

    def test_invalid_log_level(self) -> None:
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")

    def test_models_section(self) -> None:
        """Test model options are parsed from plain dicts."""
        settings = SlugSettings.model_validate(
            {"models": {"Task": {"source": "title", "scope": ["category"]}}}
        )
        assert settings.models["Task"].scope == ["category"]
        assert settings.logging.level == "INFO"
