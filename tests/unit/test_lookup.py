"""Unit tests for slug-or-key lookups."""

import pytest

from slugsmith.lookup import is_numeric_key, slug_or_key_lookup


class TestIsNumericKey:
    """Test is_numeric_key function."""

    @pytest.mark.parametrize("key", [1, 42, "42", "0", -3, "-3"])
    def test_numeric(self, key: object) -> None:
        """Test integers and their exact text are numeric."""
        assert is_numeric_key(key)

    @pytest.mark.parametrize("key", ["my-post", "007", "1_000", " 5", "4.2", "", None])
    def test_not_numeric(self, key: object) -> None:
        """Test anything that does not round-trip through int is a slug."""
        assert not is_numeric_key(key)


class TestSlugOrKeyLookup:
    """Test slug_or_key_lookup function."""

    def setup_method(self) -> None:
        self.by_key_calls: list[object] = []
        self.by_slug_calls: list[str] = []
        self.rows_by_id = {1: "row-1", "slug-key": "row-slug-key"}
        self.rows_by_slug = {"my-post": "row-my-post"}

    def by_key(self, key: object) -> str | None:
        self.by_key_calls.append(key)
        return self.rows_by_id.get(key)

    def by_slug(self, slug: str) -> str | None:
        self.by_slug_calls.append(slug)
        return self.rows_by_slug.get(slug)

    def test_slug_found(self) -> None:
        """Test non-numeric keys are looked up as slugs."""
        lookup = slug_or_key_lookup(self.by_key, self.by_slug)
        assert lookup("my-post") == "row-my-post"
        assert self.by_key_calls == []

    def test_numeric_goes_to_key(self) -> None:
        """Test numeric keys skip the slug lookup."""
        lookup = slug_or_key_lookup(self.by_key, self.by_slug)
        assert lookup(1) == "row-1"
        assert self.by_slug_calls == []

    def test_falls_back_to_key(self) -> None:
        """Test a missing slug falls back to the primary key."""
        lookup = slug_or_key_lookup(self.by_key, self.by_slug)
        assert lookup("slug-key") == "row-slug-key"
        assert self.by_slug_calls == ["slug-key"]
        assert self.by_key_calls == ["slug-key"]

    def test_not_found(self) -> None:
        """Test unknown keys return None."""
        lookup = slug_or_key_lookup(self.by_key, self.by_slug)
        assert lookup("missing") is None
        assert lookup(99) is None
