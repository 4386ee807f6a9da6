"""Unit tests for slug normalization utilities."""

import re

import pytest

from slugsmith.utils.slug import normalize, truncate

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class TestNormalize:
    """Test normalize function."""

    def test_basic_normalization(self) -> None:
        """Test plain sentences become hyphenated lowercase tokens."""
        assert normalize("My first shinny blog post") == "my-first-shinny-blog-post"
        assert normalize("i heart merb and dm") == "i-heart-merb-and-dm"

    def test_punctuation_runs_collapse(self) -> None:
        """Test runs of punctuation collapse into one hyphen."""
        assert normalize("another productive day!!") == "another-productive-day"
        assert normalize("AI & ML: The Future!") == "ai-ml-the-future"
        assert normalize("  --Hello,   World--  ") == "hello-world"

    def test_transliterates_latin(self) -> None:
        """Test accented latin characters are transliterated."""
        assert normalize("A fancy café") == "a-fancy-cafe"
        assert normalize("Crème brûlée à la française") == "creme-brulee-a-la-francaise"

    def test_transliterates_chinese(self) -> None:
        """Test non-latin scripts are transliterated."""
        assert normalize("你好") == "ni-hao"

    def test_apostrophes_and_commas_separate_words(self) -> None:
        """Test apostrophes and commas act as separators."""
        assert normalize("don't stop") == "don-t-stop"
        assert normalize("1,000 miles") == "1-000-miles"

    def test_underscore_is_separator(self) -> None:
        """Test underscores are not kept."""
        assert normalize("a_person") == "a-person"

    def test_entities_are_not_decoded(self) -> None:
        """Test HTML entities are treated as text."""
        assert normalize("fish &amp; chips") == "fish-amp-chips"

    def test_empty_inputs(self) -> None:
        """Test empty and unusable inputs yield an empty string."""
        assert normalize("") == ""
        assert normalize(None) == ""
        assert normalize("   ") == ""
        assert normalize("!!!???") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "My first shinny blog post",
            "A fancy café",
            "你好",
            "  Tabs\tand\nnewlines  ",
            "Ünïcödé — dashes – everywhere",
            "don't",
            "!!!",
        ],
    )
    def test_idempotent_and_url_safe(self, text: str) -> None:
        """Test output is stable under renormalization and URL-safe."""
        token = normalize(text)
        assert normalize(token) == token
        assert token == "" or SLUG_PATTERN.match(token)


class TestTruncate:
    """Test truncate function."""

    def test_short_token_unchanged(self) -> None:
        """Test tokens within the limit are unchanged."""
        assert truncate("fix", 50) == "fix"

    def test_cut_to_length(self) -> None:
        """Test tokens are cut to the limit."""
        assert truncate("aaaaa", 3) == "aaa"

    def test_dangling_hyphen_dropped(self) -> None:
        """Test a hyphen left at the cut is removed."""
        assert truncate("another-productive-day", 8) == "another"

    def test_non_positive_length(self) -> None:
        """Test zero or negative lengths give an empty token."""
        assert truncate("fix", 0) == ""
        assert truncate("fix", -2) == ""
