"""Integration tests for YAML settings."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from slugsmith.models.records import SluggedRecord
from slugsmith.repository import Repository
from slugsmith.stores.memory import MemoryStore
from slugsmith.utils.config_loader import load_slug_settings

PROJECT_CONFIG = Path(__file__).resolve().parents[2] / "config" / "slugs.yaml"


class Task(SluggedRecord):
    title: str
    category: str | None = None


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "slugs.yaml"
    path.write_text(
        """
resolver:
  default_length: 12
  max_retries: 2
  retry_wait_seconds: 0
models:
  Task:
    source: title
    scope: category
""",
        encoding="utf-8",
    )
    return path


def test_load_project_config() -> None:
    """Test the bundled configuration file validates."""
    settings = load_slug_settings(PROJECT_CONFIG)

    assert settings.resolver.default_length == 50
    assert settings.models["Task"].scope == ["category"]
    assert settings.models["Post"].permanent is True


def test_load_settings(settings_file: Path) -> None:
    """Test values from the file override the defaults."""
    settings = load_slug_settings(settings_file)

    assert settings.resolver.default_length == 12
    assert settings.resolver.max_retries == 2
    assert settings.resolver.suffix_digits == 5
    assert settings.logging.level == "INFO"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    """Test an empty file validates to the default settings."""
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    settings = load_slug_settings(path)

    assert settings.resolver.default_length == 50
    assert settings.models == {}


def test_missing_file(tmp_path: Path) -> None:
    """Test a missing file is reported."""
    with pytest.raises(FileNotFoundError):
        load_slug_settings(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    """Test malformed YAML is reported."""
    path = tmp_path / "broken.yaml"
    path.write_text("resolver: [unclosed\n", encoding="utf-8")

    with pytest.raises(yaml.YAMLError):
        load_slug_settings(path)


def test_invalid_values(tmp_path: Path) -> None:
    """Test values outside their bounds fail validation."""
    path = tmp_path / "invalid.yaml"
    path.write_text("resolver:\n  max_retries: 0\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_slug_settings(path)


def test_deprecated_size_in_file(tmp_path: Path) -> None:
    """Test the deprecated size option still sets the length."""
    path = tmp_path / "size.yaml"
    path.write_text("models:\n  Task:\n    source: title\n    size: 3\n", encoding="utf-8")

    with pytest.warns(DeprecationWarning):
        settings = load_slug_settings(path)

    assert settings.models["Task"].length == 3


def test_repository_from_settings(settings_file: Path) -> None:
    """Test a repository picks its options and length from the settings."""
    settings = load_slug_settings(settings_file)
    tasks = Repository(Task, MemoryStore(), settings=settings)

    assert tasks.config.max_length == 12
    assert tasks.config.scope == ("category",)

    first = tasks.create(title="Another productive day", category="home")
    second = tasks.create(title="Another productive day", category="home")
    other = tasks.create(title="Another productive day", category="work")

    assert first.slug == "another-prod"
    assert second.slug == "another-pr-2"
    assert other.slug == "another-prod"
