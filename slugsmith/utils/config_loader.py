"""YAML settings loading."""

from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, ValidationError

from slugsmith.constants import DEFAULT_SETTINGS_PATH
from slugsmith.utils.logging import get_logger

if TYPE_CHECKING:
    from slugsmith.models.config import SlugSettings

logger = get_logger(__name__)


def load_yaml_config[T: BaseModel](file_path: Path | str, model_class: type[T]) -> T:
    """
    Read a YAML file and validate it into ``model_class``.

    An empty file validates as an empty mapping, so every field takes its
    default.

    Args:
        file_path: Path to the YAML file
        model_class: Pydantic model to validate against

    Returns:
        Validated model instance

    Raises:
        FileNotFoundError: File does not exist
        yaml.YAMLError: File is not valid YAML
        ValidationError: Content does not match ``model_class``

    Examples:
        >>> from slugsmith.models.config import SlugSettings
        >>> settings = load_yaml_config("config/slugs.yaml", SlugSettings)
    """
    path = Path(file_path)
    if not path.is_file():
        logger.error("Settings file not found", path=str(path))
        raise FileNotFoundError(f"Settings file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return model_class.model_validate(raw)
    except yaml.YAMLError as e:
        logger.error("Settings file is not valid YAML", path=str(path), error=str(e))
        raise
    except ValidationError as e:
        logger.error(
            "Settings validation failed",
            path=str(path),
            model=model_class.__name__,
            errors=e.error_count(),
        )
        raise


def load_slug_settings(file_path: Path | str = DEFAULT_SETTINGS_PATH) -> "SlugSettings":
    """Load library settings, ``config/slugs.yaml`` by default."""
    from slugsmith.models.config import SlugSettings

    settings = load_yaml_config(file_path, SlugSettings)
    logger.info(
        "Settings loaded",
        path=str(file_path),
        models=sorted(settings.models),
        default_length=settings.resolver.default_length,
    )
    return settings
