"""Utility functions and helpers."""

from slugsmith.utils.config_loader import load_slug_settings, load_yaml_config
from slugsmith.utils.logging import get_logger, setup_logging
from slugsmith.utils.slug import normalize, truncate

__all__ = [
    "setup_logging",
    "get_logger",
    "normalize",
    "truncate",
    "load_yaml_config",
    "load_slug_settings",
]
