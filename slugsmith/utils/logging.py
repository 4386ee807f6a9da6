"""loguru setup shared by the library and the CLI."""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

    from slugsmith.models.config import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level> | {extra}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]} | {message} | {extra}"


def setup_logging(config: "LoggingConfig", *, level: str | None = None) -> None:
    """
    Replace the loguru sinks with the configured ones.

    Args:
        config: Logging configuration
        level: Overrides ``config.level`` for every sink (the CLI's ``--verbose``)
    """
    level = level or config.level
    logger.remove()
    logger.configure(extra={"name": "slugsmith"})

    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=config.colorize)

    # Rotated file sink; records are queued so writer threads never block on disk
    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.file_path,
            level=level,
            format=FILE_FORMAT,
            rotation=config.rotation,
            retention=config.retention,
            compression=config.compression,
            serialize=config.serialize,
            enqueue=True,
        )

    logger.debug("Logging configured", level=level, file=config.file_path)


def get_logger(name: str) -> "Logger":
    """Logger bound to a module name, shown in the ``name`` column."""
    return logger.bind(name=name)
