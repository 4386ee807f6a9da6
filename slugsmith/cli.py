#!/usr/bin/env python3
"""Command line preview of slug generation.

Usage:
    slugsmith normalize "A fancy café"
    slugsmith preview "My first post" --length 30 --existing my-first-post
    slugsmith preview "My first post" --config config/slugs.yaml --verbose
"""

import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from loguru import logger

from slugsmith.errors import SlugError
from slugsmith.models.config import LoggingConfig, SlugSettings
from slugsmith.resolver import allocate_slug
from slugsmith.utils.config_loader import load_slug_settings
from slugsmith.utils.logging import setup_logging
from slugsmith.utils.slug import normalize, truncate

app = typer.Typer(help="Preview URL slugs.")


def _load_settings(config_file: Path | None, verbose: bool) -> SlugSettings:
    settings = load_slug_settings(config_file) if config_file else SlugSettings()
    setup_logging(settings.logging, level="DEBUG" if verbose else None)
    return settings


@app.callback()
def main() -> None:
    """Preview URL slugs."""


@app.command("normalize")
def normalize_command(text: Annotated[str, typer.Argument(help="Source text")]) -> None:
    """Print the normalized slug token for TEXT."""
    setup_logging(LoggingConfig(level="WARNING"))
    print(normalize(text))


@app.command("preview")
def preview_command(
    text: Annotated[str, typer.Argument(help="Source text")],
    length: Annotated[
        int | None,
        typer.Option("--length", "-l", min=1, help="Maximum slug length"),
    ] = None,
    existing: Annotated[
        list[str] | None,
        typer.Option("--existing", "-e", help="Slug already taken (repeatable)"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to slugs.yaml"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """Print the slug TEXT would get next to the given existing slugs."""
    try:
        settings = _load_settings(config_file, verbose)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    max_length = length or settings.resolver.default_length
    base = truncate(normalize(text), max_length)
    if not base:
        print("❌ Source text has no usable characters")
        sys.exit(1)

    try:
        slug = allocate_slug(base, max_length, existing or [])
    except SlugError as e:
        logger.error("Preview failed", error=str(e))
        print(f"❌ {e}")
        sys.exit(1)

    print(slug)


if __name__ == "__main__":
    app()
