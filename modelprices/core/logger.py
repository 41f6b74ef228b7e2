"""Loguru sink setup for the CLI."""

import sys
from pathlib import Path

from loguru import logger

from modelprices.config.schema import Config, LoggingConfig


def _add_file_sink(settings: LoggingConfig) -> None:
    target = Path(settings.file_path).expanduser()
    try:
        logger.add(
            target,
            level=settings.level,
            rotation=settings.rotation,
            retention=settings.retention,
        )
    except OSError as e:
        logger.warning(f"Not logging to {target}: {e}")


def configure_logger(config: Config) -> None:
    """Replace loguru's default handler with the sinks the config asks for."""
    settings = config.logging
    logger.remove()
    logger.add(sys.stderr, level=settings.level)
    if settings.file_enabled:
        _add_file_sink(settings)
