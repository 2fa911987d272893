# Path: protonctl/core/logger.py
"""
Protonctl Logger

Centralized logging configuration for protonctl.

Architecture:
- Component-based logging (core, engine, cli, extraction)
- Rich console output on stderr, optional log files
- Configurable log levels
- IPO (Input-Process-Output) structured logging
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from protonctl.core.config_loader import ConfigLoader
from protonctl.constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_FILENAME,
    ERROR_LOG_FILENAME,
    DEFAULT_LOG_LEVEL,
    LOGGER_ROOT,
    LOGGER_CORE,
    LOGGER_ENGINE,
    LOGGER_CLI,
    LOGGER_EXTRACTION,
)

COMPONENT_LOGGERS = {
    'core': LOGGER_CORE,
    'engine': LOGGER_ENGINE,
    'cli': LOGGER_CLI,
    'extraction': LOGGER_EXTRACTION,
}


def _level(name: Optional[str]) -> int:
    level = logging.getLevelName((name or DEFAULT_LOG_LEVEL).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    config: ConfigLoader,
    verbose: bool = False,
    console: Optional[Console] = None
) -> logging.Logger:
    """
    Configure the protonctl logging tree.

    Call once from the CLI entry point. Calling again replaces the
    handlers installed by the previous call.

    Args:
        config: Loaded configuration
        verbose: Force DEBUG level
        console: Rich console for the console handler (defaults to stderr)

    Returns:
        The package root logger
    """
    log_level = logging.DEBUG if verbose else _level(config.get('log_level'))
    log_dir = config.get('log_dir')

    logger = logging.getLogger(LOGGER_ROOT)
    logger.setLevel(log_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if config.get('log_console', True):
        console_handler = RichHandler(
            console=console if console else Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter('%(message)s', datefmt='[%X]'))
        logger.addHandler(console_handler)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / LOG_FILENAME)
        file_handler.setLevel(logging.DEBUG if verbose else min(log_level, logging.INFO))
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

        # Error-only log file
        error_handler = logging.FileHandler(log_dir / ERROR_LOG_FILENAME)
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(error_handler)

        # Let the file handler see INFO even when the console is quieter
        logger.setLevel(min(log_level, file_handler.level))

    return logger


def get_logger(name: str, component: str = 'core') -> logging.Logger:
    """
    Get logger for a protonctl component.

    Args:
        name: Module name (typically __name__)
        component: Component type ('core', 'engine', 'cli', 'extraction')

    Returns:
        Logger under the protonctl tree

    Example:
        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Resolving GE-Proton8-4")
    """
    prefix = COMPONENT_LOGGERS.get(component, LOGGER_ROOT)
    short_name = name.rsplit('.', 1)[-1]
    return logging.getLogger(f"{prefix}.{short_name}")


__all__ = ['get_logger', 'configure_logging']
