# Path: protonctl/core/config_loader.py
"""
Protonctl Configuration Loader

Configuration management for protonctl.
Loads environment variables (optionally seeded from a .env file) with
type conversion and sensible defaults.

Architecture:
- One instance per process, built by the CLI entry point and passed down
- Type-safe access with validation
- Explicit overrides for tests and CLI flags
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from protonctl.constants import (
    ENV_HOME,
    ENV_CATALOG_URL,
    ENV_USER_AGENT,
    ENV_CHUNK_SIZE,
    ENV_CONNECT_TIMEOUT,
    ENV_READ_TIMEOUT,
    ENV_LOG_LEVEL,
    ENV_LOG_CONSOLE,
    ENV_LOG_DIR,
    ENV_FLATPAK,
    DEFAULT_CATALOG_URL,
    DEFAULT_USER_AGENT,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_LOG_LEVEL,
    CONFIG_SUBPATH,
    ENV_FILENAME,
)


def default_env_file() -> Path:
    """Location of the user-level .env file."""
    return Path.home() / CONFIG_SUBPATH / ENV_FILENAME


class ConfigLoader:
    """
    Configuration loader.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults. Values in ``overrides`` win
    over the environment.

    Example:
        config = ConfigLoader()
        chunk_size = config.get('chunk_size')

        config = ConfigLoader(overrides={'home_dir': tmp_path})
    """

    def __init__(
        self,
        env_file: Optional[Path] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        load_env_file: bool = True
    ):
        """
        Initialize configuration loader.

        Args:
            env_file: Optional .env path (defaults to ~/.config/protonctl/.env)
            overrides: Config keys that take precedence over the environment
            load_env_file: Set False to skip reading any .env file
        """
        if load_env_file:
            env_path = env_file if env_file else default_env_file()
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()

        if overrides:
            self._config.update(overrides)

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load and validate all configuration from environment.

        Returns:
            Dictionary of validated configuration values
        """
        return {
            # ================================================================
            # DIRECTORY PATHS
            # ================================================================
            'home_dir': self._get_path(ENV_HOME) or Path.home(),
            'log_dir': self._get_path(ENV_LOG_DIR),
            'flatpak': self._get_bool(ENV_FLATPAK, False),

            # ================================================================
            # CATALOG CONFIGURATION
            # ================================================================
            'catalog_base_url': self._get_env(ENV_CATALOG_URL, DEFAULT_CATALOG_URL).rstrip('/'),
            'user_agent': self._get_env(ENV_USER_AGENT, DEFAULT_USER_AGENT),

            # ================================================================
            # DOWNLOAD CONFIGURATION
            # ================================================================
            'chunk_size': self._get_int(ENV_CHUNK_SIZE, DEFAULT_CHUNK_SIZE),
            'connect_timeout': self._get_int(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT),
            'read_timeout': self._get_int(ENV_READ_TIMEOUT, DEFAULT_READ_TIMEOUT),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_level': self._get_env(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool(ENV_LOG_CONSOLE, True),
        }

    def _get_env(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: If True, raises ValueError when missing

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """
        Get integer environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found or invalid

        Returns:
            Integer value
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str) -> Optional[Path]:
        """Get path environment variable, with ~ expanded."""
        value = os.getenv(key)

        if value is None or not value.strip():
            return None

        return Path(value.strip()).expanduser()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to configuration."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config

    def keys(self):
        """Get all configuration keys."""
        return self._config.keys()

    def items(self):
        """Get all configuration key-value pairs."""
        return self._config.items()


__all__ = ['ConfigLoader', 'default_env_file']
