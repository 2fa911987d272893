# Path: protonctl/core/data_paths.py
"""
Protonctl Data Paths

Home-relative install and cache directories, resolved once per process
from configuration and passed to the components that need them.

Architecture:
- Immutable value object (no module-level path globals)
- Create on first use pattern
- Fails with IoError when a path exists but is not a directory
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from protonctl.constants import CACHE_SUBPATH
from protonctl.core.config_loader import ConfigLoader
from protonctl.core.logger import get_logger
from protonctl.engine.errors import IoError
from protonctl.engine.product_kind import ProductKind

logger = get_logger(__name__, 'core')


@dataclass(frozen=True)
class InstallPaths:
    """
    Resolved directories for one protonctl run.

    Example:
        paths = InstallPaths.from_config(config)
        target = paths.ensure_destination(ProductKind.PROTON)
        cache = paths.ensure_cache_dir()
    """
    home_dir: Path
    flatpak: bool = False

    @classmethod
    def from_config(cls, config: ConfigLoader, flatpak: Optional[bool] = None) -> 'InstallPaths':
        """
        Build paths from configuration.

        Args:
            config: Loaded configuration
            flatpak: CLI override for the flatpak flag (None keeps config value)
        """
        use_flatpak = config.get('flatpak', False) if flatpak is None else flatpak
        return cls(home_dir=Path(config.get('home_dir')), flatpak=bool(use_flatpak))

    def destination_for(self, kind: ProductKind) -> Path:
        return self.home_dir / kind.spec.destination(self.flatpak)

    @property
    def cache_dir(self) -> Path:
        return self.home_dir / CACHE_SUBPATH

    def ensure_destination(self, kind: ProductKind) -> Path:
        """Create the destination directory for ``kind`` if missing."""
        return self._ensure_directory(self.destination_for(kind))

    def ensure_cache_dir(self) -> Path:
        """Create the shared download cache if missing."""
        return self._ensure_directory(self.cache_dir)

    def _ensure_directory(self, path: Path) -> Path:
        """
        Ensure a single directory exists.

        Args:
            path: Path to directory

        Returns:
            The directory path

        Raises:
            IoError: If the path is not a directory or cannot be created
        """
        if path.exists():
            if not path.is_dir():
                raise IoError(f"Path exists but is not a directory: {path}")
            return path

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IoError(f"Cannot create directory {path}: {e}") from e

        logger.info(f"Created directory: {path}")
        return path


__all__ = ['InstallPaths']
