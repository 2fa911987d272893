# Path: protonctl/engine/local_store.py
"""
Local Store

Inspection and removal of installed builds and cached downloads.

Architecture:
- Installed versions are the direct children of the destination directory
- Removal is best effort: individual failures are logged and skipped
- Nothing here touches the network
"""

import shutil
from pathlib import Path

from protonctl.core.logger import get_logger
from protonctl.core.data_paths import InstallPaths
from protonctl.engine.errors import IoError
from protonctl.engine.product_kind import ProductKind
from protonctl.constants import LOG_INPUT, LOG_OUTPUT

logger = get_logger(__name__, 'engine')


def list_installed(kind: ProductKind, paths: InstallPaths) -> list[str]:
    """
    Names of installed versions, sorted.

    Raises:
        IoError: If the destination directory cannot be read
    """
    destination = paths.destination_for(kind)
    logger.info(f"{LOG_INPUT} Listing installed {kind} versions in {destination}")

    try:
        names = sorted(entry.name for entry in destination.iterdir())
    except OSError as e:
        raise IoError(f"Cannot read {destination}, does it exist? ({e})") from e

    logger.info(f"{LOG_OUTPUT} Found {len(names)} installed versions")
    return names


def remove_entry(path: Path) -> bool:
    """
    Delete one file or directory tree.

    Returns:
        True if removed, False if removal failed (already logged)
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
        logger.info(f"Removed {path}")
        return True
    except OSError as e:
        logger.warning(f"Failed to remove {path}: {e}")
        return False


def remove_children(directory: Path) -> int:
    """Delete every entry in ``directory``; returns the number removed."""
    if not directory.is_dir():
        logger.info(f"Nothing to remove, {directory} does not exist")
        return 0

    return sum(1 for entry in sorted(directory.iterdir()) if remove_entry(entry))


def remove_version(kind: ProductKind, paths: InstallPaths, version: str) -> bool:
    """
    Remove one installed version.

    Only a direct child of the destination directory, matched by name
    against its listing, is ever removed.

    Returns:
        False if the version is not installed or could not be removed
    """
    destination = paths.destination_for(kind)

    try:
        installed = {entry.name: entry for entry in destination.iterdir()}
    except OSError as e:
        logger.info(f"Cannot read {destination}: {e}")
        installed = {}

    target = installed.get(version)
    if target is None:
        logger.info(f"{kind} {version!r} not found in {destination}")
        return False

    return remove_entry(target)


def remove_all(kind: ProductKind, paths: InstallPaths) -> int:
    """Remove every installed version of ``kind``."""
    return remove_children(paths.destination_for(kind))


def clear_cache(paths: InstallPaths) -> int:
    """Remove every file left in the download cache."""
    return remove_children(paths.cache_dir)


__all__ = [
    'list_installed',
    'remove_entry',
    'remove_children',
    'remove_version',
    'remove_all',
    'clear_cache',
]
