# Path: protonctl/engine/asset_selector.py
"""
Asset Selector

Picks the build archive and its checksum sidecar out of a release's
asset list by file-name suffix.
"""

from typing import Optional

from protonctl.core.logger import get_logger
from protonctl.constants import CHECKSUM_SUFFIX, LOG_OUTPUT, ROLE_ARCHIVE, ROLE_CHECKSUM
from protonctl.engine.errors import AssetMissingError
from protonctl.engine.models import AssetDescriptor, AssetPair, ReleaseMetadata

logger = get_logger(__name__, 'engine')


def select_assets(
    release: ReleaseMetadata,
    archive_suffix: str,
    checksum_suffix: str = CHECKSUM_SUFFIX
) -> AssetPair:
    """
    Select the archive and checksum assets.

    Scans assets in catalog order; the first match wins for each role.

    Args:
        release: Resolved release
        archive_suffix: Archive suffix for the product kind (e.g. .tar.gz)
        checksum_suffix: Sidecar suffix

    Returns:
        AssetPair with both roles filled

    Raises:
        AssetMissingError: If either role has no matching asset
    """
    archive: Optional[AssetDescriptor] = None
    checksum: Optional[AssetDescriptor] = None

    for asset in release.assets:
        if archive is None and asset.name.endswith(archive_suffix):
            archive = asset
        elif checksum is None and asset.name.endswith(checksum_suffix):
            checksum = asset

        if archive is not None and checksum is not None:
            break

    if archive is None:
        raise AssetMissingError(ROLE_ARCHIVE, archive_suffix, release.tag_name)
    if checksum is None:
        raise AssetMissingError(ROLE_CHECKSUM, checksum_suffix, release.tag_name)

    logger.info(f"{LOG_OUTPUT} Selected {archive.name} + {checksum.name}")
    return AssetPair(archive=archive, checksum=checksum)


__all__ = ['select_assets']
