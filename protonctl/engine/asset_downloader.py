# Path: protonctl/engine/asset_downloader.py
"""
Asset Downloader

Downloads the archive and checksum assets of one release concurrently
into the shared cache directory.

Architecture:
- Both transfers start together and are joined (no race-first-wins)
- A failing transfer never cancels its sibling
- One shared ProgressTracker aggregates both byte streams
- The first failure in asset order (archive, checksum) is raised
"""

import asyncio
from pathlib import Path
from typing import Optional

from protonctl.core.logger import get_logger
from protonctl.constants import LOG_INPUT, LOG_OUTPUT, LOG_PROCESS
from protonctl.engine.catalog_client import CatalogClient
from protonctl.engine.models import AssetDescriptor, AssetPair, DownloadedPair
from protonctl.engine.product_kind import ProductKind
from protonctl.engine.progress import ProgressTracker
from protonctl.engine.protocol_handlers import HTTPHandler
from protonctl.engine.result import DownloadResult

logger = get_logger(__name__, 'engine')


class AssetDownloader:
    """
    Concurrent downloader for an AssetPair.

    Example:
        downloader = AssetDownloader(http, catalog)
        downloaded = downloader.plan(pair, cache_dir)
        results = await downloader.download_pair(kind, pair, downloaded, tracker)
    """

    def __init__(self, http_handler: HTTPHandler, catalog: CatalogClient):
        self.http = http_handler
        self.catalog = catalog

    @staticmethod
    def plan(pair: AssetPair, cache_dir: Path) -> DownloadedPair:
        """Decide local paths, named after the asset file names."""
        return DownloadedPair(
            archive_path=cache_dir / Path(pair.archive.name).name,
            checksum_path=cache_dir / Path(pair.checksum.name).name,
        )

    async def download_pair(
        self,
        kind: ProductKind,
        pair: AssetPair,
        downloaded: DownloadedPair,
        progress: Optional[ProgressTracker] = None
    ) -> list[DownloadResult]:
        """
        Download both assets concurrently and wait for both.

        Args:
            kind: Product family (selects the asset endpoint)
            pair: Selected assets
            downloaded: Planned local paths, marked done as transfers finish
            progress: Shared tracker for both transfers

        Returns:
            Download results, archive first

        Raises:
            TransportError, WriteFailedError: First failure in asset order
        """
        logger.info(
            f"{LOG_INPUT} Downloading {pair.archive.name} and {pair.checksum.name} "
            f"({pair.total_size} bytes)"
        )

        if progress:
            progress.start(pair.total_size)

        roles = pair.items()
        try:
            outcomes = await asyncio.gather(
                *(self._download_one(kind, role, asset, downloaded, progress) for role, asset in roles),
                return_exceptions=True
            )
        finally:
            if progress:
                progress.finish()

        failures = [
            (role, outcome) for (role, _), outcome in zip(roles, outcomes)
            if isinstance(outcome, BaseException)
        ]
        for role, failure in failures:
            logger.info(f"{LOG_OUTPUT} {role} download failed: {failure}")

        if failures:
            raise failures[0][1]

        logger.info(f"{LOG_OUTPUT} Both assets downloaded")
        return list(outcomes)

    async def _download_one(
        self,
        kind: ProductKind,
        role: str,
        asset: AssetDescriptor,
        downloaded: DownloadedPair,
        progress: Optional[ProgressTracker]
    ) -> DownloadResult:
        output_path = downloaded.path_for(role)
        logger.debug(f"{LOG_PROCESS} Starting {role} transfer: {asset.name}")

        result = await self.http.download(
            self.catalog.asset_url(kind, asset),
            output_path,
            progress=progress,
            expected_size=asset.size
        )

        downloaded.mark_done(role)
        return result


__all__ = ['AssetDownloader']
