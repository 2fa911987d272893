# Path: protonctl/engine/coordinator.py
"""
Install Coordinator

Main workflow orchestrator for install operations.
Coordinates: resolve -> select -> download -> verify -> extract -> cleanup.

Architecture:
- Explicit state machine (resolving ... done, failed from any state)
- Every stage error aborts the remaining stages and propagates
- Temporary downloads are removed on every exit path
- Cleanup failures are logged, never raised
- IPO logging throughout
"""

import asyncio
import time
from pathlib import Path
from typing import Optional

from protonctl.core.logger import get_logger
from protonctl.core.config_loader import ConfigLoader
from protonctl.core.data_paths import InstallPaths
from protonctl.engine.asset_downloader import AssetDownloader
from protonctl.engine.asset_selector import select_assets
from protonctl.engine.catalog_client import CatalogClient
from protonctl.engine.errors import HashMismatchError
from protonctl.engine.extraction import ArchiveHandler
from protonctl.engine.integrity import compute_digests, read_checksum_file
from protonctl.engine.models import DownloadedPair, ReleaseMetadata
from protonctl.engine.product_kind import ProductKind
from protonctl.engine.progress import ProgressTracker
from protonctl.engine.protocol_handlers import HTTPHandler
from protonctl.engine.result import InstallResult
from protonctl.constants import (
    DEFAULT_CATALOG_URL,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    STATE_RESOLVING,
    STATE_SELECTING,
    STATE_DOWNLOADING,
    STATE_VERIFYING,
    STATE_EXTRACTING,
    STATE_CLEANING_UP,
    STATE_DONE,
    STATE_FAILED,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


class InstallCoordinator:
    """
    Coordinates the complete install workflow.

    Workflow:
    1. Resolve the release tag against the catalog
    2. Select the archive and its .sha512sum sidecar
    3. Download both concurrently into the shared cache
    4. Verify the archive digest against the sidecar
    5. Stream-extract the archive into the destination directory
    6. Remove both temporary files

    The destination directory receives nothing unless the digest matched
    (or verification was explicitly skipped).

    Example:
        coordinator = InstallCoordinator(config, paths)
        try:
            result = await coordinator.install(ProductKind.PROTON, 'GE-Proton8-4')
        finally:
            await coordinator.close()
    """

    def __init__(
        self,
        config: ConfigLoader,
        paths: Optional[InstallPaths] = None,
        http_handler: Optional[HTTPHandler] = None
    ):
        """
        Initialize install coordinator.

        Args:
            config: Loaded configuration
            paths: Resolved directories (built from config when omitted)
            http_handler: Shared HTTP handler (created when omitted)
        """
        self.config = config
        self.paths = paths if paths else InstallPaths.from_config(config)

        self.http_handler = http_handler if http_handler else HTTPHandler(config)
        self.catalog = CatalogClient(
            self.http_handler,
            config.get('catalog_base_url', DEFAULT_CATALOG_URL)
        )
        self.downloader = AssetDownloader(self.http_handler, self.catalog)
        self.archive_handler = ArchiveHandler()
        self.chunk_size = config.get('chunk_size', DEFAULT_CHUNK_SIZE)

        self.state: Optional[str] = None
        self.failure_reason: Optional[BaseException] = None
        self.last_result: Optional[InstallResult] = None

    def _transition(self, state: str) -> None:
        logger.debug(f"{LOG_PROCESS} State: {self.state} -> {state}")
        self.state = state

    async def install(
        self,
        kind: ProductKind,
        tag: str,
        skip_checksum: bool = False,
        progress: Optional[ProgressTracker] = None
    ) -> InstallResult:
        """
        Install one release of ``kind``.

        Args:
            kind: Product family
            tag: Release tag, or 'latest'
            skip_checksum: Download the sidecar but do not verify it
            progress: Shared download progress tracker

        Returns:
            InstallResult with final_state 'done'

        Raises:
            ProtonctlError: Any stage failure, unchanged
        """
        logger.info(f"{LOG_INPUT} Install {kind} {tag}")

        start_time = time.time()
        self.failure_reason = None
        destination = self.paths.destination_for(kind)
        result = InstallResult(tag_name=tag, destination=destination)
        self.last_result = result
        downloaded: Optional[DownloadedPair] = None

        try:
            self._transition(STATE_RESOLVING)
            release = await self.catalog.resolve(kind, tag)
            result.tag_name = release.tag_name

            self._transition(STATE_SELECTING)
            pair = select_assets(release, kind.spec.archive_suffix)
            result.archive_name = pair.archive.name

            destination = self.paths.ensure_destination(kind)
            cache_dir = self.paths.ensure_cache_dir()
            downloaded = self.downloader.plan(pair, cache_dir)

            self._transition(STATE_DOWNLOADING)
            result.downloads = await self.downloader.download_pair(kind, pair, downloaded, progress)

            if skip_checksum:
                logger.warning(f"Skipping checksum verification for {pair.archive.name}")
            else:
                self._transition(STATE_VERIFYING)
                await self._verify(downloaded)
                result.checksum_verified = True

            self._transition(STATE_EXTRACTING)
            result.extraction = await asyncio.to_thread(
                self.archive_handler.extract,
                downloaded.archive_path,
                destination
            )

        except BaseException as e:
            self.failure_reason = e
            logger.info(f"{LOG_OUTPUT} Install failed during {self.state}: {e}")
            self._transition(STATE_FAILED)
            raise

        finally:
            if downloaded is not None:
                failed = self.state == STATE_FAILED
                if not failed:
                    self._transition(STATE_CLEANING_UP)
                result.cleanup_performed = self._cleanup(downloaded)
                if not failed:
                    self._transition(STATE_DONE)
            elif self.state != STATE_FAILED:
                self._transition(STATE_DONE)

            result.final_state = self.state
            result.total_duration = time.time() - start_time

        logger.info(
            f"{LOG_OUTPUT} Installed {result.tag_name} into {result.destination} "
            f"in {result.total_duration:.1f}s"
        )
        logger.debug(f"Install summary: {result.to_dict()}")

        return result

    async def _verify(self, downloaded: DownloadedPair) -> None:
        """
        Compare the archive digest with the sidecar.

        Raises:
            HashMismatchError: On mismatch
            MalformedChecksumError, IoError: On unreadable input
        """
        checksum_text = await read_checksum_file(downloaded.checksum_path)
        expected, actual = await compute_digests(
            downloaded.archive_path, checksum_text, self.chunk_size
        )

        if actual != expected:
            raise HashMismatchError(expected, actual, downloaded.archive_path.name)

        logger.info(f"{LOG_OUTPUT} Checksum verified: {downloaded.archive_path.name}")

    def _cleanup(self, downloaded: DownloadedPair) -> bool:
        """
        Remove both temporary files, whether or not they were completed.

        Returns:
            True if every file is gone afterwards
        """
        clean = True
        for path in downloaded.paths():
            clean = self._remove_temp_file(path) and clean
        return clean

    @staticmethod
    def _remove_temp_file(path: Path) -> bool:
        try:
            path.unlink(missing_ok=True)
            logger.debug(f"Removed temporary file: {path}")
            return True
        except OSError as e:
            logger.warning(f"Failed to remove temporary file {path}: {e}")
            return False

    async def list_remote(
        self,
        kind: ProductKind,
        page_size: int = DEFAULT_PER_PAGE,
        page_number: int = DEFAULT_PAGE
    ) -> list[ReleaseMetadata]:
        """One page of published releases, newest first."""
        return await self.catalog.resolve_page(kind, page_size, page_number)

    async def close(self):
        """Release network resources."""
        await self.http_handler.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ['InstallCoordinator']
