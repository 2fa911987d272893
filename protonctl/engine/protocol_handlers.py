# Path: protonctl/engine/protocol_handlers.py
"""
Protocol Handlers

HTTP/HTTPS handler shared by the catalog client and the asset downloader.
Handles headers, timeouts and connection management.

Architecture:
- Async HTTP client (aiohttp) with one session per run
- Fixed identifying User-Agent on every request
- Connect and per-read timeouts, no total timeout
- Single attempt per request; failures become TransportError
"""

import asyncio
import time
from pathlib import Path
from typing import Any, Optional

import aiohttp

from protonctl.core.config_loader import ConfigLoader
from protonctl.core.logger import get_logger
from protonctl.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
    HEADER_USER_AGENT,
    HEADER_ACCEPT,
    ACCEPT_JSON,
    ACCEPT_OCTET_STREAM,
    HTTP_OK,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
    STATE_DOWNLOADING,
)
from protonctl.engine.errors import TransportError
from protonctl.engine.progress import ProgressTracker
from protonctl.engine.result import DownloadResult
from protonctl.engine.stream_handler import StreamHandler

logger = get_logger(__name__, 'engine')

MAX_CONCURRENT_CONNECTIONS = 4


class HTTPHandler:
    """
    HTTP/HTTPS handler with JSON and streaming download support.

    Example:
        async with HTTPHandler(config) as http:
            data = await http.get_json(url, params={'per_page': 10})
            result = await http.download(asset_url, cache_dir / 'file.tar.gz')
    """

    def __init__(self, config: ConfigLoader):
        """
        Initialize HTTP handler.

        Args:
            config: Loaded configuration
        """
        self.config = config

        self.chunk_size = config.get('chunk_size', DEFAULT_CHUNK_SIZE)
        self.connect_timeout = config.get('connect_timeout', DEFAULT_CONNECT_TIMEOUT)
        self.read_timeout = config.get('read_timeout', DEFAULT_READ_TIMEOUT)
        self.user_agent = config.get('user_agent', DEFAULT_USER_AGENT)

        self._session: Optional[aiohttp.ClientSession] = None

    async def get_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        GET request returning decoded JSON.

        Args:
            url: URL to fetch
            params: Optional query parameters

        Returns:
            Decoded JSON body

        Raises:
            TransportError: On network failure, non-200 status or undecodable body
        """
        logger.debug(f"{LOG_INPUT} GET {url} {params or ''}")

        session = await self._get_session()

        try:
            async with session.get(
                url,
                params=params,
                headers=self._build_headers(ACCEPT_JSON)
            ) as response:
                if response.status != HTTP_OK:
                    raise TransportError(
                        f"HTTP {response.status} from {url}",
                        status=response.status,
                        url=url
                    )

                data = await response.json(content_type=None)

        except asyncio.TimeoutError as e:
            raise TransportError(f"Timeout requesting {url}", url=url) from e

        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        except ValueError as e:
            raise TransportError(f"Invalid JSON from {url}: {e}", url=url) from e

        logger.debug(f"{LOG_OUTPUT} Received JSON from {url}")
        return data

    async def download(
        self,
        url: str,
        output_path: Path,
        progress: Optional[ProgressTracker] = None,
        expected_size: Optional[int] = None
    ) -> DownloadResult:
        """
        Stream a binary asset from ``url`` to ``output_path``.

        Args:
            url: Asset download endpoint
            output_path: Destination path
            progress: Shared tracker advanced per chunk
            expected_size: Size from the catalog, for logging

        Returns:
            DownloadResult with download statistics

        Raises:
            TransportError: On network failure or non-200 status
            WriteFailedError: If writing to disk fails
        """
        logger.info(f"{LOG_INPUT} Downloading: {url}")
        logger.info(f"{LOG_INPUT} Output: {output_path}")

        start_time = time.time()
        result = DownloadResult(asset_name=output_path.name, url=url, file_path=output_path)

        session = await self._get_session()

        try:
            async with session.get(
                url,
                headers=self._build_headers(ACCEPT_OCTET_STREAM)
            ) as response:
                result.status_code = response.status

                if response.status != HTTP_OK:
                    raise TransportError(
                        f"HTTP {response.status} downloading {output_path.name}",
                        status=response.status,
                        url=url,
                        stage=STATE_DOWNLOADING
                    )

                total_size = response.content_length or expected_size
                if total_size:
                    logger.info(f"{LOG_PROCESS} File size: {total_size} bytes")

                stream_handler = StreamHandler(chunk_size=self.chunk_size)
                bytes_written = await stream_handler.stream_to_file(
                    response.content.iter_chunked(self.chunk_size),
                    output_path,
                    progress=progress,
                    total_size=total_size
                )

                result.file_size = bytes_written
                result.chunks_downloaded = stream_handler.chunks_written

        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Timeout downloading {output_path.name}", url=url, stage=STATE_DOWNLOADING
            ) from e

        except aiohttp.ClientError as e:
            raise TransportError(
                f"Download of {output_path.name} failed: {e}", url=url, stage=STATE_DOWNLOADING
            ) from e

        result.duration = time.time() - start_time

        logger.info(
            f"{LOG_OUTPUT} Download complete: {result.file_size} bytes "
            f"in {result.duration:.2f}s "
            f"({result.download_speed_mbps:.2f} MB/s)"
        )

        return result

    def _build_headers(self, accept: str) -> dict[str, str]:
        return {
            HEADER_USER_AGENT: self.user_agent,
            HEADER_ACCEPT: accept,
        }

    async def _get_session(self) -> aiohttp.ClientSession:
        """
        Get or create aiohttp session.

        Returns:
            ClientSession instance
        """
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=MAX_CONCURRENT_CONNECTIONS)

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(
                    total=None,
                    connect=self.connect_timeout,
                    sock_read=self.read_timeout
                )
            )

        return self._session

    async def close(self):
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ['HTTPHandler']
