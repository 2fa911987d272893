# Path: protonctl/engine/stream_handler.py
"""
Stream Handler

Memory-efficient streaming for large asset downloads.
Writes each chunk to disk as it arrives without buffering the body.

Architecture:
- Chunk-based streaming in receipt order
- Aggregated progress through a shared ProgressTracker
- Async file I/O via aiofiles
"""

from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles

from protonctl.core.logger import get_logger
from protonctl.constants import DEFAULT_CHUNK_SIZE, LOG_PROCESS
from protonctl.engine.errors import WriteFailedError
from protonctl.engine.progress import ProgressTracker

logger = get_logger(__name__, 'engine')

PROGRESS_LOG_EVERY = 100  # chunks


class StreamHandler:
    """
    Handles streaming one response body to disk.

    Example:
        handler = StreamHandler()
        written = await handler.stream_to_file(
            response.content.iter_chunked(65536),
            cache_dir / asset.name,
            progress=tracker
        )
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize stream handler.

        Args:
            chunk_size: Size of chunks to read/write (bytes)
        """
        self.chunk_size = chunk_size
        self.bytes_written = 0
        self.chunks_written = 0

    async def stream_to_file(
        self,
        response_stream: AsyncIterator[bytes],
        output_path: Path,
        progress: Optional[ProgressTracker] = None,
        total_size: Optional[int] = None
    ) -> int:
        """
        Stream chunks to ``output_path``.

        Errors raised by ``response_stream`` itself propagate unchanged;
        only local write failures are converted.

        Args:
            response_stream: Async iterator of byte chunks
            output_path: Path where the file will be written
            progress: Shared tracker to advance per chunk
            total_size: Expected size, used for debug logging only

        Returns:
            Total bytes written

        Raises:
            WriteFailedError: If the file cannot be opened or a chunk write fails
        """
        logger.info(f"{LOG_PROCESS} Streaming to: {output_path.name}")

        self.bytes_written = 0
        self.chunks_written = 0

        try:
            f = await aiofiles.open(output_path, 'wb')
        except OSError as e:
            raise WriteFailedError(f"Cannot open {output_path} for writing: {e}") from e

        try:
            async for chunk in response_stream:
                if not chunk:
                    continue

                try:
                    await f.write(chunk)
                except OSError as e:
                    raise WriteFailedError(
                        f"Failed to write chunk to {output_path.name}: {e}"
                    ) from e

                self.bytes_written += len(chunk)
                self.chunks_written += 1

                if progress:
                    progress.advance(len(chunk))

                if self.chunks_written % PROGRESS_LOG_EVERY == 0:
                    if total_size:
                        percent = (self.bytes_written / total_size) * 100
                        logger.debug(
                            f"{LOG_PROCESS} {output_path.name}: {percent:.1f}% "
                            f"({self.bytes_written}/{total_size} bytes)"
                        )
                    else:
                        logger.debug(
                            f"{LOG_PROCESS} {output_path.name}: {self.bytes_written} bytes"
                        )
        finally:
            try:
                await f.close()
            except OSError as e:
                logger.warning(f"Cannot close {output_path.name}: {e}")

        logger.info(
            f"{LOG_PROCESS} Stream complete: {self.bytes_written} bytes "
            f"in {self.chunks_written} chunks"
        )

        return self.bytes_written


class ChunkIterator:
    """
    Async iterator for reading a file in chunks.

    Used by the integrity verifier to hash archives without loading them.

    Example:
        async with ChunkIterator(file_path) as chunks:
            async for chunk in chunks:
                hasher.update(chunk)
    """

    def __init__(self, file_path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.file_path = file_path
        self.chunk_size = chunk_size
        self._file_handle = None

    async def __aenter__(self):
        self._file_handle = await aiofiles.open(self.file_path, 'rb')
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._file_handle:
            await self._file_handle.close()

    def __aiter__(self):
        return self

    async def __anext__(self) -> bytes:
        if not self._file_handle:
            raise RuntimeError("File not opened. Use async context manager.")

        chunk = await self._file_handle.read(self.chunk_size)

        if not chunk:
            raise StopAsyncIteration

        return chunk


__all__ = ['StreamHandler', 'ChunkIterator']
