# Path: protonctl/engine/integrity.py
"""
Integrity Verifier

Checks a downloaded archive against its checksum sidecar.

Sidecar format: "<128 hex chars of SHA-512><whitespace><file name>".
Only the fixed-width hex prefix is compared.
"""

import hashlib
from pathlib import Path

import aiofiles

from protonctl.core.logger import get_logger
from protonctl.constants import DEFAULT_CHUNK_SIZE, DIGEST_HEX_LENGTH, LOG_INPUT, LOG_OUTPUT
from protonctl.engine.errors import IoError, MalformedChecksumError
from protonctl.engine.stream_handler import ChunkIterator

logger = get_logger(__name__, 'engine')


def expected_digest(checksum_text: str) -> str:
    """
    Extract the hex digest from sidecar text.

    Raises:
        MalformedChecksumError: If the text is shorter than a full digest
    """
    if len(checksum_text) < DIGEST_HEX_LENGTH:
        raise MalformedChecksumError(
            f"Checksum text has {len(checksum_text)} characters, "
            f"expected at least {DIGEST_HEX_LENGTH}"
        )
    return checksum_text[:DIGEST_HEX_LENGTH]


async def sha512_file(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Stream ``path`` through SHA-512.

    Returns:
        Lowercase hex digest

    Raises:
        IoError: If the file cannot be opened or read
    """
    hasher = hashlib.sha512()
    try:
        async with ChunkIterator(path, chunk_size=chunk_size) as chunks:
            async for chunk in chunks:
                hasher.update(chunk)
    except OSError as e:
        raise IoError(f"Cannot read {path}: {e}") from e
    return hasher.hexdigest()


async def read_checksum_file(path: Path) -> str:
    """Read sidecar text, raising IoError on failure."""
    try:
        async with aiofiles.open(path, 'r', encoding='utf-8', errors='replace') as f:
            return await f.read()
    except OSError as e:
        raise IoError(f"Cannot read checksum file {path}: {e}") from e


async def compute_digests(
    archive_path: Path,
    expected_checksum_text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> tuple[str, str]:
    """
    Expected and actual digests for ``archive_path``.

    Raises:
        MalformedChecksumError: If the sidecar text is too short
        IoError: If the archive cannot be read
    """
    expected = expected_digest(expected_checksum_text)
    logger.info(f"{LOG_INPUT} Checking hash of {archive_path.name}")
    return expected, await sha512_file(archive_path, chunk_size)


async def verify(
    archive_path: Path,
    expected_checksum_text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> bool:
    """
    Verify ``archive_path`` against sidecar text.

    A mismatch is reported as False; the caller decides whether it is fatal.

    Raises:
        MalformedChecksumError: If the sidecar text is too short
        IoError: If the archive cannot be read
    """
    expected, actual = await compute_digests(archive_path, expected_checksum_text, chunk_size)
    matches = actual == expected

    if matches:
        logger.info(f"{LOG_OUTPUT} Hash OK: {archive_path.name}")
    else:
        logger.warning(f"{LOG_OUTPUT} Hash mismatch: {archive_path.name}")

    return matches


__all__ = ['verify', 'compute_digests', 'sha512_file', 'expected_digest', 'read_checksum_file']
