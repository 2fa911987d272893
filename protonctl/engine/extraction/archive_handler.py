# Path: protonctl/engine/extraction/archive_handler.py
"""
Archive Handler

Streamed tar extraction for compatibility-tool build archives.
Supports .tar.gz and .tar.xz; the decompressor is chosen solely from
the archive's final file extension.

Architecture:
- Format detection before any byte is read
- Single pass: decompress and untar together, no intermediate file
- Per-member path traversal check plus tarfile's 'data' filter
- No rollback: a failed extraction leaves destination partially populated
"""

import lzma
import tarfile
import time
import zlib
from pathlib import Path

from protonctl.core.logger import get_logger
from protonctl.constants import LOG_INPUT, LOG_OUTPUT, LOG_PROCESS, STATE_EXTRACTING
from protonctl.engine.errors import ExtractFailedError, IoError, UnsupportedFormatError
from protonctl.engine.result import ExtractionResult
from protonctl.engine.extraction.constants import (
    EXTRACTION_FILTER,
    STREAM_MODE_BY_EXTENSION,
)

logger = get_logger(__name__, 'extraction')

STREAM_ERRORS = (tarfile.TarError, OSError, EOFError, lzma.LZMAError, zlib.error)


def detect_stream_mode(archive_path: Path) -> str:
    """
    Map the archive's final extension to a tarfile stream mode.

    Args:
        archive_path: Path to archive

    Returns:
        Mode string for tarfile.open()

    Raises:
        UnsupportedFormatError: For any other or missing extension
    """
    suffix = archive_path.suffix.lower()
    mode = STREAM_MODE_BY_EXTENSION.get(suffix)

    if mode is None:
        raise UnsupportedFormatError(
            f"Unsupported archive format: {archive_path.name} "
            f"(expected one of: {', '.join(sorted(STREAM_MODE_BY_EXTENSION))})"
        )

    logger.debug(f"Detected format: {suffix} -> {mode}")
    return mode


class ArchiveHandler:
    """
    Tar archive extractor.

    Example:
        handler = ArchiveHandler()
        result = handler.extract(
            archive_path=cache_dir / 'GE-Proton8-4.tar.gz',
            target_dir=home / '.local/share/Steam/compatibilitytools.d'
        )
    """

    def extract(self, archive_path: Path, target_dir: Path) -> ExtractionResult:
        """
        Decompress and unpack ``archive_path`` into ``target_dir``.

        Args:
            archive_path: Path to archive file
            target_dir: Existing destination directory

        Returns:
            ExtractionResult

        Raises:
            UnsupportedFormatError: If the extension is not .gz or .xz
            IoError: If target_dir does not exist
            ExtractFailedError: If decoding or unpacking fails
        """
        logger.info(f"{LOG_INPUT} Extracting: {archive_path.name}")
        logger.info(f"{LOG_PROCESS} Target: {target_dir}")

        mode = detect_stream_mode(archive_path)

        if not target_dir.is_dir():
            raise IoError(f"Destination directory does not exist: {target_dir}", stage=STATE_EXTRACTING)

        start_time = time.time()
        result = ExtractionResult(archive_path=archive_path, extract_directory=target_dir)
        root = target_dir.resolve()
        top_level: dict[str, None] = {}

        try:
            with tarfile.open(archive_path, mode) as tf:
                for member in tf:
                    self._validate_path_traversal(root / member.name, root)

                    tf.extract(member, target_dir, filter=EXTRACTION_FILTER)

                    result.members_extracted += 1
                    top_level.setdefault(Path(member.name).parts[0], None)

        except ExtractFailedError:
            raise

        except STREAM_ERRORS as e:
            raise ExtractFailedError(
                f"Failed to unpack {archive_path.name}: {e}"
            ) from e

        result.top_level = list(top_level)
        result.duration = time.time() - start_time

        logger.info(
            f"{LOG_OUTPUT} Extraction complete: {result.members_extracted} items "
            f"in {result.duration:.2f}s"
        )

        return result

    def _validate_path_traversal(self, member_path: Path, target_dir: Path) -> None:
        """
        Reject members that would land outside the target directory.

        Raises:
            ExtractFailedError: If the path escapes target_dir
        """
        try:
            member_path.resolve().relative_to(target_dir)
        except ValueError as e:
            logger.info(f"Unsafe path detected: {member_path}")
            raise ExtractFailedError(f"Archive contains unsafe path: {member_path}") from e

    @staticmethod
    def is_supported(archive_path: Path) -> bool:
        return archive_path.suffix.lower() in STREAM_MODE_BY_EXTENSION

    @staticmethod
    def get_supported_formats() -> list[str]:
        return list(STREAM_MODE_BY_EXTENSION)


__all__ = ['ArchiveHandler', 'detect_stream_mode']
