# Path: protonctl/engine/extraction/__init__.py
"""
Extraction Module

Streamed extraction of .tar.gz and .tar.xz build archives.
"""

from protonctl.engine.extraction.archive_handler import (
    ArchiveHandler,
    detect_stream_mode,
)

__all__ = [
    'ArchiveHandler',
    'detect_stream_mode',
]
