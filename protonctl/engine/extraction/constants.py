# Path: protonctl/engine/extraction/constants.py
"""
Extraction Constants

Tar stream modes keyed by the archive's final file extension.
Streaming modes ('r|gz', 'r|xz') decompress and unpack in one forward pass.
"""

TAR_GZ_STREAM_MODE: str = 'r|gz'
TAR_XZ_STREAM_MODE: str = 'r|xz'

# Final extension -> tarfile stream mode
STREAM_MODE_BY_EXTENSION: dict[str, str] = {
    '.gz': TAR_GZ_STREAM_MODE,
    '.xz': TAR_XZ_STREAM_MODE,
}

# Python's tarfile extraction filter for untrusted archives
EXTRACTION_FILTER: str = 'data'


__all__ = [
    'TAR_GZ_STREAM_MODE',
    'TAR_XZ_STREAM_MODE',
    'STREAM_MODE_BY_EXTENSION',
    'EXTRACTION_FILTER',
]
