# Path: protonctl/engine/errors.py
"""
Install Pipeline Errors

One exception per failure kind. Every error records the pipeline stage
it was raised in; the original cause is chained with ``raise ... from``.
"""

from typing import Optional

from protonctl.constants import (
    STATE_RESOLVING,
    STATE_SELECTING,
    STATE_DOWNLOADING,
    STATE_VERIFYING,
    STATE_EXTRACTING,
)


class ProtonctlError(Exception):
    """Base class for every error surfaced to the CLI."""

    stage: Optional[str] = None

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class TransportError(ProtonctlError):
    """Network or HTTP failure talking to the catalog or asset endpoint."""

    stage = STATE_RESOLVING

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        url: Optional[str] = None,
        stage: Optional[str] = None
    ):
        super().__init__(message, stage)
        self.status = status
        self.url = url


class NotFoundError(ProtonctlError):
    """No release matches the requested tag."""

    stage = STATE_RESOLVING

    def __init__(self, tag: str, url: Optional[str] = None):
        super().__init__(f"Release not found: {tag}")
        self.tag = tag
        self.url = url


class AssetMissingError(ProtonctlError):
    """Release has no asset for a required role."""

    stage = STATE_SELECTING

    def __init__(self, role: str, suffix: str, tag: str = ''):
        where = f" in release {tag}" if tag else ''
        super().__init__(f"No {role} asset ending in '{suffix}'{where}")
        self.role = role
        self.suffix = suffix


class WriteFailedError(ProtonctlError):
    """A downloaded chunk could not be written to disk."""

    stage = STATE_DOWNLOADING


class IoError(ProtonctlError):
    """Local filesystem error outside of chunk writes."""


class HashMismatchError(ProtonctlError):
    """Computed digest differs from the checksum sidecar."""

    stage = STATE_VERIFYING

    def __init__(self, expected: str, actual: str, archive_name: str = ''):
        super().__init__(
            f"Hash mismatch for {archive_name or 'archive'}\n"
            f"expected: {expected}\n"
            f"actual:   {actual}"
        )
        self.expected = expected
        self.actual = actual


class MalformedChecksumError(ProtonctlError):
    """Checksum sidecar is shorter than a full digest."""

    stage = STATE_VERIFYING


class UnsupportedFormatError(ProtonctlError):
    """Archive extension does not map to a known decompressor."""

    stage = STATE_EXTRACTING


class ExtractFailedError(ProtonctlError):
    """Decompression or unpacking failed mid-stream."""

    stage = STATE_EXTRACTING


__all__ = [
    'ProtonctlError',
    'TransportError',
    'NotFoundError',
    'AssetMissingError',
    'WriteFailedError',
    'IoError',
    'HashMismatchError',
    'MalformedChecksumError',
    'UnsupportedFormatError',
    'ExtractFailedError',
]
