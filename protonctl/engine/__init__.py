# Path: protonctl/engine/__init__.py
"""
Protonctl Engine Module

Install pipeline components.

Architecture:
- CatalogClient: Resolves release tags
- select_assets: Picks archive + checksum
- AssetDownloader: Concurrent transfers into the cache
- integrity: SHA-512 verification
- extraction.ArchiveHandler: Streamed tar extraction
- InstallCoordinator: State machine tying the stages together

Only dependency-free types are exported here; import the pipeline
components from their modules.
"""

from protonctl.engine.errors import (
    ProtonctlError,
    TransportError,
    NotFoundError,
    AssetMissingError,
    WriteFailedError,
    IoError,
    HashMismatchError,
    MalformedChecksumError,
    UnsupportedFormatError,
    ExtractFailedError,
)
from protonctl.engine.product_kind import ProductKind, ProductSpec, PRODUCT_SPECS
from protonctl.engine.models import (
    AssetDescriptor,
    ReleaseMetadata,
    AssetPair,
    DownloadedPair,
)
from protonctl.engine.result import (
    DownloadResult,
    ExtractionResult,
    InstallResult,
)

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
    'ProductKind',
    'ProductSpec',
    'PRODUCT_SPECS',
    'AssetDescriptor',
    'ReleaseMetadata',
    'AssetPair',
    'DownloadedPair',
    'DownloadResult',
    'ExtractionResult',
    'InstallResult',
]
