# Path: protonctl/engine/result.py
"""
Install Result Objects

Structured results for download and install operations.

Architecture:
- DownloadResult: Single asset download
- ExtractionResult: Single archive extraction
- InstallResult: Complete resolve+download+verify+extract workflow
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional


@dataclass
class DownloadResult:
    """
    Result of a single asset download.

    Attributes:
        asset_name: Name of the downloaded asset
        file_path: Path where the asset was written
        file_size: Bytes written
        url: Source URL
        duration: Download duration in seconds
        chunks_downloaded: Number of chunks written
        status_code: HTTP status code
    """
    asset_name: str
    file_path: Optional[Path] = None
    file_size: int = 0
    url: str = ''
    duration: float = 0.0
    chunks_downloaded: int = 0
    status_code: Optional[int] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def download_speed_mbps(self) -> float:
        """Calculate download speed in MB/s."""
        if self.duration > 0 and self.file_size > 0:
            mb = self.file_size / (1024 * 1024)
            return mb / self.duration
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            'asset_name': self.asset_name,
            'file_path': str(self.file_path) if self.file_path else None,
            'file_size': self.file_size,
            'url': self.url,
            'duration': self.duration,
            'chunks_downloaded': self.chunks_downloaded,
            'status_code': self.status_code,
            'download_speed_mbps': self.download_speed_mbps,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class ExtractionResult:
    """
    Result of archive extraction.

    Attributes:
        archive_path: Path to archive file
        extract_directory: Path where members were unpacked
        members_extracted: Number of tar members written
        top_level: Distinct top-level entries created (usually one build directory)
        duration: Extraction duration in seconds
    """
    archive_path: Path
    extract_directory: Path
    members_extracted: int = 0
    top_level: list[str] = field(default_factory=list)
    duration: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            'archive_path': str(self.archive_path),
            'extract_directory': str(self.extract_directory),
            'members_extracted': self.members_extracted,
            'top_level': self.top_level,
            'duration': self.duration,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class InstallResult:
    """
    Complete result of one install.

    Attributes:
        tag_name: Resolved release tag
        destination: Directory the archive was unpacked into
        archive_name: Name of the installed archive asset
        downloads: Per-asset download results (archive first)
        extraction: Extraction result
        checksum_verified: False only when verification was skipped
        final_state: Last pipeline state reached
        total_duration: Wall time in seconds
        cleanup_performed: Whether both temporary files were removed
    """
    tag_name: str
    destination: Path
    archive_name: str = ''
    downloads: list[DownloadResult] = field(default_factory=list)
    extraction: Optional[ExtractionResult] = None
    checksum_verified: bool = False
    final_state: Optional[str] = None
    total_duration: float = 0.0
    cleanup_performed: bool = False
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def bytes_downloaded(self) -> int:
        return sum(d.file_size for d in self.downloads)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            'tag_name': self.tag_name,
            'destination': str(self.destination),
            'archive_name': self.archive_name,
            'downloads': [d.to_dict() for d in self.downloads],
            'extraction': self.extraction.to_dict() if self.extraction else None,
            'checksum_verified': self.checksum_verified,
            'final_state': self.final_state,
            'bytes_downloaded': self.bytes_downloaded,
            'total_duration': self.total_duration,
            'cleanup_performed': self.cleanup_performed,
            'timestamp': self.timestamp.isoformat(),
        }


__all__ = [
    'DownloadResult',
    'ExtractionResult',
    'InstallResult',
]
