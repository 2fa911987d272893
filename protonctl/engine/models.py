# Path: protonctl/engine/models.py
"""
Release Models

Typed views of catalog release objects and of the asset pair an
install works with. Built from the catalog's JSON once and never mutated.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from protonctl.constants import ROLE_ARCHIVE, ROLE_CHECKSUM


@dataclass(frozen=True)
class AssetDescriptor:
    """
    One downloadable file attached to a release.

    Attributes:
        name: Asset file name (e.g. GE-Proton8-4.tar.gz)
        id: Catalog identifier used to build the download URL
        size: Size in bytes as reported by the catalog
    """
    name: str
    id: int
    size: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'AssetDescriptor':
        return cls(
            name=str(data['name']),
            id=int(data['id']),
            size=int(data.get('size') or 0),
        )


@dataclass(frozen=True)
class ReleaseMetadata:
    """
    A resolved release.

    Attributes:
        tag_name: Canonical release tag
        body: Change-log text (may contain markdown)
        html_url: Web page for the release
        assets: Assets in catalog order
    """
    tag_name: str
    body: str = ''
    html_url: str = ''
    assets: tuple[AssetDescriptor, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ReleaseMetadata':
        """
        Build from a catalog release object.

        Raises:
            KeyError, TypeError, ValueError: If required fields are missing or malformed
        """
        return cls(
            tag_name=str(data['tag_name']),
            body=data.get('body') or '',
            html_url=data.get('html_url') or '',
            assets=tuple(AssetDescriptor.from_dict(a) for a in data.get('assets') or []),
        )


@dataclass(frozen=True)
class AssetPair:
    """The archive asset and its checksum sidecar."""
    archive: AssetDescriptor
    checksum: AssetDescriptor

    @property
    def total_size(self) -> int:
        return self.archive.size + self.checksum.size

    def items(self) -> tuple[tuple[str, AssetDescriptor], ...]:
        """Assets by role, archive first."""
        return ((ROLE_ARCHIVE, self.archive), (ROLE_CHECKSUM, self.checksum))


@dataclass
class DownloadedPair:
    """
    Local paths of the two downloaded assets.

    Paths are planned before the transfers start so cleanup can find
    partially written files; ``*_done`` flip once a transfer completes.
    """
    archive_path: Path
    checksum_path: Path
    archive_done: bool = False
    checksum_done: bool = False

    @property
    def complete(self) -> bool:
        return self.archive_done and self.checksum_done

    def paths(self) -> tuple[Path, Path]:
        return (self.archive_path, self.checksum_path)

    def mark_done(self, role: str) -> None:
        if role == ROLE_ARCHIVE:
            self.archive_done = True
        elif role == ROLE_CHECKSUM:
            self.checksum_done = True

    def path_for(self, role: str) -> Optional[Path]:
        if role == ROLE_ARCHIVE:
            return self.archive_path
        if role == ROLE_CHECKSUM:
            return self.checksum_path
        return None


__all__ = [
    'AssetDescriptor',
    'ReleaseMetadata',
    'AssetPair',
    'DownloadedPair',
]
