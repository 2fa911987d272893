# Path: protonctl/engine/product_kind.py
"""
Product Kinds

The closed set of compatibility-tool families protonctl can manage,
with one table row per kind holding every per-kind value:
catalog owner/project, archive suffix and destination subpaths.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProductKind(str, Enum):
    """Which upstream project family an operation targets."""

    PROTON = 'proton'
    WINE = 'wine'
    ULWGL = 'ulwgl'

    def __str__(self) -> str:
        return self.value

    @property
    def spec(self) -> 'ProductSpec':
        return PRODUCT_SPECS[self]

    @classmethod
    def from_name(cls, name: str) -> 'ProductKind':
        """Parse a CLI value (case-insensitive)."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ', '.join(kind.value for kind in cls)
            raise ValueError(f"Invalid product kind: {name} (expected one of: {valid})")


@dataclass(frozen=True)
class ProductSpec:
    """
    Per-kind settings.

    Attributes:
        owner: Catalog owner (GitHub organisation or user)
        project: Catalog project name
        archive_suffix: Name suffix of the build archive asset
        destination_subpath: Install directory relative to home
        flatpak_subpath: Install directory when the host app runs as a flatpak
    """
    owner: str
    project: str
    archive_suffix: str
    destination_subpath: str
    flatpak_subpath: Optional[str] = None

    @property
    def catalog_path(self) -> str:
        return f"{self.owner}/{self.project}"

    def destination(self, flatpak: bool = False) -> str:
        if flatpak and self.flatpak_subpath:
            return self.flatpak_subpath
        return self.destination_subpath


PRODUCT_SPECS: dict[ProductKind, ProductSpec] = {
    ProductKind.PROTON: ProductSpec(
        owner='GloriousEggroll',
        project='proton-ge-custom',
        archive_suffix='.tar.gz',
        destination_subpath='.local/share/Steam/compatibilitytools.d',
        flatpak_subpath='.var/app/com.valvesoftware.Steam/.local/share/Steam/compatibilitytools.d',
    ),
    ProductKind.WINE: ProductSpec(
        owner='GloriousEggroll',
        project='wine-ge-custom',
        archive_suffix='.tar.xz',
        destination_subpath='.local/share/lutris/runners/wine',
        flatpak_subpath='.var/app/net.lutris.Lutris/data/lutris/runners/wine',
    ),
    ProductKind.ULWGL: ProductSpec(
        owner='Open-Wine-Components',
        project='ULWGL-Proton',
        archive_suffix='.tar.gz',
        destination_subpath='.local/share/ULWGL-Proton',
    ),
}


__all__ = ['ProductKind', 'ProductSpec', 'PRODUCT_SPECS']
