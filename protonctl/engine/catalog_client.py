# Path: protonctl/engine/catalog_client.py
"""
Release Catalog Client

Resolves release tags to release metadata by querying the hosted
release catalog (GitHub releases API layout).

Endpoints:
- {base}/{owner}/{project}/releases?per_page=N&page=P
- {base}/{owner}/{project}/releases/latest
- {base}/{owner}/{project}/releases/tags/{tag}
- {base}/{owner}/{project}/releases/assets/{id}
"""

from typing import Any
from urllib.parse import quote

from protonctl.core.logger import get_logger
from protonctl.constants import (
    DEFAULT_CATALOG_URL,
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    HTTP_NOT_FOUND,
    LATEST_TAG,
    LOG_INPUT,
    LOG_OUTPUT,
    MAX_PER_PAGE,
)
from protonctl.engine.errors import NotFoundError, TransportError
from protonctl.engine.models import AssetDescriptor, ReleaseMetadata
from protonctl.engine.product_kind import ProductKind
from protonctl.engine.protocol_handlers import HTTPHandler

logger = get_logger(__name__, 'engine')


def clamp_page_size(page_size: int) -> int:
    """Keep ``per_page`` within 1..MAX_PER_PAGE."""
    return max(1, min(int(page_size), MAX_PER_PAGE))


class CatalogClient:
    """
    Read-only client for the release catalog.

    Example:
        catalog = CatalogClient(http, config.get('catalog_base_url'))
        release = await catalog.resolve(ProductKind.PROTON, 'GE-Proton8-4')
        releases = await catalog.resolve_page(ProductKind.WINE, 10, 1)
    """

    def __init__(self, http_handler: HTTPHandler, base_url: str = DEFAULT_CATALOG_URL):
        self.http = http_handler
        self.base_url = base_url.rstrip('/')

    def releases_url(self, kind: ProductKind) -> str:
        return f"{self.base_url}/{kind.spec.catalog_path}/releases"

    def asset_url(self, kind: ProductKind, asset: AssetDescriptor) -> str:
        return f"{self.releases_url(kind)}/assets/{asset.id}"

    async def resolve(self, kind: ProductKind, tag: str) -> ReleaseMetadata:
        """
        Resolve a release tag. The tag ``latest`` resolves the newest release.

        Args:
            kind: Product family
            tag: Release tag (non-empty)

        Returns:
            ReleaseMetadata for the tag

        Raises:
            ValueError: If tag is empty
            NotFoundError: If the catalog has no such release
            TransportError: On network, HTTP or decoding failure
        """
        tag = tag.strip() if tag else ''
        if not tag:
            raise ValueError("Release tag must not be empty")

        if tag.lower() == LATEST_TAG:
            return await self.resolve_latest(kind)

        url = f"{self.releases_url(kind)}/tags/{quote(tag, safe='')}"
        logger.info(f"{LOG_INPUT} Resolving {kind} release {tag}")

        release = self._parse_release(await self._get(url, tag))

        logger.info(f"{LOG_OUTPUT} Resolved {release.tag_name} ({len(release.assets)} assets)")
        return release

    async def resolve_latest(self, kind: ProductKind) -> ReleaseMetadata:
        """Resolve the newest published release."""
        url = f"{self.releases_url(kind)}/latest"
        logger.info(f"{LOG_INPUT} Resolving latest {kind} release")

        release = self._parse_release(await self._get(url, LATEST_TAG))

        logger.info(f"{LOG_OUTPUT} Latest {kind} release is {release.tag_name}")
        return release

    async def resolve_page(
        self,
        kind: ProductKind,
        page_size: int = DEFAULT_PER_PAGE,
        page_number: int = DEFAULT_PAGE
    ) -> list[ReleaseMetadata]:
        """
        Fetch one page of releases, newest first.

        ``page_size`` is clamped to MAX_PER_PAGE before the request is built.
        """
        per_page = clamp_page_size(page_size)
        page = max(1, int(page_number))
        url = self.releases_url(kind)

        logger.info(f"{LOG_INPUT} Listing {kind} releases (per_page={per_page}, page={page})")

        data = await self.http.get_json(url, params={'per_page': per_page, 'page': page})
        if not isinstance(data, list):
            raise TransportError(f"Expected a list of releases from {url}", url=url)

        releases = [self._parse_release(item) for item in data]

        logger.info(f"{LOG_OUTPUT} Received {len(releases)} releases")
        return releases

    async def _get(self, url: str, tag: str) -> Any:
        try:
            return await self.http.get_json(url)
        except TransportError as e:
            if e.status == HTTP_NOT_FOUND:
                raise NotFoundError(tag, url=url) from e
            raise

    def _parse_release(self, data: Any) -> ReleaseMetadata:
        try:
            return ReleaseMetadata.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed release object: {e}") from e


__all__ = ['CatalogClient', 'clamp_page_size']
