# Path: protonctl/tests/fixtures.py
"""
Test Fixtures for Protonctl

In-memory release archives and a fake release catalog served by a
real local aiohttp server.

Contains:
- Tar archive builders (.tar.gz and .tar.xz)
- SHA-512 sidecar text in the published "<digest>  <name>" layout
- FakeCatalog: GitHub-releases-shaped endpoints with request recording
"""

import asyncio
import hashlib
import io
import random
import tarfile
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from aiohttp import web
from aiohttp.test_utils import TestServer

from protonctl.core.config_loader import ConfigLoader
from protonctl.core.data_paths import InstallPaths


def build_tar(members: dict[str, bytes], compression: str = 'gz') -> bytes:
    """
    Build a tar archive in memory.

    Args:
        members: Archive path -> file content
        compression: 'gz' or 'xz'
    """
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode=f'w:{compression}') as tf:
        for name, content in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def sha512_sidecar(data: bytes, name: str) -> bytes:
    """Checksum file content as published next to each release archive."""
    return f"{hashlib.sha512(data).hexdigest()}  {name}\n".encode('utf-8')


def build_files(version: str, payload_size: int = 0) -> dict[str, bytes]:
    """
    A minimal build tree rooted at ``version/``.

    ``payload_size`` adds an incompressible library file, so the
    compressed archive is about that large.
    """
    files = {
        f'{version}/proton': b'#!/usr/bin/env python3\n',
        f'{version}/version': f'1700000000 {version}\n'.encode('utf-8'),
        f'{version}/files/bin/wine': b'\x7fELF fake wine binary',
    }
    if payload_size:
        files[f'{version}/files/lib/wine.so'] = random.Random(version).randbytes(payload_size)
    return files


@dataclass
class FakeRelease:
    """One release with its asset payloads."""
    tag_name: str
    assets: dict[str, bytes]
    body: str = ''
    failing_assets: set[str] = field(default_factory=set)
    # Serve bodies in slices of this size, one event-loop turn apart (0: single write)
    stream_chunk: int = 0


class FakeCatalog:
    """
    Release catalog double.

    Releases are kept per "owner/project" in newest-first order.
    Every request's path and query are recorded for assertions.

    Example:
        catalog = FakeCatalog()
        catalog.add_release('GloriousEggroll/proton-ge-custom', release)
        async with catalog.serve() as base_url:
            ...
    """

    def __init__(self):
        self.releases: dict[str, list[FakeRelease]] = {}
        self.requests: list[tuple[str, dict[str, str]]] = []
        self.user_agents: list[str] = []
        self._assets: dict[int, tuple[str, FakeRelease]] = {}
        self._next_id = 1000

    def add_release(self, project_path: str, release: FakeRelease) -> FakeRelease:
        self.releases.setdefault(project_path, []).append(release)
        for name in release.assets:
            self._assets[self._next_id] = (name, release)
            self._next_id += 1
        return release

    def _release_json(self, release: FakeRelease, project_path: str) -> dict:
        assets = [
            {'name': name, 'id': asset_id, 'size': len(rel.assets[name])}
            for asset_id, (name, rel) in self._assets.items()
            if rel is release
        ]
        return {
            'tag_name': release.tag_name,
            'html_url': f'https://github.com/{project_path}/releases/tag/{release.tag_name}',
            'body': release.body,
            'assets': assets,
        }

    def _record(self, request: web.Request) -> str:
        self.requests.append((request.path, dict(request.query)))
        self.user_agents.append(request.headers.get('User-Agent', ''))
        return f"{request.match_info['owner']}/{request.match_info['project']}"

    async def _list(self, request: web.Request) -> web.Response:
        project_path = self._record(request)
        per_page = int(request.query.get('per_page', 30))
        page = int(request.query.get('page', 1))
        releases = self.releases.get(project_path, [])
        chunk = releases[(page - 1) * per_page:page * per_page]
        return web.json_response([self._release_json(r, project_path) for r in chunk])

    async def _latest(self, request: web.Request) -> web.Response:
        project_path = self._record(request)
        releases = self.releases.get(project_path, [])
        if not releases:
            return web.json_response({'message': 'Not Found'}, status=404)
        return web.json_response(self._release_json(releases[0], project_path))

    async def _by_tag(self, request: web.Request) -> web.Response:
        project_path = self._record(request)
        tag = request.match_info['tag']
        for release in self.releases.get(project_path, []):
            if release.tag_name == tag:
                return web.json_response(self._release_json(release, project_path))
        return web.json_response({'message': 'Not Found'}, status=404)

    async def _asset(self, request: web.Request) -> web.Response:
        self._record(request)
        entry = self._assets.get(int(request.match_info['asset_id']))
        if entry is None:
            return web.Response(status=404)
        name, release = entry
        if name in release.failing_assets:
            return web.Response(status=500, text='upstream failure')
        if release.stream_chunk:
            return await self._stream(request, release.assets[name], release.stream_chunk)
        return web.Response(body=release.assets[name], content_type='application/octet-stream')

    async def _stream(self, request: web.Request, body: bytes, chunk: int) -> web.StreamResponse:
        response = web.StreamResponse(headers={'Content-Type': 'application/octet-stream'})
        response.content_length = len(body)
        await response.prepare(request)
        for offset in range(0, len(body), chunk):
            await response.write(body[offset:offset + chunk])
            await asyncio.sleep(0)
        await response.write_eof()
        return response

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get('/{owner}/{project}/releases', self._list)
        app.router.add_get('/{owner}/{project}/releases/latest', self._latest)
        app.router.add_get('/{owner}/{project}/releases/tags/{tag}', self._by_tag)
        app.router.add_get('/{owner}/{project}/releases/assets/{asset_id}', self._asset)
        return app

    @asynccontextmanager
    async def serve(self):
        """Serve the catalog on a local port, yielding its base URL."""
        async with TestServer(self.app()) as server:
            yield str(server.make_url('')).rstrip('/')


def proton_release(
    version: str = 'GE-Proton8-4',
    corrupt_checksum: bool = False,
    failing_assets: Optional[set[str]] = None,
    body: str = '',
    payload_size: int = 0,
    stream_chunk: int = 0
) -> FakeRelease:
    """A Proton-GE style release: .tar.gz archive plus .sha512sum sidecar."""
    archive_name = f'{version}.tar.gz'
    archive = build_tar(build_files(version, payload_size), 'gz')
    sidecar = sha512_sidecar(b'tampered' if corrupt_checksum else archive, archive_name)
    return FakeRelease(
        tag_name=version,
        assets={
            archive_name: archive,
            f'{version}.sha512sum': sidecar,
        },
        body=body,
        failing_assets=failing_assets or set(),
        stream_chunk=stream_chunk,
    )


def wine_release(version: str = 'GE-Proton8-26') -> FakeRelease:
    """A Wine-GE style release: .tar.xz archive plus .sha512sum sidecar."""
    build = f'lutris-{version}-x86_64'
    archive_name = f'wine-{build}.tar.xz'
    archive = build_tar(build_files(build), 'xz')
    return FakeRelease(
        tag_name=version,
        assets={
            archive_name: archive,
            f'wine-{build}.sha512sum': sha512_sidecar(archive, archive_name),
        },
    )


def make_config(home_dir: Path, catalog_url: str = 'http://127.0.0.1:9', **overrides) -> ConfigLoader:
    """Configuration isolated from the user's environment and .env file."""
    values = {
        'home_dir': home_dir,
        'catalog_base_url': catalog_url,
        'log_console': False,
        'log_dir': None,
        'flatpak': False,
    }
    values.update(overrides)
    return ConfigLoader(overrides=values, load_env_file=False)


def make_paths(home_dir: Path, flatpak: bool = False) -> InstallPaths:
    return InstallPaths(home_dir=home_dir, flatpak=flatpak)


def files_under(directory: Path) -> list[str]:
    """Relative paths of every file below ``directory``, sorted."""
    if not directory.exists():
        return []
    return sorted(
        str(p.relative_to(directory)) for p in directory.rglob('*') if p.is_file()
    )
