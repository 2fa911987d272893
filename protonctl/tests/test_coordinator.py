# Path: protonctl/tests/test_coordinator.py
"""
End-to-end install tests against a local fake catalog.

Covers the state machine outcomes:
- success: build unpacked, cache left empty
- hash mismatch: destination untouched, cache left empty
- one failed transfer: install fails, sibling still completes, cache left empty
- cleanup problems: reported on the result and logged, never raised
"""

import asyncio
import logging
from pathlib import Path

import pytest

from protonctl.engine.coordinator import InstallCoordinator
from protonctl.engine.errors import (
    AssetMissingError,
    HashMismatchError,
    NotFoundError,
    TransportError,
    WriteFailedError,
)
from protonctl.engine.product_kind import ProductKind
from protonctl.engine.progress import ProgressTracker
from protonctl.constants import STATE_DONE, STATE_FAILED
from protonctl.tests.fixtures import (
    FakeCatalog,
    FakeRelease,
    files_under,
    make_config,
    make_paths,
    proton_release,
    wine_release,
)

PROTON = 'GloriousEggroll/proton-ge-custom'
WINE = 'GloriousEggroll/wine-ge-custom'


def run_install(catalog, tmp_path, kind, tag, config_overrides=None, **kwargs):
    """Install against ``catalog``; returns (result or exception, coordinator)."""
    async def install():
        async with catalog.serve() as base_url:
            config = make_config(tmp_path, base_url, **(config_overrides or {}))
            async with InstallCoordinator(config, make_paths(tmp_path)) as coordinator:
                try:
                    return await coordinator.install(kind, tag, **kwargs), coordinator
                except Exception as e:
                    return e, coordinator

    return asyncio.run(install())


def test_install_proton(tmp_path):
    catalog = FakeCatalog()
    catalog.add_release(PROTON, proton_release('GE-Proton8-4'))
    paths = make_paths(tmp_path)
    tracker = ProgressTracker()

    result, coordinator = run_install(
        catalog, tmp_path, ProductKind.PROTON, 'GE-Proton8-4', progress=tracker
    )

    destination = paths.destination_for(ProductKind.PROTON)
    assert files_under(destination) == [
        'GE-Proton8-4/files/bin/wine',
        'GE-Proton8-4/proton',
        'GE-Proton8-4/version',
    ]
    assert files_under(paths.cache_dir) == []
    assert result.final_state == STATE_DONE
    assert coordinator.state == STATE_DONE
    assert result.checksum_verified is True
    assert result.cleanup_performed is True
    assert result.archive_name == 'GE-Proton8-4.tar.gz'
    assert result.extraction.top_level == ['GE-Proton8-4']
    assert tracker.completed == tracker.total == result.bytes_downloaded


def test_install_wine_xz(tmp_path):
    catalog = FakeCatalog()
    catalog.add_release(WINE, wine_release('GE-Proton8-26'))
    paths = make_paths(tmp_path)

    result, _ = run_install(catalog, tmp_path, ProductKind.WINE, 'GE-Proton8-26')

    assert result.final_state == STATE_DONE
    installed = paths.destination_for(ProductKind.WINE) / 'lutris-GE-Proton8-26-x86_64'
    assert (installed / 'version').exists()
    assert files_under(paths.cache_dir) == []


def test_install_latest_reports_resolved_tag(tmp_path):
    catalog = FakeCatalog()
    catalog.add_release(PROTON, proton_release('GE-Proton8-5'))
    catalog.add_release(PROTON, proton_release('GE-Proton8-4'))

    result, _ = run_install(catalog, tmp_path, ProductKind.PROTON, 'latest')

    assert result.tag_name == 'GE-Proton8-5'


def test_hash_mismatch_leaves_destination_untouched(tmp_path):
    catalog = FakeCatalog()
    catalog.add_release(PROTON, proton_release('GE-Proton8-4', corrupt_checksum=True))
    paths = make_paths(tmp_path)

    error, coordinator = run_install(catalog, tmp_path, ProductKind.PROTON, 'GE-Proton8-4')

    assert isinstance(error, HashMismatchError)
    assert coordinator.state == STATE_FAILED
    assert files_under(paths.destination_for(ProductKind.PROTON)) == []
    assert files_under(paths.cache_dir) == []


def test_skip_checksum_installs_despite_mismatch(tmp_path):
    catalog = FakeCatalog()
    catalog.add_release(PROTON, proton_release('GE-Proton8-4', corrupt_checksum=True))
    paths = make_paths(tmp_path)

    result, _ = run_install(
        catalog, tmp_path, ProductKind.PROTON, 'GE-Proton8-4', skip_checksum=True
    )

    assert result.final_state == STATE_DONE
    assert result.checksum_verified is False
    assert (paths.destination_for(ProductKind.PROTON) / 'GE-Proton8-4' / 'proton').exists()


@pytest.mark.parametrize('failing', ['GE-Proton8-4.tar.gz', 'GE-Proton8-4.sha512sum'])
def test_failed_transfer_fails_install(tmp_path, failing):
    catalog = FakeCatalog()
    catalog.add_release(PROTON, proton_release('GE-Proton8-4', failing_assets={failing}))
    paths = make_paths(tmp_path)

    error, coordinator = run_install(catalog, tmp_path, ProductKind.PROTON, 'GE-Proton8-4')

    assert isinstance(error, TransportError)
    assert error.status == 500
    assert coordinator.state == STATE_FAILED
    assert files_under(paths.destination_for(ProductKind.PROTON)) == []
    assert files_under(paths.cache_dir) == []

    # Both transfers were attempted; neither cancels the other
    asset_requests = [path for path, _ in catalog.requests if '/assets/' in path]
    assert len(asset_requests) == 2


def test_unknown_release(tmp_path):
    catalog = FakeCatalog()
    catalog.add_release(PROTON, proton_release('GE-Proton8-4'))

    error, coordinator = run_install(catalog, tmp_path, ProductKind.PROTON, 'GE-Proton7-1')

    assert isinstance(error, NotFoundError)
    assert coordinator.state == STATE_FAILED
    assert not make_paths(tmp_path).cache_dir.exists()


def test_missing_checksum_asset_downloads_nothing(tmp_path):
    catalog = FakeCatalog()
    release = proton_release('GE-Proton8-4')
    catalog.add_release(PROTON, FakeRelease(
        tag_name=release.tag_name,
        assets={'GE-Proton8-4.tar.gz': release.assets['GE-Proton8-4.tar.gz']},
    ))

    error, _ = run_install(catalog, tmp_path, ProductKind.PROTON, 'GE-Proton8-4')

    assert isinstance(error, AssetMissingError)
    assert not [path for path, _ in catalog.requests if '/assets/' in path]


def test_checksum_failure_lets_streamed_archive_finish(tmp_path):
    catalog = FakeCatalog()
    release = catalog.add_release(PROTON, proton_release(
        'GE-Proton8-4',
        failing_assets={'GE-Proton8-4.sha512sum'},
        payload_size=256 * 1024,
        stream_chunk=4096,
    ))
    archive_size = len(release.assets['GE-Proton8-4.tar.gz'])
    paths = make_paths(tmp_path)
    tracker = ProgressTracker()

    error, coordinator = run_install(
        catalog, tmp_path, ProductKind.PROTON, 'GE-Proton8-4',
        config_overrides={'chunk_size': 1024}, progress=tracker
    )

    assert isinstance(error, TransportError)
    assert error.status == 500
    assert coordinator.state == STATE_FAILED
    # The archive arrived in full after its sibling had already failed
    assert tracker.completed == archive_size
    assert coordinator.last_result.cleanup_performed is True
    assert files_under(paths.cache_dir) == []
    assert files_under(paths.destination_for(ProductKind.PROTON)) == []


def test_write_failure_still_removes_sibling(tmp_path):
    catalog = FakeCatalog()
    catalog.add_release(PROTON, proton_release('GE-Proton8-4'))
    paths = make_paths(tmp_path)
    cache = paths.ensure_cache_dir()
    (cache / 'GE-Proton8-4.tar.gz').mkdir()

    error, coordinator = run_install(catalog, tmp_path, ProductKind.PROTON, 'GE-Proton8-4')

    assert isinstance(error, WriteFailedError)
    assert coordinator.state == STATE_FAILED
    assert not (cache / 'GE-Proton8-4.sha512sum').exists()
    # A directory in the archive's place cannot be unlinked
    assert coordinator.last_result.cleanup_performed is False
    assert files_under(paths.destination_for(ProductKind.PROTON)) == []


def test_cleanup_failure_is_logged_not_raised(tmp_path, monkeypatch, caplog):
    catalog = FakeCatalog()
    catalog.add_release(PROTON, proton_release('GE-Proton8-4', corrupt_checksum=True))
    cache = make_paths(tmp_path).cache_dir
    original_unlink = Path.unlink

    def unlink(self, missing_ok=False):
        if self.parent == cache:
            raise PermissionError(13, 'Permission denied', str(self))
        return original_unlink(self, missing_ok=missing_ok)

    monkeypatch.setattr(Path, 'unlink', unlink)
    monkeypatch.setattr(logging.getLogger('protonctl'), 'propagate', True)
    caplog.set_level(logging.WARNING, logger='protonctl')

    error, coordinator = run_install(catalog, tmp_path, ProductKind.PROTON, 'GE-Proton8-4')

    assert isinstance(error, HashMismatchError)
    assert coordinator.state == STATE_FAILED
    assert coordinator.last_result.cleanup_performed is False
    warnings = [
        record.getMessage() for record in caplog.records
        if record.levelno == logging.WARNING
    ]
    assert len([m for m in warnings if 'Failed to remove temporary file' in m]) == 2
