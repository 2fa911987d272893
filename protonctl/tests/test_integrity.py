# Path: protonctl/tests/test_integrity.py
"""
SHA-512 verification tests.
"""

import asyncio
import hashlib

import pytest

from protonctl.engine.errors import IoError, MalformedChecksumError
from protonctl.engine.integrity import expected_digest, read_checksum_file, sha512_file, verify
from protonctl.tests.fixtures import sha512_sidecar


def test_matching_digest(tmp_path):
    archive = tmp_path / 'GE-Proton8-4.tar.gz'
    archive.write_bytes(b'archive bytes' * 10000)
    sidecar = sha512_sidecar(archive.read_bytes(), archive.name).decode()

    assert asyncio.run(verify(archive, sidecar)) is True


def test_mismatch_returns_false(tmp_path):
    archive = tmp_path / 'GE-Proton8-4.tar.gz'
    archive.write_bytes(b'archive bytes')
    sidecar = sha512_sidecar(b'other bytes', archive.name).decode()

    assert asyncio.run(verify(archive, sidecar)) is False


def test_small_chunks_give_same_digest(tmp_path):
    archive = tmp_path / 'data.bin'
    archive.write_bytes(bytes(range(256)) * 100)

    digest = asyncio.run(sha512_file(archive, chunk_size=7))

    assert digest == hashlib.sha512(archive.read_bytes()).hexdigest()


def test_only_digest_prefix_is_compared():
    text = 'a' * 128 + '  GE-Proton8-4.tar.gz\n'

    assert expected_digest(text) == 'a' * 128


def test_short_checksum_is_malformed(tmp_path):
    archive = tmp_path / 'GE-Proton8-4.tar.gz'
    archive.write_bytes(b'x')

    with pytest.raises(MalformedChecksumError):
        asyncio.run(verify(archive, 'abc123'))


def test_missing_archive_is_io_error(tmp_path):
    with pytest.raises(IoError):
        asyncio.run(verify(tmp_path / 'missing.tar.gz', 'a' * 128))


def test_read_checksum_file(tmp_path):
    path = tmp_path / 'GE-Proton8-4.sha512sum'
    path.write_bytes(sha512_sidecar(b'payload', 'GE-Proton8-4.tar.gz'))

    text = asyncio.run(read_checksum_file(path))

    assert text.endswith('GE-Proton8-4.tar.gz\n')
    assert expected_digest(text) == hashlib.sha512(b'payload').hexdigest()

    with pytest.raises(IoError):
        asyncio.run(read_checksum_file(tmp_path / 'missing.sha512sum'))
