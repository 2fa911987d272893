# Path: protonctl/tests/test_cli.py
"""
Command-line interface tests.
"""

import pytest

from protonctl.cli.protonctl_cli import build_parser, main
from protonctl.constants import EXIT_FAILURE, EXIT_OK
from protonctl.engine.product_kind import ProductKind
from protonctl.tests.fixtures import make_paths


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv('PROTONCTL_HOME', str(tmp_path))
    monkeypatch.setenv('PROTONCTL_LOG_CONSOLE', 'false')
    monkeypatch.setenv('PROTONCTL_FLATPAK', 'false')
    monkeypatch.setenv('PROTONCTL_CATALOG_URL', 'http://127.0.0.1:9')
    return tmp_path


def run_cli(home, *argv):
    # An explicit, absent .env keeps the user's file out of the test
    return main(['--env-file', str(home / 'no.env'), *argv])


def test_parser_defaults():
    args = build_parser().parse_args(['install', 'GE-Proton8-4'])

    assert args.kind == 'proton'
    assert args.flatpak is None
    assert args.version == 'GE-Proton8-4'
    assert args.skip_sha_check is False


def test_parser_global_options():
    args = build_parser().parse_args(['-t', 'wine', '--flatpak', 'list', '-n', '20', '-p', '3', '-l'])

    assert args.kind == 'wine'
    assert args.flatpak is True
    assert (args.number, args.page, args.local) == (20, 3, True)


def test_remove_modes_are_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(['remove', '--all', '--cache'])


def test_remove_needs_a_target(home):
    with pytest.raises(SystemExit):
        run_cli(home, 'remove')


def test_no_command_fails(home):
    assert run_cli(home) == EXIT_FAILURE


def test_list_local(home, capsys):
    destination = make_paths(home).ensure_destination(ProductKind.PROTON)
    for name in ('GE-Proton8-4', 'GE-Proton8-5', 'GE-Proton8-6', 'GE-Proton9-1'):
        (destination / name).mkdir()

    assert run_cli(home, 'list', '--local') == EXIT_OK

    out = capsys.readouterr().out
    lines = [line.split() for line in out.splitlines() if line.strip()]
    assert lines == [['GE-Proton8-4', 'GE-Proton8-5', 'GE-Proton8-6'], ['GE-Proton9-1']]


def test_list_local_missing_directory_fails(home, capsys):
    assert run_cli(home, '-t', 'ulwgl', 'list', '--local') == EXIT_FAILURE
    # rich may wrap long paths across lines
    assert 'does it exist?' in ' '.join(capsys.readouterr().err.split())


def test_remove_version(home, capsys):
    destination = make_paths(home).ensure_destination(ProductKind.PROTON)
    (destination / 'GE-Proton8-4').mkdir()

    assert run_cli(home, 'remove', 'GE-Proton8-4') == EXIT_OK
    assert not (destination / 'GE-Proton8-4').exists()


def test_remove_unknown_version_still_succeeds(home, capsys):
    make_paths(home).ensure_destination(ProductKind.PROTON)

    assert run_cli(home, 'remove', 'GE-Proton1-0') == EXIT_OK
    assert 'not found' in capsys.readouterr().out


def test_remove_cache(home):
    cache = make_paths(home).ensure_cache_dir()
    (cache / 'GE-Proton8-4.tar.gz').write_bytes(b'partial')

    assert run_cli(home, 'remove', '--cache') == EXIT_OK
    assert list(cache.iterdir()) == []


def test_transport_error_exits_non_zero(home, capsys):
    assert run_cli(home, 'install', 'GE-Proton8-4') == EXIT_FAILURE
    assert 'Error:' in capsys.readouterr().err


def test_failure_is_reported_once(home, monkeypatch, capsys):
    monkeypatch.setenv('PROTONCTL_LOG_CONSOLE', 'true')

    assert run_cli(home, 'install', 'GE-Proton8-4') == EXIT_FAILURE

    err = capsys.readouterr().err
    assert err.count('Error:') == 1
    assert 'ERROR' not in err
