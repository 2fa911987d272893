# Path: protonctl/cli/protonctl_cli.py
"""
Protonctl CLI Interface

Command-line front-end for installing, listing and removing
compatibility-tool builds (Proton-GE, Wine-GE, ULWGL-Proton).

Architecture:
- argparse subcommands: install, list, remove
- One ConfigLoader and one InstallPaths per process, passed down
- rich console output and download progress bar
- ProtonctlError printed at the boundary, mapped to exit code 1

Usage:
    protonctl install GE-Proton8-4
    protonctl -t wine list -n 20
    protonctl remove --cache
"""

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)
from rich.table import Table

from protonctl.core.config_loader import ConfigLoader
from protonctl.core.data_paths import InstallPaths
from protonctl.core.logger import configure_logging, get_logger
from protonctl.engine import local_store
from protonctl.engine.coordinator import InstallCoordinator
from protonctl.engine.errors import ProtonctlError
from protonctl.engine.product_kind import ProductKind
from protonctl.engine.progress import ProgressTracker
from protonctl.constants import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    EXIT_FAILURE,
    EXIT_OK,
    LATEST_TAG,
    LOG_INPUT,
    LOG_OUTPUT,
    MAX_PER_PAGE,
)

logger = get_logger(__name__, 'cli')

console = Console()
err_console = Console(stderr=True)

LOCAL_COLUMNS = 3


class RichProgressListener:
    """Renders ProgressTracker events as a rich download bar."""

    def __init__(self, description: str, target: Optional[Console] = None):
        self.description = description
        self.progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=target if target else err_console,
            transient=True,
        )
        self.task_id = None

    def started(self, total: int) -> None:
        self.progress.start()
        self.task_id = self.progress.add_task(self.description, total=total or None)

    def advanced(self, delta: int, completed: int) -> None:
        if self.task_id is not None:
            self.progress.update(self.task_id, completed=completed)

    def finished(self) -> None:
        self.progress.stop()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='protonctl',
        description="Install and manage Proton-GE, Wine-GE and ULWGL-Proton builds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Install a Proton-GE release
  protonctl install GE-Proton8-4

  # Install the newest Wine-GE release for flatpak Lutris
  protonctl -t wine --flatpak install latest

  # Show 20 published releases, second page
  protonctl list -n 20 -p 2

  # Show installed versions
  protonctl list --local

  # Remove one version, everything, or the download cache
  protonctl remove GE-Proton8-4
  protonctl remove --all
  protonctl remove --cache
        """
    )

    parser.add_argument(
        '-t', '--type',
        dest='kind',
        choices=[kind.value for kind in ProductKind],
        default=ProductKind.PROTON.value,
        help='Product family to operate on (default: proton)'
    )
    parser.add_argument(
        '--flatpak',
        action='store_true',
        default=None,
        help='Use flatpak Steam/Lutris install directories'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--env-file',
        type=Path,
        help='Load configuration from this .env file'
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # Install command
    install_parser = subparsers.add_parser('install', help='Download and install a release')
    install_parser.add_argument(
        'version',
        help=f"Release tag (e.g. GE-Proton8-4) or '{LATEST_TAG}'"
    )
    install_parser.add_argument(
        '--skip-sha-check',
        action='store_true',
        help='Do not verify the archive against its .sha512sum'
    )

    # List command
    list_parser = subparsers.add_parser('list', help='List published or installed releases')
    list_parser.add_argument(
        '-n', '--number',
        type=int,
        default=DEFAULT_PER_PAGE,
        help=f'Releases per page, at most {MAX_PER_PAGE} (default: {DEFAULT_PER_PAGE})'
    )
    list_parser.add_argument(
        '-p', '--page',
        type=int,
        default=DEFAULT_PAGE,
        help=f'Page number (default: {DEFAULT_PAGE})'
    )
    list_parser.add_argument(
        '-l', '--local',
        action='store_true',
        help='List installed versions instead of published releases'
    )

    # Remove command
    remove_parser = subparsers.add_parser('remove', help='Remove installed versions or cached files')
    remove_parser.add_argument('version', nargs='?', help='Installed version to remove')
    mode = remove_parser.add_mutually_exclusive_group()
    mode.add_argument(
        '-a', '--all',
        action='store_true',
        help='Remove every installed version'
    )
    mode.add_argument(
        '-c', '--cache',
        action='store_true',
        help='Remove every file in the download cache'
    )

    return parser


async def install_command(
    coordinator: InstallCoordinator,
    kind: ProductKind,
    version: str,
    skip_checksum: bool
) -> int:
    listener = RichProgressListener(f"Downloading {version}")
    tracker = ProgressTracker(listener)

    result = await coordinator.install(kind, version, skip_checksum=skip_checksum, progress=tracker)

    if not result.checksum_verified:
        console.print("[yellow]Warning:[/yellow] checksum was not verified")
    console.print(
        f"[green]Installed[/green] [bold]{escape(result.tag_name)}[/bold] "
        f"into {escape(str(result.destination))}"
    )
    return EXIT_OK


async def list_remote_command(
    coordinator: InstallCoordinator,
    kind: ProductKind,
    number: int,
    page: int
) -> int:
    releases = await coordinator.list_remote(kind, number, page)

    for release in releases:
        console.print(f"[bold]Version:[/bold] {escape(release.tag_name)}")
        console.print(f"[bold]Download:[/bold] {escape(release.html_url)}")
        if release.body:
            console.print(f"[dim]{escape(release.body.strip())}[/dim]")
        console.print()

    if not releases:
        console.print(f"No {kind} releases on page {page}")
    return EXIT_OK


def list_local_command(kind: ProductKind, paths: InstallPaths) -> int:
    names = local_store.list_installed(kind, paths)

    if not names:
        console.print(f"No {kind} versions installed in {escape(str(paths.destination_for(kind)))}")
        return EXIT_OK

    grid = Table.grid(padding=(0, 4))
    for _ in range(LOCAL_COLUMNS):
        grid.add_column()
    for i in range(0, len(names), LOCAL_COLUMNS):
        row = [escape(name) for name in names[i:i + LOCAL_COLUMNS]]
        grid.add_row(*row, *[''] * (LOCAL_COLUMNS - len(row)))

    console.print(grid)
    return EXIT_OK


def remove_command(kind: ProductKind, paths: InstallPaths, args: argparse.Namespace) -> int:
    if args.cache:
        removed = local_store.clear_cache(paths)
        console.print(f"Removed {removed} cached file(s)")
    elif args.all:
        removed = local_store.remove_all(kind, paths)
        console.print(f"Removed {removed} {kind} version(s)")
    elif local_store.remove_version(kind, paths, args.version):
        console.print(f"[green]Removed[/green] {escape(args.version)}")
    else:
        console.print(f"{escape(args.version)} not found")
    return EXIT_OK


async def run_command(args: argparse.Namespace, config: ConfigLoader) -> int:
    """
    Dispatch a parsed command.

    Args:
        args: Parsed arguments
        config: Loaded configuration

    Returns:
        Process exit code

    Raises:
        ProtonctlError: Propagated from the engine
    """
    kind = ProductKind.from_name(args.kind)
    paths = InstallPaths.from_config(config, flatpak=args.flatpak)

    logger.info(f"{LOG_INPUT} Command '{args.command}' for {kind}")

    if args.command == 'remove':
        return remove_command(kind, paths, args)

    if args.command == 'list' and args.local:
        return list_local_command(kind, paths)

    async with InstallCoordinator(config, paths) as coordinator:
        if args.command == 'install':
            return await install_command(coordinator, kind, args.version, args.skip_sha_check)
        return await list_remote_command(coordinator, kind, args.number, args.page)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 on success, 1 on any failure
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_FAILURE

    if args.command == 'remove' and not (args.version or args.all or args.cache):
        parser.error("remove needs a VERSION, --all or --cache")
    if args.command == 'remove' and args.version and (args.all or args.cache):
        parser.error("VERSION cannot be combined with --all or --cache")

    config = ConfigLoader(env_file=args.env_file)
    configure_logging(config, verbose=args.verbose)

    try:
        exit_code = asyncio.run(run_command(args, config))

    except ProtonctlError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_FAILURE

    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_FAILURE

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_FAILURE

    logger.info(f"{LOG_OUTPUT} Command '{args.command}' finished with {exit_code}")
    return exit_code


__all__ = ['main', 'build_parser', 'run_command', 'RichProgressListener']
