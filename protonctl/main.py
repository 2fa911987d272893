# Path: protonctl/main.py
"""
Protonctl - Main Entry Point

Installed as the ``protonctl`` console script.

Usage:
    protonctl install GE-Proton8-4
    python -m protonctl list --local
"""

import sys

from protonctl.cli.protonctl_cli import main, err_console
from protonctl.constants import EXIT_INTERRUPTED


def run():
    """Run the CLI and exit with its status code."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        err_console.print("\nInterrupted by user.")
        sys.exit(EXIT_INTERRUPTED)


if __name__ == '__main__':
    run()
