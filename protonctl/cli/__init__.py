# Path: protonctl/cli/__init__.py
"""
Protonctl CLI Module

Command-line interface for install, list and remove.
"""

from protonctl.cli.protonctl_cli import main, build_parser

__all__ = ['main', 'build_parser']
