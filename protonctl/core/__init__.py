# Path: protonctl/core/__init__.py
"""
Protonctl Core Module

Configuration, paths and logging shared by the engine and the CLI.
"""

from protonctl.core.config_loader import ConfigLoader
from protonctl.core.logger import configure_logging, get_logger
from protonctl.core.data_paths import InstallPaths

__all__ = [
    'ConfigLoader',
    'configure_logging',
    'get_logger',
    'InstallPaths',
]
