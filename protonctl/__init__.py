# Path: protonctl/__init__.py
"""
Protonctl

Installer and manager for Proton-GE, Wine-GE and ULWGL-Proton builds.
Resolves a release from the catalog, downloads the archive and its
checksum concurrently, verifies SHA-512 and unpacks into the Steam,
Lutris or ULWGL compatibility-tool directory.
"""

__version__ = '0.1.0'
