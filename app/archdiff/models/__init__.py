"""Data models for archdiff.

This module exports the drift and package manifest models.
"""

from archdiff.models.diff import DiffEntry, DiffKind
from archdiff.models.manifest import InstalledPackage, PackageManifest

__all__ = ["DiffEntry", "DiffKind", "InstalledPackage", "PackageManifest"]
