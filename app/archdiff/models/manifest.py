"""Package manifest models.

The manifest is what the package database knows about the install root:
which paths installed packages own and which of them are backup
configuration files with a recorded content fingerprint.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class InstalledPackage:
    """A package recorded in the local package database.

    Attributes:
        name: Package name (e.g., 'openssh').
        version: Installed version string (e.g., '9.7p1-1').
        files: Root-relative paths owned by the package. Directory
            entries keep their trailing slash.
        backups: Backup file paths mapped to their recorded MD5 hex digest.
    """

    name: str
    version: str
    files: tuple[str, ...] = field(default=())
    backups: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PackageManifest:
    """Union of all installed packages' file records.

    Attributes:
        files: Every root-relative path owned by an installed package.
        backups: Backup file paths mapped to their expected fingerprint.
    """

    files: frozenset[str] = field(default_factory=frozenset)
    backups: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_packages(cls, packages: Iterable[InstalledPackage]) -> PackageManifest:
        """Merge package records into a single manifest.

        A backup path listed by more than one package keeps the
        fingerprint of the last package.

        Args:
            packages: Installed packages to merge.

        Returns:
            PackageManifest covering all packages.
        """
        files: set[str] = set()
        backups: dict[str, str] = {}
        for pkg in packages:
            files.update(pkg.files)
            backups.update(pkg.backups)
        return cls(files=frozenset(files), backups=backups)
