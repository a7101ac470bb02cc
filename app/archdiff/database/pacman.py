"""Pacman local database reader.

Reads the package records pacman keeps under ``<dbpath>/local``. Each
installed package has a directory (``<name>-<version>``) holding a
``desc`` and a ``files`` file. Both use the same layout: a ``%SECTION%``
header line followed by one value per line, sections separated by a
blank line::

    %FILES%
    etc/
    etc/pacman.conf

    %BACKUP%
    etc/pacman.conf	2d5e0bc6b3b6c1e1e1d6c4e2e4a1b1f0
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from archdiff.models.manifest import InstalledPackage, PackageManifest

logger = logging.getLogger(__name__)

_LOCAL_DIR = "local"


class DatabaseError(Exception):
    """Raised when the package database cannot be read."""


def parse_sections(text: str) -> dict[str, list[str]]:
    """Parse pacman's ``%SECTION%`` record format.

    Args:
        text: Content of a desc or files record.

    Returns:
        Mapping of section name (without percent signs) to its values.
    """
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None
    for line in text.splitlines():
        if not line:
            current = None
            continue
        if len(line) > 2 and line.startswith("%") and line.endswith("%"):
            current = sections.setdefault(line[1:-1], [])
            continue
        if current is not None:
            current.append(line)
    return sections


class PacmanDatabase:
    """Read-only view of pacman's local package database.

    Args:
        dbpath: Database location (e.g., /var/lib/pacman).
    """

    def __init__(self, dbpath: str | Path) -> None:
        self._dbpath = Path(dbpath)

    @property
    def local_dir(self) -> Path:
        """Return the directory holding installed package records."""
        return self._dbpath / _LOCAL_DIR

    def packages(self) -> Iterator[InstalledPackage]:
        """Yield every installed package record.

        Yields:
            InstalledPackage for each package directory, in name order.

        Raises:
            DatabaseError: If the local database or a package record
                cannot be read.
        """
        try:
            entries = sorted(self.local_dir.iterdir())
        except OSError as e:
            raise DatabaseError(f"Cannot open package database {self.local_dir}: {e}") from e

        for entry in entries:
            # Skip ALPM_DB_VERSION and other stray files
            if not entry.is_dir():
                continue
            yield self._read_package(entry)

    def load_manifest(self) -> PackageManifest:
        """Collect all tracked files and backup fingerprints.

        Returns:
            PackageManifest merged from every installed package.

        Raises:
            DatabaseError: If the database cannot be read.
        """
        packages = list(self.packages())
        manifest = PackageManifest.from_packages(packages)
        logger.info(
            "Loaded %d packages (%d files, %d backups) from %s",
            len(packages),
            len(manifest.files),
            len(manifest.backups),
            self._dbpath,
        )
        return manifest

    def _read_package(self, directory: Path) -> InstalledPackage:
        """Read one package's desc and files records."""
        desc = parse_sections(self._read_record(directory / "desc"))
        files = parse_sections(self._read_record(directory / "files"))

        name = (desc.get("NAME") or [directory.name])[0]
        version = (desc.get("VERSION") or [""])[0]

        backups: dict[str, str] = {}
        for line in files.get("BACKUP", []):
            path, sep, digest = line.partition("\t")
            if not sep:
                logger.warning("Malformed backup line in %s: %r", directory, line)
                continue
            backups[path] = digest

        return InstalledPackage(
            name=name,
            version=version,
            files=tuple(files.get("FILES", [])),
            backups=backups,
        )

    @staticmethod
    def _read_record(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise DatabaseError(f"Cannot read package record {path}: {e}") from e
