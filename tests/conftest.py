"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules: a fake
install root, repository mirror, ignore rules directory and pacman
database, all built under tmp_path.
"""

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

WriteFile = Callable[[Path, str, str], Path]
AddPackage = Callable[..., Path]


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path) -> Iterator[Path]:
    """Point XDG_CONFIG_HOME at an empty directory for every test."""
    config_home = tmp_path / "xdg-config"
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(config_home)}):
        yield config_home


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo logging configuration done by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def write_file() -> WriteFile:
    """Return a helper that writes a file below a base directory."""

    def _write(base: Path, rel: str, content: str = "") -> Path:
        path = base / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def live_root(tmp_path: Path) -> Path:
    """Empty install root."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def mirror(tmp_path: Path) -> Path:
    """Empty repository mirror."""
    repo = tmp_path / "repo"
    repo.mkdir()
    return repo


@pytest.fixture
def ignore_dir(tmp_path: Path) -> Path:
    """Empty ignore rules directory."""
    directory = tmp_path / "ignore"
    directory.mkdir()
    return directory


@pytest.fixture
def dbpath(tmp_path: Path) -> Path:
    """Pacman database location with an empty local database."""
    db = tmp_path / "db"
    (db / "local").mkdir(parents=True)
    (db / "local" / "ALPM_DB_VERSION").write_text("9\n")
    return db


@pytest.fixture
def add_package(dbpath: Path) -> AddPackage:
    """Return a helper that records an installed package in the database."""

    def _add(
        name: str,
        version: str = "1.0-1",
        files: list[str] | None = None,
        backups: dict[str, str] | None = None,
    ) -> Path:
        pkg_dir = dbpath / "local" / f"{name}-{version}"
        pkg_dir.mkdir()
        (pkg_dir / "desc").write_text(f"%NAME%\n{name}\n\n%VERSION%\n{version}\n\n")

        lines = ["%FILES%", *(files or []), ""]
        if backups:
            lines += ["%BACKUP%", *(f"{p}\t{h}" for p, h in backups.items()), ""]
        (pkg_dir / "files").write_text("\n".join(lines) + "\n")
        return pkg_dir

    return _add


@pytest.fixture
def audit_args(live_root: Path, dbpath: Path, mirror: Path, ignore_dir: Path) -> list[str]:
    """Command-line options pointing an audit at the temporary fixtures."""
    return [
        "--root",
        str(live_root),
        "--dbpath",
        str(dbpath),
        "--repo",
        str(mirror),
        "--ignore",
        str(ignore_dir),
    ]
