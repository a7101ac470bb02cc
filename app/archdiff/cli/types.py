"""Shared option types and setup helpers for CLI commands.

This module provides the audit options common to the status and ls
commands and the startup sequence that turns them into a ready engine.
Fatal startup errors are reported here and end the run with exit code 1.
"""

from pathlib import Path
from typing import Annotated

import typer

from archdiff.core.config import AuditConfig, ConfigError, apply_overrides, load_config
from archdiff.core.engine import ReconciliationEngine
from archdiff.database.pacman import DatabaseError, PacmanDatabase
from archdiff.filesystem.ignore import IgnoreRulesError, load_ignore_rules
from archdiff.models.manifest import PackageManifest
from archdiff.utils.formatting import print_error

RootOption = Annotated[
    str | None,
    typer.Option("--root", "-r", help="Set an alternate installation root."),
]
DbPathOption = Annotated[
    str | None,
    typer.Option("--dbpath", "-b", help="Set an alternate database location."),
]
RepoOption = Annotated[
    str | None,
    typer.Option("--repo", help="Set the repository mirror directory."),
]
IgnoreOption = Annotated[
    str | None,
    typer.Option("--ignore", help="Set the ignore rules directory."),
]
JobsOption = Annotated[
    int | None,
    typer.Option("--jobs", "-j", help="Worker threads for parallel checks."),
]


def get_config_path(ctx: typer.Context) -> Path | None:
    """Return the --config path given to the main command, if any."""
    obj = ctx.obj or {}
    return obj.get("config_path")


def resolve_config(
    ctx: typer.Context,
    *,
    root: str | None = None,
    dbpath: str | None = None,
    repo: str | None = None,
    ignore_dir: str | None = None,
    workers: int | None = None,
) -> AuditConfig:
    """Load the configuration file and apply command-line overrides.

    Args:
        ctx: Typer context carrying the global --config path.
        root: Install root override.
        dbpath: Database location override.
        repo: Repository mirror override.
        ignore_dir: Ignore rules directory override.
        workers: Worker count override.

    Returns:
        Effective AuditConfig.

    Raises:
        typer.Exit: If the configuration is invalid.
    """
    try:
        config = load_config(get_config_path(ctx))
        return apply_overrides(
            config,
            root=root,
            dbpath=dbpath,
            repo=repo,
            ignore_dir=ignore_dir,
            workers=workers,
        )
    except ConfigError as e:
        print_error(f"Failed to load configuration: {e}")
        raise typer.Exit(code=1) from e


def prepare_audit(config: AuditConfig) -> tuple[ReconciliationEngine, PackageManifest]:
    """Open the package database and compile the ignore rules.

    Both happen before any scanning, so a broken setup fails fast.

    Args:
        config: Effective audit configuration.

    Returns:
        Tuple of (engine, manifest).

    Raises:
        typer.Exit: If the database or ignore rules cannot be loaded.
    """
    try:
        manifest = PacmanDatabase(config.dbpath).load_manifest()
    except DatabaseError as e:
        print_error(f"Failed to load package database: {e}")
        raise typer.Exit(code=1) from e

    try:
        ignore = load_ignore_rules(Path(config.ignore_dir))
    except IgnoreRulesError as e:
        print_error(f"Failed to load ignore rules: {e}")
        raise typer.Exit(code=1) from e

    return ReconciliationEngine(config, ignore), manifest
