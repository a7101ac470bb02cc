"""List command implementation.

Prints named path lists: the drift categories plus the raw inputs the
audit works from (package files, package backups, mirror files).
"""

import json
import sys
from enum import Enum
from typing import Annotated

import typer

from archdiff.cli.types import (
    DbPathOption,
    IgnoreOption,
    JobsOption,
    RepoOption,
    RootOption,
    prepare_audit,
    resolve_config,
)
from archdiff.core.config import AuditConfig
from archdiff.core.engine import ReconciliationEngine
from archdiff.core.report import sort_entries
from archdiff.models.diff import DiffEntry, DiffKind
from archdiff.models.manifest import PackageManifest
from archdiff.utils.formatting import allow_raw_filenames, console


class ListName(str, Enum):
    """Lists available to the ls command."""

    UNTRACKED = "untracked"
    REPO_CHANGED = "repo-changed"
    DELETED = "deleted"
    BACKUP_CHANGED = "backup-changed"
    PACKAGE = "package"
    BACKUPS = "backups"
    REPO = "repo"


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


class _Lister:
    """Computes named lists, running the reconciliation at most once."""

    def __init__(
        self,
        config: AuditConfig,
        engine: ReconciliationEngine,
        manifest: PackageManifest,
    ) -> None:
        self._config = config
        self._engine = engine
        self._manifest = manifest
        self._entries: list[DiffEntry] | None = None

    def paths(self, name: ListName) -> list[str]:
        """Return the absolute paths of one named list, sorted."""
        root = self._config.root
        if name == ListName.PACKAGE:
            return [f"{root}{p}" for p in sorted(self._manifest.files)]
        if name == ListName.BACKUPS:
            return [f"{root}{p}" for p in sorted(self._manifest.backups)]
        if name == ListName.REPO:
            return [f"{self._config.repo}{p}" for p in self._engine.mirror_files()]

        kind = DiffKind(name.value)
        return [f"{root}{e.path}" for e in self._diff_entries() if e.kind == kind]

    def _diff_entries(self) -> list[DiffEntry]:
        if self._entries is None:
            self._entries = sort_entries(self._engine.reconcile(self._manifest))
        return self._entries


def ls_lists(
    ctx: typer.Context,
    names: Annotated[
        list[ListName],
        typer.Argument(help="Lists to print.", case_sensitive=False),
    ],
    root: RootOption = None,
    dbpath: DbPathOption = None,
    repo: RepoOption = None,
    ignore: IgnoreOption = None,
    jobs: JobsOption = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
) -> None:
    """Print one or more named path lists.

    Lists: untracked, repo-changed, deleted, backup-changed,
    package (all package files), backups (package backup files),
    repo (repository mirror files).

    Examples:
        archdiff ls untracked deleted
        archdiff ls backups --format json
    """
    config = resolve_config(
        ctx,
        root=root,
        dbpath=dbpath,
        repo=repo,
        ignore_dir=ignore,
        workers=jobs,
    )
    engine, manifest = prepare_audit(config)
    lister = _Lister(config, engine, manifest)

    if output_format == OutputFormat.JSON:
        data = {name.value: lister.paths(name) for name in names}
        console.print_json(json.dumps(data))
        return

    allow_raw_filenames(sys.stdout)
    for name in names:
        typer.echo(name.value)
        for path in lister.paths(name):
            typer.echo(f"  {path}")
