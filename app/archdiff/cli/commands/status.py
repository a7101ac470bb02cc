"""Status command implementation.

Audits the install root and prints every drifted path.
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
from archdiff.core.report import report_to_dict, write_report
from archdiff.utils.formatting import allow_raw_filenames, console

app = typer.Typer(
    help="Audit the install root for drift.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


@app.callback(invoke_without_command=True)
def status(
    ctx: typer.Context,
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
    """Report drift between package records, the repo mirror and disk.

    Each line is a marker followed by the absolute path:

      ? untracked: on disk, owned by no package
      R repo-changed: differs from the repository mirror
      D deleted: owned by a package, missing from disk
      B backup-changed: backup config modified since install

    Examples:
        archdiff status                    # Audit /
        archdiff status --root /mnt        # Audit a mounted system
        archdiff status --format json      # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    config = resolve_config(
        ctx,
        root=root,
        dbpath=dbpath,
        repo=repo,
        ignore_dir=ignore,
        workers=jobs,
    )
    engine, manifest = prepare_audit(config)
    entries = engine.reconcile(manifest)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report_to_dict(entries, config.root)))
        return

    allow_raw_filenames(sys.stdout)
    write_report(entries, config.root, sys.stdout)
