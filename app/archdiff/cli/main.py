"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from archdiff import __version__
from archdiff.cli.commands import config, ls, status
from archdiff.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="archdiff",
    help="Audit a pacman-managed system for drift from its packages.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"archdiff version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log progress to stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a config file (default: ~/.config/archdiff/config.toml).",
        ),
    ] = None,
) -> None:
    """archdiff - find files that drifted from what pacman installed.

    Compares the package database, the live filesystem and a curated
    repository mirror, and lists untracked, repo-changed, deleted and
    modified backup files.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(status.app, name="status")
app.add_typer(config.app, name="config")
app.command(name="ls")(ls.ls_lists)


if __name__ == "__main__":
    app()
