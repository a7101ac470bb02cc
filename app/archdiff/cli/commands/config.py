"""Configuration commands.

Shows the effective audit configuration and writes a starter
configuration file.
"""

from typing import Annotated

import typer

from archdiff.cli.types import get_config_path, resolve_config
from archdiff.core.config import AuditConfig, ConfigError, save_config
from archdiff.core.paths import get_config_path as get_default_config_path
from archdiff.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Show or create the archdiff configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration as JSON."""
    config = resolve_config(ctx)
    console.print_json(config.model_dump_json())


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a configuration file with default settings."""
    path = get_config_path(ctx) or get_default_config_path()

    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    if path.exists():
        print_warning(f"Overwriting existing config: {path}")

    try:
        saved = save_config(AuditConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
