"""CLI commands for archdiff.

This package contains all subcommand implementations.
"""

from archdiff.cli.commands import config, ls, status

__all__ = ["config", "ls", "status"]
