"""Rich console formatting utilities.

Provides consistent formatting for human-facing CLI messages. The drift
report itself is plain text and bypasses Rich.
"""

import io
import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.theme import Theme

# Styles for CLI messages
THEME = Theme(
    {
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send diagnostics to stderr at the requested verbosity.

    Args:
        verbose: Log INFO and above.
        quiet: Log ERROR and above. Ignored when verbose is set.
    """
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def allow_raw_filenames(stream: TextIO) -> None:
    """Let a text stream write undecodable filename bytes unchanged.

    Paths from os.scandir and the package database carry bytes that are
    not valid UTF-8 as lone surrogates. With strict error handling such
    a path would abort the report; surrogateescape writes the original
    bytes back out.
    """
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors="surrogateescape")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
