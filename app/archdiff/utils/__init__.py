"""Utility modules for archdiff.

This module exports commonly used utility functions.
"""

from archdiff.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from archdiff.utils.outcome import Outcome, attempt, keep_or_skip

__all__ = [
    "Outcome",
    "attempt",
    "console",
    "err_console",
    "keep_or_skip",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
