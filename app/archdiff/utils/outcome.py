"""Per-item I/O results.

Auditing a live root filesystem hits unreadable files routinely. Each
single-path I/O step is captured as an Outcome instead of raising, and
callers consume it through keep_or_skip(), which logs the failure once
and hands back None so the path drops out of the classification being
attempted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result of one I/O operation on one path.

    Attributes:
        path: Path the operation was performed on.
        value: Result value on success.
        error: The OSError raised on failure.
    """

    path: str
    value: T | None = None
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        """Check if the operation succeeded."""
        return self.error is None


def attempt(func: Callable[[str], T], path: str) -> Outcome[T]:
    """Run a single I/O step against a path, capturing OSError.

    Args:
        func: Callable taking the path and returning a value.
        path: Path to operate on.

    Returns:
        Outcome holding either the value or the error.
    """
    try:
        return Outcome(path=path, value=func(path))
    except OSError as e:
        return Outcome(path=path, error=e)


def keep_or_skip(outcome: Outcome[T]) -> T | None:
    """Unwrap an outcome, logging and discarding failures.

    Args:
        outcome: Outcome to unwrap.

    Returns:
        The value on success, None on failure.
    """
    if outcome.error is not None:
        logger.error("IO error for operation on %s: %s", outcome.path, outcome.error)
        return None
    return outcome.value
