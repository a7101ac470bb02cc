"""Depth-first file tree scanner.

Walks a directory tree and yields root-relative file paths. Used twice
per audit: once over the install root with ignore pruning, and once over
the repository mirror with no filtering.
"""

import logging
import os
from collections.abc import Iterator

from archdiff.filesystem.ignore import IgnoreMatch, IgnoreMatcher

logger = logging.getLogger(__name__)


class TreeScanner:
    """Lazy depth-first walk over a directory tree.

    Directories are never yielded. Symbolic links are not followed and
    are reported like regular files. When an ignore matcher is given,
    excluded directories are not descended into and excluded files are
    omitted.

    Args:
        root: Directory to walk.
        ignore: Optional matcher applied to root-relative paths.

    Example:
        >>> scanner = TreeScanner("/", ignore=matcher)
        >>> for rel in scanner.scan():
        ...     print(rel)  # e.g. "etc/pacman.conf"
    """

    def __init__(self, root: str, *, ignore: IgnoreMatcher | None = None) -> None:
        self._root = root
        self._ignore = ignore

    def scan(self) -> Iterator[str]:
        """Walk the tree and yield root-relative file paths.

        Each call starts a fresh walk. Entries are visited in name order
        within each directory. Unreadable directories and entries whose
        type cannot be determined are logged and skipped.

        Yields:
            Root-relative paths using "/" separators.
        """
        # Stack of (absolute dir, relative prefix); reversed so the
        # smallest name is popped first
        stack: list[tuple[str, str]] = [(self._root, "")]
        while stack:
            directory, prefix = stack.pop()
            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                logger.warning("Cannot read directory %s: %s", directory, e)
                continue

            subdirs: list[tuple[str, str]] = []
            for entry in entries:
                rel = f"{prefix}{entry.name}"
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    logger.warning("Cannot determine type of %s: %s", entry.path, e)
                    continue

                if self._is_excluded(rel, is_dir):
                    continue

                if is_dir:
                    subdirs.append((entry.path, f"{rel}/"))
                else:
                    yield rel

            stack.extend(reversed(subdirs))

    def _is_excluded(self, rel: str, is_dir: bool) -> bool:
        """Check an entry against the pruning filter, if any."""
        if self._ignore is None:
            return False
        return self._ignore.match_direct(rel, is_dir) == IgnoreMatch.EXCLUDED
