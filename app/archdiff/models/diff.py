"""Drift classification models.

This module defines the categories of drift reported by an audit and the
entry type pairing a category with a root-relative path.
"""

from dataclasses import dataclass
from enum import Enum


class DiffKind(str, Enum):
    """Kind of drift between recorded and actual filesystem state.

    Attributes:
        UNTRACKED: File on disk that no installed package owns.
        REPO_CHANGED: Repository-mirrored file whose live content differs.
        DELETED: Package-owned file missing from disk.
        BACKUP_CHANGED: Package backup file whose content no longer
            matches the fingerprint recorded at install time.
    """

    UNTRACKED = "untracked"
    REPO_CHANGED = "repo-changed"
    DELETED = "deleted"
    BACKUP_CHANGED = "backup-changed"

    @property
    def marker(self) -> str:
        """Single-character marker used in the text report."""
        return _MARKERS[self]


_MARKERS: dict[DiffKind, str] = {
    DiffKind.UNTRACKED: "?",
    DiffKind.REPO_CHANGED: "R",
    DiffKind.DELETED: "D",
    DiffKind.BACKUP_CHANGED: "B",
}


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """A single classified discrepancy.

    Attributes:
        kind: Drift category.
        path: Path relative to the install root (or mirror root).
    """

    kind: DiffKind
    path: str

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Diff entry path cannot be empty"
            raise ValueError(msg)
