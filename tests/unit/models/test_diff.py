"""Unit tests for drift models."""

import pytest
from archdiff.models.diff import DiffEntry, DiffKind


class TestDiffKind:
    """Tests for DiffKind enum."""

    def test_values(self) -> None:
        """DiffKind values are the list names used by the CLI."""
        assert DiffKind.UNTRACKED.value == "untracked"
        assert DiffKind.REPO_CHANGED.value == "repo-changed"
        assert DiffKind.DELETED.value == "deleted"
        assert DiffKind.BACKUP_CHANGED.value == "backup-changed"

    @pytest.mark.parametrize(
        ("kind", "marker"),
        [
            (DiffKind.UNTRACKED, "?"),
            (DiffKind.REPO_CHANGED, "R"),
            (DiffKind.DELETED, "D"),
            (DiffKind.BACKUP_CHANGED, "B"),
        ],
    )
    def test_marker(self, kind: DiffKind, marker: str) -> None:
        """Each kind maps to its single-character report marker."""
        assert kind.marker == marker


class TestDiffEntry:
    """Tests for DiffEntry dataclass."""

    def test_create(self) -> None:
        """DiffEntry holds kind and relative path."""
        entry = DiffEntry(DiffKind.DELETED, "etc/bar.conf")

        assert entry.kind == DiffKind.DELETED
        assert entry.path == "etc/bar.conf"

    def test_is_frozen(self) -> None:
        """DiffEntry is immutable."""
        entry = DiffEntry(DiffKind.DELETED, "etc/bar.conf")

        with pytest.raises(AttributeError):
            entry.path = "etc/other"  # type: ignore[misc]

    def test_empty_path_rejected(self) -> None:
        """An entry without a path is invalid."""
        with pytest.raises(ValueError, match="cannot be empty"):
            DiffEntry(DiffKind.UNTRACKED, "")

    def test_equality(self) -> None:
        """Entries with the same kind and path are equal."""
        assert DiffEntry(DiffKind.UNTRACKED, "a") == DiffEntry(DiffKind.UNTRACKED, "a")
        assert DiffEntry(DiffKind.UNTRACKED, "a") != DiffEntry(DiffKind.DELETED, "a")
