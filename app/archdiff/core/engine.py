"""Reconciliation engine for auditing an install root.

This module provides the ReconciliationEngine class that compares the
package database's file records, the live filesystem and the repository
mirror, and classifies every discrepancy.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

from archdiff.core.config import AuditConfig
from archdiff.filesystem.hasher import try_hash_file
from archdiff.filesystem.ignore import IgnoreMatch, IgnoreMatcher
from archdiff.filesystem.scanner import TreeScanner
from archdiff.models.diff import DiffEntry, DiffKind
from archdiff.models.manifest import PackageManifest
from archdiff.utils.outcome import attempt, keep_or_skip

logger = logging.getLogger(__name__)

T = TypeVar("T")

# stat() failures that mean "the path is not there"
_MISSING_ERRORS = (FileNotFoundError, NotADirectoryError)


class ReconciliationEngine:
    """Engine for classifying drift between package records and disk.

    The engine runs four phases in a fixed order. The first two walk the
    install root and the mirror sequentially and remove entries from
    private copies of the manifest; the last two check whatever those
    removals left behind, in parallel.

    Args:
        config: Audit configuration (root, repo, worker count).
        ignore: Ignore rules anchored at the install root.

    Example:
        >>> engine = ReconciliationEngine(config, load_ignore_rules(ignore_dir))
        >>> entries = engine.reconcile(PacmanDatabase(config.dbpath).load_manifest())
        >>> write_report(entries, config.root, sys.stdout)
    """

    def __init__(self, config: AuditConfig, ignore: IgnoreMatcher) -> None:
        self._root = config.root
        self._repo = config.repo
        self._workers = config.workers
        self._ignore = ignore

    def reconcile(self, manifest: PackageManifest) -> list[DiffEntry]:
        """Classify every drifted path under the install root.

        The manifest itself is not modified.

        Args:
            manifest: Tracked files and backup fingerprints.

        Returns:
            Diff entries in discovery order.
        """
        tracked = set(manifest.files)
        backups = dict(manifest.backups)
        entries: list[DiffEntry] = []

        # Phases 1 and 2 must finish before 3 and 4 read what is left
        entries.extend(self._untracked(tracked))
        entries.extend(self._repo_changed(backups))
        entries.extend(self._deleted(tracked))
        entries.extend(self._backup_changed(backups))

        logger.info("Reconciliation found %d entries", len(entries))
        return entries

    def mirror_files(self) -> list[str]:
        """List every file in the repository mirror.

        Returns:
            Sorted mirror-relative paths.
        """
        return sorted(TreeScanner(self._repo).scan())

    def _untracked(self, tracked: set[str]) -> list[DiffEntry]:
        """Phase 1: walk the install root, confirming tracked files.

        Confirmed paths are removed from ``tracked``; the rest of the
        live files are untracked.
        """
        entries: list[DiffEntry] = []
        for path in TreeScanner(self._root, ignore=self._ignore).scan():
            if path in tracked:
                tracked.discard(path)
            else:
                entries.append(DiffEntry(DiffKind.UNTRACKED, path))
        logger.debug("Live scan: %d untracked, %d unconfirmed", len(entries), len(tracked))
        return entries

    def _repo_changed(self, backups: dict[str, str]) -> list[DiffEntry]:
        """Phase 2: compare mirrored files against their live copies.

        Every mirrored path leaves ``backups``, hashable or not: the
        mirror is authoritative for it from here on.
        """
        entries: list[DiffEntry] = []
        for path in TreeScanner(self._repo).scan():
            backups.pop(path, None)
            repo_hash = keep_or_skip(try_hash_file(f"{self._repo}{path}"))
            if repo_hash is None:
                continue
            live_hash = keep_or_skip(try_hash_file(f"{self._root}{path}"))
            if live_hash is None:
                continue
            if repo_hash != live_hash:
                entries.append(DiffEntry(DiffKind.REPO_CHANGED, path))
        return entries

    def _deleted(self, tracked: Iterable[str]) -> list[DiffEntry]:
        """Phase 3: check unconfirmed tracked paths for existence."""
        return self._fan_out(tracked, self._check_deleted)

    def _backup_changed(self, backups: dict[str, str]) -> list[DiffEntry]:
        """Phase 4: compare remaining backup files with their records."""
        return self._fan_out(backups.items(), self._check_backup)

    def _check_deleted(self, path: str) -> DiffEntry | None:
        """Report a tracked path as deleted if it is not on disk.

        Paths hidden by pruning in phase 1 but present are not reported.
        """
        if self._ignore.match_direct(path, False) == IgnoreMatch.EXCLUDED:
            return None
        outcome = attempt(os.stat, f"{self._root}{path}")
        if outcome.ok:
            return None
        if isinstance(outcome.error, _MISSING_ERRORS):
            return DiffEntry(DiffKind.DELETED, path)
        # Exists but unreadable (e.g. EACCES on a parent): unknown state
        keep_or_skip(outcome)
        return None

    def _check_backup(self, item: tuple[str, str]) -> DiffEntry | None:
        """Report a backup file whose content changed since install."""
        path, expected_hash = item
        if self._ignore.match_any_ancestor(path, False):
            return None
        actual_hash = keep_or_skip(try_hash_file(f"{self._root}{path}"))
        if actual_hash is None or actual_hash == expected_hash:
            return None
        return DiffEntry(DiffKind.BACKUP_CHANGED, path)

    def _fan_out(
        self,
        items: Iterable[T],
        check: Callable[[T], DiffEntry | None],
    ) -> list[DiffEntry]:
        """Run independent per-item checks on the worker pool.

        Results are gathered by the calling thread only; workers share
        nothing but the read-only inputs.

        Args:
            items: Inputs; not modified while workers run.
            check: Per-item check returning an entry or None.

        Returns:
            Entries in completion order.
        """
        entries: list[DiffEntry] = []
        with ThreadPoolExecutor(max_workers=self._workers) as executor:
            futures = [executor.submit(check, item) for item in items]
            for future in as_completed(futures):
                entry = future.result()
                if entry is not None:
                    entries.append(entry)
        return entries
