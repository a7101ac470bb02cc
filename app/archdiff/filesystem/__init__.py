"""Filesystem access for the audit.

This module provides content hashing, ignore rule matching and tree
scanning over the install root and the repository mirror.
"""

from archdiff.filesystem.hasher import hash_file, try_hash_file
from archdiff.filesystem.ignore import (
    IgnoreMatch,
    IgnoreMatcher,
    IgnoreRulesError,
    load_ignore_rules,
)
from archdiff.filesystem.scanner import TreeScanner

__all__ = [
    "IgnoreMatch",
    "IgnoreMatcher",
    "IgnoreRulesError",
    "TreeScanner",
    "hash_file",
    "load_ignore_rules",
    "try_hash_file",
]
