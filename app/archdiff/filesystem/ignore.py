"""Gitignore-syntax exclusion rules for the audit.

Rules are read from every file in the ignore directory (e.g.
/etc/archdiff/ignore/base, /etc/archdiff/ignore/local) and compiled with
pathspec's gitwildmatch patterns. Patterns are anchored at the install
root, so queries take root-relative paths such as ``etc/pacman.d/gnupg``.

Two query modes are exposed:

- ``match_direct`` judges the path alone. A rule that matches a parent
  directory does not by itself exclude a child.
- ``match_any_ancestor`` judges the path and then each containing
  directory, nearest first; the first decisive rule wins.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path

from pathspec.patterns import GitWildMatchPattern

logger = logging.getLogger(__name__)

# Named group pathspec's gitwildmatch regexes use for the separator after
# a matched directory (pathspec <1.0). A pattern like "var/cache/" compiles
# to "^var/cache(?P<ps_d>/).*$"; if the group ends before the end of the
# candidate, the rule matched a parent directory, not the path itself.
_DIR_MARK = "ps_d"


class IgnoreMatch(str, Enum):
    """Verdict of a direct ignore query."""

    INCLUDED = "included"
    EXCLUDED = "excluded"


class IgnoreRulesError(Exception):
    """Raised when ignore rules cannot be loaded or compiled."""


def _is_descendant_match(match: re.Match[str], candidate: str) -> bool:
    """Check if a pattern matched only because a parent directory matched."""
    if _DIR_MARK not in match.re.groupindex:
        return False
    end = match.end(_DIR_MARK)
    return end != -1 and end < len(candidate)


class IgnoreMatcher:
    """Ordered gitignore rule set with last-match-wins semantics.

    Args:
        patterns: Compiled patterns in rule order. Comment and blank
            patterns (``include is None``) are dropped.
    """

    def __init__(self, patterns: list[GitWildMatchPattern] | None = None) -> None:
        self._patterns = [p for p in patterns or [] if p.include is not None]

    def __len__(self) -> int:
        return len(self._patterns)

    @classmethod
    def empty(cls) -> IgnoreMatcher:
        """Create a matcher that excludes nothing."""
        return cls()

    @classmethod
    def from_lines(cls, lines: list[str]) -> IgnoreMatcher:
        """Compile gitignore-syntax lines into a matcher.

        Args:
            lines: Pattern lines, in priority order (later lines win).

        Returns:
            Compiled IgnoreMatcher.

        Raises:
            IgnoreRulesError: If a line is not a valid pattern.
        """
        patterns: list[GitWildMatchPattern] = []
        for line in lines:
            try:
                patterns.append(GitWildMatchPattern(line.rstrip("\r\n")))
            except ValueError as e:
                raise IgnoreRulesError(f"Invalid ignore pattern {line.strip()!r}: {e}") from e
        return cls(patterns)

    def _decide(self, path: str, is_dir: bool) -> bool | None:
        """Apply the rules to a single path.

        Returns:
            True if excluded, False if re-included by a negated rule,
            None if no rule matches the path itself.
        """
        rel = path.strip("/")
        if not rel:
            return None
        candidate = f"{rel}/" if is_dir else rel

        verdict: bool | None = None
        for pattern in self._patterns:
            match = pattern.regex.match(candidate)
            if match is None or _is_descendant_match(match, candidate):
                continue
            verdict = bool(pattern.include)
        return verdict

    def match_direct(self, path: str, is_dir: bool) -> IgnoreMatch:
        """Check whether a path itself is excluded.

        Args:
            path: Root-relative path.
            is_dir: Whether the path is a directory.

        Returns:
            IgnoreMatch.EXCLUDED if the last matching rule excludes it.
        """
        if self._decide(path, is_dir):
            return IgnoreMatch.EXCLUDED
        return IgnoreMatch.INCLUDED

    def match_any_ancestor(self, path: str, is_dir: bool) -> bool:
        """Check whether a path or any containing directory is excluded.

        The path is checked first, then its parents from nearest to the
        root. A negated rule on a nearer level re-includes the path even
        if a more distant directory is excluded.

        Args:
            path: Root-relative path.
            is_dir: Whether the path is a directory.

        Returns:
            True if the path is excluded directly or through a parent.
        """
        parts = path.strip("/").split("/")
        verdict = self._decide(path, is_dir)
        while verdict is None and len(parts) > 1:
            parts.pop()
            verdict = self._decide("/".join(parts), True)
        return bool(verdict)


def load_ignore_rules(directory: Path) -> IgnoreMatcher:
    """Compile every rule file in a directory into one matcher.

    Files are read in name order and their rules concatenated, so a rule
    in a later file overrides an earlier one. Subdirectories are skipped.

    Args:
        directory: Directory holding gitignore-syntax rule files.

    Returns:
        Compiled IgnoreMatcher.

    Raises:
        IgnoreRulesError: If the directory or a rule file cannot be read,
            or a rule does not compile.
    """
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise IgnoreRulesError(f"Cannot read ignore directory {directory}: {e}") from e

    lines: list[str] = []
    for entry in entries:
        if not entry.is_file():
            logger.debug("Skipping non-file entry in ignore directory: %s", entry)
            continue
        try:
            lines.extend(entry.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError) as e:
            raise IgnoreRulesError(f"Cannot read ignore file {entry}: {e}") from e
        logger.debug("Loaded ignore rules from %s", entry)

    try:
        matcher = IgnoreMatcher.from_lines(lines)
    except IgnoreRulesError as e:
        raise IgnoreRulesError(f"{e} (in {directory})") from e

    logger.info("Loaded %d ignore rules from %s", len(matcher), directory)
    return matcher
