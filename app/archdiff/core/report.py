"""Drift report rendering.

Entries are sorted by relative path and rendered one per line as
``<marker> <absolute path>``, with no header and no summary, so the
output can be piped straight into other tools.
"""

from collections.abc import Iterable
from typing import TextIO

from archdiff.models.diff import DiffEntry, DiffKind


def sort_entries(entries: Iterable[DiffEntry]) -> list[DiffEntry]:
    """Sort entries ascending by relative path."""
    return sorted(entries, key=lambda e: e.path)


def render_lines(entries: Iterable[DiffEntry], root: str) -> list[str]:
    """Render sorted report lines.

    Args:
        entries: Diff entries in any order.
        root: Install root, ending with "/".

    Returns:
        One ``<marker> <root><path>`` line per entry.
    """
    return [f"{e.kind.marker} {root}{e.path}" for e in sort_entries(entries)]


def write_report(entries: Iterable[DiffEntry], root: str, stream: TextIO) -> None:
    """Write the text report to a stream.

    Args:
        entries: Diff entries in any order.
        root: Install root, ending with "/".
        stream: Output stream (normally stdout).
    """
    for line in render_lines(entries, root):
        stream.write(f"{line}\n")


def report_to_dict(entries: Iterable[DiffEntry], root: str) -> dict[str, object]:
    """Convert the report to a dictionary for JSON serialization.

    Args:
        entries: Diff entries in any order.
        root: Install root, ending with "/".

    Returns:
        Dictionary with the root, per-kind counts and sorted entries.
    """
    ordered = sort_entries(entries)
    summary: dict[str, int] = {kind.value: 0 for kind in DiffKind}
    for entry in ordered:
        summary[entry.kind.value] += 1
    summary["total"] = len(ordered)

    return {
        "root": root,
        "summary": summary,
        "entries": [
            {
                "kind": e.kind.value,
                "marker": e.kind.marker,
                "path": f"{root}{e.path}",
            }
            for e in ordered
        ],
    }
