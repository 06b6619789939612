"""Change detection between two snapshots by exact content comparison.

No normalisation is applied: trailing whitespace and line-ending changes
count as modifications.  Output lists are sorted so identical inputs always
serialise identically.
"""

from __future__ import annotations

from collections.abc import Mapping

from preview_engine.models.diff import ChangeSet


def compute_change_set(
    previous_files: Mapping[str, str] | None,
    current_files: Mapping[str, str],
) -> ChangeSet:
    """Compare *previous_files* (possibly empty) against *current_files*.

    Parameters
    ----------
    previous_files:
        The snapshot being replaced.  ``None`` is treated as empty.
    current_files:
        The incoming snapshot.

    Returns
    -------
    ChangeSet
        ``changed`` holds added and modified paths, ``removed`` holds paths
        missing from *current_files*.
    """
    previous = previous_files or {}

    added = sorted(path for path in current_files if path not in previous)
    modified = sorted(
        path for path in current_files if path in previous and previous[path] != current_files[path]
    )
    removed = sorted(path for path in previous if path not in current_files)

    return ChangeSet(
        changed=sorted(added + modified),
        removed=removed,
        added=added,
        modified=modified,
    )
