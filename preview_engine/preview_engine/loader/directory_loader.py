"""Build a snapshot from a project directory on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from preview_engine.models.snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)

SKIPPED_DIRECTORIES = frozenset({".git", ".hg", ".svn", "node_modules", "__pycache__", "dist", "build", ".venv"})


class SnapshotLoadError(Exception):
    """Raised when the project root cannot be read."""


def _is_skipped(relative: Path) -> bool:
    parts = relative.parts
    if any(part in SKIPPED_DIRECTORIES for part in parts[:-1]):
        return True
    return any(part.startswith(".") for part in parts)


def load_snapshot_from_directory(root: Path, max_file_bytes: int = 1_000_000) -> ProjectSnapshot:
    """Walk *root* into a snapshot keyed by POSIX relative path.

    Parameters
    ----------
    root:
        Project directory.  The walk is recursive.
    max_file_bytes:
        Files larger than this are skipped with a warning.

    Returns
    -------
    ProjectSnapshot
        Every readable UTF-8 text file not under a VCS, dependency or
        hidden directory.

    Raises
    ------
    SnapshotLoadError
        If *root* does not exist or is not a directory.
    """
    if not root.is_dir():
        raise SnapshotLoadError(f"Project directory does not exist or is not a directory: '{root}'")

    files: dict[str, str] = {}
    skipped = 0
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        relative = path.relative_to(root)
        if _is_skipped(relative):
            continue
        if path.stat().st_size > max_file_bytes:
            logger.warning("Skipping '%s': larger than %d bytes", relative, max_file_bytes)
            skipped += 1
            continue
        try:
            files[relative.as_posix()] = path.read_bytes().decode("utf-8")
        except UnicodeDecodeError:
            logger.info("Skipping '%s': not UTF-8 text", relative)
            skipped += 1

    logger.info("Loaded %d file(s) from '%s' (%d skipped)", len(files), root, skipped)
    return ProjectSnapshot.of(files)
