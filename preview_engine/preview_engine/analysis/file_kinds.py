"""File classification by extension."""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath


class FileKind(str, Enum):
    MARKUP = "markup"
    STYLE = "style"
    SCRIPT = "script"
    COMPONENT = "component"
    OTHER = "other"


_EXTENSION_KINDS: dict[str, FileKind] = {
    ".html": FileKind.MARKUP,
    ".htm": FileKind.MARKUP,
    ".css": FileKind.STYLE,
    ".js": FileKind.SCRIPT,
    ".mjs": FileKind.SCRIPT,
    ".jsx": FileKind.COMPONENT,
    ".tsx": FileKind.COMPONENT,
}


def classify_path(path: str) -> FileKind:
    """Return the :class:`FileKind` for *path* (case-insensitive extension match)."""
    return _EXTENSION_KINDS.get(PurePosixPath(path).suffix.lower(), FileKind.OTHER)


def paths_of_kind(paths: list[str] | dict[str, str], kind: FileKind) -> list[str]:
    """Return the sorted subset of *paths* classified as *kind*."""
    return sorted(p for p in paths if classify_path(p) is kind)
