"""Deterministic load order for component files.

Definitions must be concatenated before the files that use them so the
auto-mount step can find the root component by name.  This is a naming
heuristic, not dependency resolution:

1. files with a ``components`` directory segment come first;
2. among the remaining files, any whose file name contains ``App`` goes last;
3. ties break on lexicographic path.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

SHARED_COMPONENTS_SEGMENT = "components"
ROOT_APPLICATION_MARKER = "App"


def _in_shared_components(path: str) -> bool:
    return SHARED_COMPONENTS_SEGMENT in PurePosixPath(path).parts[:-1]


def _order_key(path: str) -> tuple[int, int, str]:
    shared = _in_shared_components(path)
    is_root_app = not shared and ROOT_APPLICATION_MARKER in PurePosixPath(path).name
    return (0 if shared else 1, 1 if is_root_app else 0, path)


def order_component_files(paths: Iterable[str]) -> list[str]:
    """Return *paths* in concatenation order."""
    return sorted(paths, key=_order_key)
