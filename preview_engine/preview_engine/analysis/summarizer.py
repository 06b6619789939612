"""Best-effort static facts about a snapshot, for context building.

Everything here is regex search over raw text.  Nothing is parsed, so a
miss just yields an empty field; no input can make these functions raise.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping

from preview_engine.analysis.file_kinds import FileKind, classify_path
from preview_engine.models.summary import ProjectSummary
from preview_engine.telemetry.profiling import profile_operation

logger = logging.getLogger(__name__)

# Capitalised identifier after a declaration keyword: ``function Nav``,
# ``const Card =``, ``class Modal``.
_COMPONENT_RE = re.compile(r"\b(?:function|const|let|var|class)\s+([A-Z][A-Za-z0-9_]*)")

# String literal after the conventional routing attribute: ``path="/about"``
# or ``path={'/about'}``.
_ROUTE_RE = re.compile(r"""\bpath\s*=\s*\{?\s*["'`]([^"'`]+)["'`]""")

# Utility-class vocabulary inside class / className attributes.
_UTILITY_CLASS_RE = re.compile(
    r"""\bclass(?:Name)?\s*=\s*\{?\s*["'`][^"'`]*"""
    r"""(?:\bflex\b|\bgrid\b|\bbg-|\btext-|\bp[xytrbl]?-\d|\bm[xytrbl]?-\d|\bw-|\bh-|\brounded|\bshadow"""
    r"""|\bborder\b|\bgap-|\bspace-[xy]-|\bitems-|\bjustify-)""",
    re.IGNORECASE,
)
_FRAMEWORK_REFERENCE_RE = re.compile(r"tailwind", re.IGNORECASE)

_SOURCE_KINDS = frozenset({FileKind.SCRIPT, FileKind.COMPONENT, FileKind.MARKUP})


def _unique(values: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


def extract_component_names(source: str) -> list[str]:
    """Return capitalised declaration names in order of first appearance."""
    return _unique(_COMPONENT_RE.findall(source))


def extract_routes(source: str) -> list[str]:
    """Return route strings attached to ``path=`` attributes."""
    return _unique(_ROUTE_RE.findall(source))


def uses_utility_framework(files: Mapping[str, str]) -> bool:
    """True when any file uses utility classes or references the framework by name."""
    for content in files.values():
        if _UTILITY_CLASS_RE.search(content) or _FRAMEWORK_REFERENCE_RE.search(content):
            return True
    return False


@profile_operation("snapshot.summarize")
def summarize_snapshot(files: Mapping[str, str]) -> ProjectSummary:
    """Compute the advisory :class:`ProjectSummary` for *files*."""
    paths = sorted(files)
    components: list[str] = []
    routes: list[str] = []

    for path in paths:
        if classify_path(path) not in _SOURCE_KINDS:
            continue
        content = files[path]
        components.extend(extract_component_names(content))
        routes.extend(extract_routes(content))

    summary = ProjectSummary(
        file_count=len(paths),
        file_paths=paths,
        components=_unique(components),
        routes=_unique(routes),
        has_css=any(classify_path(p) is FileKind.STYLE for p in paths),
        has_tailwind=uses_utility_framework(files),
        total_size=sum(len(content.encode("utf-8", errors="replace")) for content in files.values()),
    )
    logger.debug(
        "Summarised %d files: components=%d routes=%d",
        summary.file_count,
        len(summary.components),
        len(summary.routes),
    )
    return summary
