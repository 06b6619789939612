"""Rendering-mode classification by file shape."""

from __future__ import annotations

import re
from collections.abc import Mapping

from preview_engine.analysis.file_kinds import FileKind, classify_path
from preview_engine.models.preview import RenderMode

_DOCUMENT_MARKER_RE = re.compile(r"<!doctype|<html[\s>]", re.IGNORECASE)


def is_full_document(markup: str) -> bool:
    """True when *markup* carries a doctype or a document-root tag."""
    return _DOCUMENT_MARKER_RE.search(markup) is not None


def find_full_document(files: Mapping[str, str]) -> str | None:
    """Return the path of the markup file to use as the passthrough document.

    An ``index.html`` / ``index.htm`` wins (shallowest first); otherwise
    the first full document in path order.
    """
    candidates = sorted(
        p for p in files if classify_path(p) is FileKind.MARKUP and is_full_document(files[p])
    )
    if not candidates:
        return None
    indexes = [p for p in candidates if p.rsplit("/", 1)[-1].lower() in ("index.html", "index.htm")]
    if indexes:
        return min(indexes, key=lambda p: (p.count("/"), p))
    return candidates[0]


def detect_render_mode(files: Mapping[str, str]) -> RenderMode:
    """Classify *files* into a :class:`RenderMode`.

    Component files take precedence over a full markup document; an empty
    snapshot is plain.
    """
    if any(classify_path(p) is FileKind.COMPONENT for p in files):
        return RenderMode.COMPONENT
    if find_full_document(files) is not None:
        return RenderMode.PASSTHROUGH
    return RenderMode.PLAIN
