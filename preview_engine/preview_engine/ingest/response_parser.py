"""Extract project files from an assistant's markdown response.

A file is a fenced code block announced by one of these markers on the
line directly above the fence::

    // filename: src/App.jsx
    <!-- filename: index.html -->
    **`src/styles.css`**
    ### src/main.js

When none of those match, a ``// filename:`` comment on the first lines
inside a fence is accepted instead.
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath

logger = logging.getLogger(__name__)

_MARKED_BLOCK_RE = re.compile(
    r"(?:"
    r"//[ \t]*filename:[ \t]*(?P<comment>[^\n]+?)[ \t]*\n"
    r"|<!--[ \t]*filename:[ \t]*(?P<html>[^\n]+?)[ \t]*-->[ \t]*\n"
    r"|\*\*`?(?P<bold>[^`*\n]+\.\w+)`?\*\*[ \t]*\n"
    r"|\#{1,6}[ \t]*`?(?P<heading>[^`\n]+\.\w+)`?[ \t]*\n"
    r")"
    r"```(?P<lang>\w+)?[ \t]*\n(?P<code>.*?)```",
    re.DOTALL,
)
_FENCE_RE = re.compile(r"```(\w+)?[ \t]*\n(.*?)```", re.DOTALL)
_INLINE_MARKER_RE = re.compile(r"^//\s*filename:\s*(.+)$\n?", re.MULTILINE)

_LANGUAGES = {
    "html": "html",
    "htm": "html",
    "css": "css",
    "scss": "css",
    "less": "css",
    "js": "javascript",
    "mjs": "javascript",
    "jsx": "jsx",
    "tsx": "tsx",
    "ts": "typescript",
    "json": "json",
    "md": "markdown",
    "svg": "svg",
    "txt": "text",
}


def detect_language(path: str) -> str:
    """Editor language name for *path*, ``"text"`` when unknown."""
    return _LANGUAGES.get(PurePosixPath(path).suffix.lstrip(".").lower(), "text")


def parse_project_files(markdown: str) -> dict[str, str]:
    """Return ``path -> code`` for every announced code block in *markdown*.

    Later blocks for the same path replace earlier ones.  Blocks whose path
    or body is empty are skipped.
    """
    files: dict[str, str] = {}
    for match in _MARKED_BLOCK_RE.finditer(markdown):
        path = next(
            (match.group(g) for g in ("comment", "html", "bold", "heading") if match.group(g)),
            "",
        ).strip()
        code = match.group("code").strip()
        if path and code:
            files[path] = code

    if not files:
        for fence in _FENCE_RE.finditer(markdown):
            body = fence.group(2)
            marker = _INLINE_MARKER_RE.search(body)
            if marker is None:
                continue
            path = marker.group(1).strip()
            code = _INLINE_MARKER_RE.sub("", body, count=1).strip()
            if path:
                files[path] = code

    logger.debug("Parsed %d file(s) from response", len(files))
    return files
