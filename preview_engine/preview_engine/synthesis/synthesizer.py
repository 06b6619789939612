"""Single-document synthesis for live previews.

Turns a snapshot into one self-contained HTML document that an iframe can
load with no server behind it.  Three strategies, picked by
:func:`~preview_engine.analysis.mode_detector.detect_render_mode`:

* **passthrough** -- the project's own full HTML document, with local
  ``<link>`` / ``<script src>`` references removed and styles and scripts
  inlined.
* **component** -- a generated shell that loads React, ReactDOM and Babel
  from a CDN, provides a hash router, concatenates the normalised component
  files in load order and mounts the first root component it can find.
* **plain** -- a generated shell around the project's markup fragments and
  scripts.

Every strategy injects the diagnostics shim first in the head, and the
utility-class framework script when the project uses it.  Synthesis is pure
and never raises for a valid snapshot; an empty snapshot yields an empty
plain shell.
"""

from __future__ import annotations

import html
import json
import logging
import re
from collections.abc import Mapping

from preview_engine.analysis.file_kinds import FileKind, paths_of_kind
from preview_engine.analysis.mode_detector import detect_render_mode, find_full_document
from preview_engine.analysis.summarizer import uses_utility_framework
from preview_engine.models.preview import RenderMode, SynthesisOptions
from preview_engine.synthesis.assets import (
    BASELINE_CSS,
    HASH_ROUTER,
    REACT_HOOK_BINDINGS,
    TSX_PRESET_REGISTRATION,
    diagnostics_shim_script,
)
from preview_engine.synthesis.file_orderer import order_component_files
from preview_engine.synthesis.source_normalizer import normalize_component_source
from preview_engine.telemetry.profiling import profile_operation

logger = logging.getLogger(__name__)

_ABSOLUTE_URL_RE = re.compile(r"^(?:[a-z][a-z0-9+.-]*:|//)", re.IGNORECASE)
_LINK_TAG_RE = re.compile(r"<link\b[^>]*?\bhref\s*=\s*([\"'])(.*?)\1[^>]*>[ \t]*\n?", re.IGNORECASE | re.DOTALL)
_SCRIPT_SRC_TAG_RE = re.compile(
    r"<script\b[^>]*?\bsrc\s*=\s*([\"'])(.*?)\1[^>]*>\s*</script\s*>[ \t]*\n?",
    re.IGNORECASE | re.DOTALL,
)
_HEAD_OPEN_RE = re.compile(r"<head\b[^>]*>", re.IGNORECASE)
_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html\b[^>]*>", re.IGNORECASE)
_BODY_OPEN_RE = re.compile(r"<body\b", re.IGNORECASE)
_BODY_CLOSE_RE = re.compile(r"</body\s*>", re.IGNORECASE)
_HTML_CLOSE_RE = re.compile(r"</html\s*>", re.IGNORECASE)
_SCRIPT_CLOSE_RE = re.compile(r"</(script)", re.IGNORECASE)
_STYLE_CLOSE_RE = re.compile(r"</(style)", re.IGNORECASE)
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


# ---------------------------------------------------------------------------
# Fragment helpers
# ---------------------------------------------------------------------------


def _is_local_url(url: str) -> bool:
    return not _ABSOLUTE_URL_RE.match(url.strip())


def _escape_script(text: str) -> str:
    """Keep inlined code from closing its host ``<script>``."""
    return _SCRIPT_CLOSE_RE.sub(r"<\\/\1", text)


def _escape_style(text: str) -> str:
    return _STYLE_CLOSE_RE.sub(r"<\\/\1", text)


def _style_block(css_chunks: list[str], *, baseline: bool) -> str:
    parts = [BASELINE_CSS] if baseline else []
    parts.extend(_escape_style(chunk) for chunk in css_chunks)
    if not parts:
        return ""
    return "<style>\n" + "\n".join(parts) + "\n</style>"


def _script_block(js_chunks: list[str]) -> str:
    if not js_chunks:
        return ""
    return "<script>\n" + "\n".join(_escape_script(chunk) for chunk in js_chunks) + "\n</script>"


def _framework_tag(files: Mapping[str, str], options: SynthesisOptions) -> str:
    if not uses_utility_framework(files):
        return ""
    return f'<script src="{html.escape(options.tailwind_url)}"></script>'


def _contents(files: Mapping[str, str], kind: FileKind) -> list[str]:
    return [files[path] for path in paths_of_kind(files, kind)]


def _head(title: str, fragments: list[str]) -> str:
    lines = [
        "<head>",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{html.escape(title)}</title>",
    ]
    lines.extend(fragment for fragment in fragments if fragment)
    lines.append("</head>")
    return "\n".join(lines)


def _document(head: str, body_fragments: list[str]) -> str:
    body = "\n".join(fragment for fragment in body_fragments if fragment)
    return f'<!DOCTYPE html>\n<html lang="en">\n{head}\n<body>\n{body}\n</body>\n</html>\n'


# ---------------------------------------------------------------------------
# Passthrough mode
# ---------------------------------------------------------------------------


def strip_local_references(document: str) -> str:
    """Remove ``<link>`` and ``<script src>`` tags pointing at relative paths."""

    def _drop_if_local(match: re.Match[str]) -> str:
        return "" if _is_local_url(match.group(2)) else match.group(0)

    document = _SCRIPT_SRC_TAG_RE.sub(_drop_if_local, document)
    return _LINK_TAG_RE.sub(_drop_if_local, document)


def _insert_at(document: str, index: int, fragment: str) -> str:
    return document[:index] + fragment + "\n" + document[index:]


def _inject_head_start(document: str, fragment: str) -> str:
    match = _HEAD_OPEN_RE.search(document)
    if match is not None:
        return document[: match.end()] + "\n" + fragment + document[match.end() :]
    match = _HTML_OPEN_RE.search(document)
    if match is not None:
        return document[: match.end()] + "\n<head>\n" + fragment + "\n</head>" + document[match.end() :]
    return fragment + "\n" + document


def _inject_head_end(document: str, fragment: str) -> str:
    match = _HEAD_CLOSE_RE.search(document)
    if match is None:
        match = _BODY_OPEN_RE.search(document)
    if match is None:
        return document + "\n" + fragment
    return _insert_at(document, match.start(), fragment)


def _inject_body_end(document: str, fragment: str) -> str:
    matches = list(_BODY_CLOSE_RE.finditer(document)) or list(_HTML_CLOSE_RE.finditer(document))
    if not matches:
        return document + "\n" + fragment
    return _insert_at(document, matches[-1].start(), fragment)


def _render_passthrough(files: Mapping[str, str], options: SynthesisOptions) -> str:
    doc_path = find_full_document(files)
    if doc_path is None:
        return _render_plain(files, options)

    document = strip_local_references(files[doc_path])
    document = _inject_head_start(document, diagnostics_shim_script())

    framework = _framework_tag(files, options)
    if framework and options.tailwind_url not in document and "cdn.tailwindcss.com" not in document:
        document = _inject_head_end(document, framework)

    styles = _style_block(_contents(files, FileKind.STYLE), baseline=False)
    if styles:
        document = _inject_head_end(document, styles)

    scripts = _script_block(_contents(files, FileKind.SCRIPT))
    if scripts:
        document = _inject_body_end(document, scripts)

    logger.debug("Passthrough document from %s", doc_path)
    return document


# ---------------------------------------------------------------------------
# Component mode
# ---------------------------------------------------------------------------


def build_mount_harness(candidates: tuple[str, ...], mount_element_id: str) -> str:
    """Return the auto-mount loop over *candidates*.

    The candidate table is resolved with ``typeof`` guards, so undeclared
    names are skipped without evaluation tricks.  The first callable entry
    is mounted; a failing candidate is reported and the loop moves on.
    """
    names = [name for name in candidates if _IDENTIFIER_RE.match(name)]
    rows = ",\n".join(
        f"    [{json.dumps(name)}, typeof {name} !== \"undefined\" ? {name} : undefined]" for name in names
    )
    return (
        "(function () {\n"
        f"  var mountNode = document.getElementById({json.dumps(mount_element_id)});\n"
        "  var candidates = [\n"
        f"{rows}\n"
        "  ];\n"
        "  for (var i = 0; i < candidates.length; i++) {\n"
        "    var name = candidates[i][0];\n"
        "    var component = candidates[i][1];\n"
        '    if (typeof component !== "function") { continue; }\n'
        "    try {\n"
        "      ReactDOM.createRoot(mountNode).render(React.createElement(component));\n"
        "      return;\n"
        "    } catch (err) {\n"
        '      console.error("Failed to mount " + name + ": " + (err && err.message ? err.message : err));\n'
        "    }\n"
        "  }\n"
        f'  console.warn({json.dumps("No root component found; tried: " + ", ".join(names))});\n'
        "})();"
    )


def _component_bundle(files: Mapping[str, str]) -> str:
    chunks: list[str] = []
    for path in order_component_files(paths_of_kind(files, FileKind.COMPONENT)):
        label = path.replace("\n", " ").replace("\r", " ")
        chunks.append(f"// --- {label} ---\n{normalize_component_source(files[path])}")
    return "\n\n".join(chunks)


def _render_component(files: Mapping[str, str], options: SynthesisOptions) -> str:
    has_tsx = any(path.lower().endswith(".tsx") for path in files)
    presets = "tsx,react" if has_tsx else "react"

    head_fragments = [
        diagnostics_shim_script(),
        _framework_tag(files, options),
        f'<script src="{html.escape(options.react_url)}" crossorigin></script>',
        f'<script src="{html.escape(options.react_dom_url)}" crossorigin></script>',
        f'<script src="{html.escape(options.babel_url)}"></script>',
        f"<script>\n{TSX_PRESET_REGISTRATION}\n</script>" if has_tsx else "",
        _style_block(_contents(files, FileKind.STYLE), baseline=True),
    ]

    # Project code gets its own block so its const/let/class bindings shadow
    # the runtime names instead of redeclaring them.
    project_block = (
        "{\n"
        + _escape_script(_component_bundle(files))
        + "\n\n"
        + build_mount_harness(options.root_candidates, options.mount_element_id)
        + "\n}"
    )
    program = "\n\n".join([REACT_HOOK_BINDINGS, HASH_ROUTER, project_block])
    body_fragments = [
        f'<div id="{html.escape(options.mount_element_id)}"></div>',
        f'<script type="text/babel" data-presets="{presets}">\n{program}\n</script>',
    ]
    return _document(_head(options.title, head_fragments), body_fragments)


# ---------------------------------------------------------------------------
# Plain mode
# ---------------------------------------------------------------------------


def _render_plain(files: Mapping[str, str], options: SynthesisOptions) -> str:
    head_fragments = [
        diagnostics_shim_script(),
        _framework_tag(files, options),
        _style_block(_contents(files, FileKind.STYLE), baseline=True),
    ]
    markup = _contents(files, FileKind.MARKUP)
    body_fragments = [
        "\n".join(markup) if markup else f'<div id="{html.escape(options.mount_element_id)}"></div>',
        _script_block(_contents(files, FileKind.SCRIPT)),
    ]
    return _document(_head(options.title, head_fragments), body_fragments)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

_RENDERERS = {
    RenderMode.PASSTHROUGH: _render_passthrough,
    RenderMode.COMPONENT: _render_component,
    RenderMode.PLAIN: _render_plain,
}


@profile_operation("preview.synthesize")
def synthesize_document(
    files: Mapping[str, str],
    mode: RenderMode | None = None,
    options: SynthesisOptions | None = None,
) -> str:
    """Return the preview document for *files*.

    Parameters
    ----------
    files:
        Snapshot mapping of path to source text.
    mode:
        Rendering strategy.  Detected from *files* when omitted.
    options:
        CDN locations and mount settings.  Defaults to :class:`SynthesisOptions`.
    """
    if options is None:
        options = SynthesisOptions()
    if mode is None:
        mode = detect_render_mode(files)

    document = _RENDERERS[mode](files, options)
    logger.debug("Synthesised %s document: files=%d chars=%d", mode.value, len(files), len(document))
    return document
