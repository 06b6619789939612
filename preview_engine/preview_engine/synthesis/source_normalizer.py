"""Textual normalisation of component-style modules for single-scope execution.

Component files are concatenated into one inline script, so every statement
that moves bindings across file boundaries has to go.  The normaliser is a
fixed sequence of independent passes over raw text; there is no parser.
Anything that does not match a pass's pattern is left exactly as written.

**Passes (applied in order)**:

1. ``imports`` -- drop ``import ... from "x";`` (including brace lists that
   span several lines), ``import "x";`` side-effect imports and
   ``import type ...`` lines.
2. ``reexports`` -- drop ``export * from "x";``, ``export { a } from "x";``
   and bare export lists ``export { a, b as c };``.
3. ``default_exports`` -- ``export default function|class|async function``
   loses its ``export default`` prefix (name and kind kept); a bare
   ``export default Name;`` line is dropped.
4. ``named_exports`` -- ``export`` is stripped from ``function``, ``async
   function``, ``class``, ``const``, ``let`` and ``var`` declarations.
5. ``mount_calls`` -- statements attaching a root component to the page are
   removed: ``ReactDOM.render(...)``, ``[ReactDOM.]createRoot(...)...``,
   ``[ReactDOM.]hydrateRoot(...)...``, ``const root = createRoot(...)`` and
   ``root.render(...)`` for that binding.  Call extents are found by paren
   balancing that skips string literals.
6. ``blank_lines`` -- runs of blank lines collapse to one, leading and
   trailing blank lines are trimmed.

Every pass is idempotent and no pass produces input another pass would
match, so ``normalize(normalize(x)) == normalize(x)``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

logger = logging.getLogger(__name__)

_MODULE_SPEC = r"""(?:"[^"\n]*"|'[^'\n]*')"""

_IMPORT_FROM_RE = re.compile(
    r"^[ \t]*import\s+(?:type\s+)?(?:[\w$*\s,]*\{[^}]*\}|[\w$*][\w$*\s,]*?)\s*from\s*"
    + _MODULE_SPEC
    + r"[ \t]*;?[ \t]*(?:\n|$)",
    re.MULTILINE,
)
_IMPORT_SIDE_EFFECT_RE = re.compile(r"^[ \t]*import\s*" + _MODULE_SPEC + r"[ \t]*;?[ \t]*(?:\n|$)", re.MULTILINE)

_EXPORT_STAR_RE = re.compile(
    r"^[ \t]*export\s+\*(?:\s+as\s+[\w$]+)?\s+from\s*" + _MODULE_SPEC + r"[ \t]*;?[ \t]*(?:\n|$)",
    re.MULTILINE,
)
_EXPORT_LIST_RE = re.compile(
    r"^[ \t]*export\s+(?:type\s+)?\{[^}]*\}(?:\s*from\s*" + _MODULE_SPEC + r")?[ \t]*;?[ \t]*(?:\n|$)",
    re.MULTILINE,
)

_EXPORT_DEFAULT_DECL_RE = re.compile(
    r"^([ \t]*)export\s+default\s+(?=(?:async\s+)?function\b|class\b)",
    re.MULTILINE,
)
_EXPORT_DEFAULT_NAME_RE = re.compile(r"^[ \t]*export\s+default\s+[A-Za-z_$][\w$]*[ \t]*;?[ \t]*(?:\n|$)", re.MULTILINE)

_EXPORT_NAMED_DECL_RE = re.compile(
    r"^([ \t]*)export\s+(?=(?:async\s+)?function\b|class\b|const\b|let\b|var\b)",
    re.MULTILINE,
)

_MOUNT_START_RE = re.compile(
    r"^[ \t]*(?:ReactDOM\s*\.\s*render|(?:ReactDOM\s*\.\s*)?(?:createRoot|hydrateRoot))\s*\(",
    re.MULTILINE,
)
_ROOT_BINDING_RE = re.compile(
    r"^[ \t]*(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*=\s*(?:ReactDOM\s*\.\s*)?(?:createRoot|hydrateRoot)\s*\(",
    re.MULTILINE,
)

_BLANK_RUN_RE = re.compile(r"\n(?:[ \t]*\n){2,}")


def _strip_imports(source: str) -> str:
    source = _IMPORT_FROM_RE.sub("", source)
    return _IMPORT_SIDE_EFFECT_RE.sub("", source)


def _strip_reexports(source: str) -> str:
    source = _EXPORT_STAR_RE.sub("", source)
    return _EXPORT_LIST_RE.sub("", source)


def _unwrap_default_exports(source: str) -> str:
    source = _EXPORT_DEFAULT_DECL_RE.sub(r"\1", source)
    return _EXPORT_DEFAULT_NAME_RE.sub("", source)


def _strip_named_exports(source: str) -> str:
    return _EXPORT_NAMED_DECL_RE.sub(r"\1", source)


def _call_end(source: str, open_paren: int) -> int | None:
    """Return the index just past the paren that closes *open_paren*.

    String and template literals are skipped; ``None`` when unbalanced.
    """
    depth = 0
    i = open_paren
    quote: str | None = None
    while i < len(source):
        ch = source[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


_CHAIN_RE = re.compile(r"\s*\.\s*[A-Za-z_$][\w$]*\s*\(")
_STATEMENT_TAIL_RE = re.compile(r"[ \t]*;?[ \t]*(?:\n|$)")


def _statement_end(source: str, call_open: int) -> int | None:
    """End of a call statement starting at *call_open*, following ``.method(...)`` chains."""
    end = _call_end(source, call_open)
    while end is not None:
        chained = _CHAIN_RE.match(source, end)
        if chained is None:
            break
        end = _call_end(source, chained.end() - 1)
    if end is None:
        return None
    tail = _STATEMENT_TAIL_RE.match(source, end)
    if tail is None:
        return None
    return tail.end()


def _remove_statements(source: str, pattern: re.Pattern[str]) -> str:
    """Remove every statement whose first call matches *pattern*."""
    pos = 0
    while True:
        match = pattern.search(source, pos)
        if match is None:
            return source
        end = _statement_end(source, match.end() - 1)
        if end is None:
            # Unbalanced: leave it and move on.
            pos = match.end()
            continue
        source = source[: match.start()] + source[end:]
        pos = match.start()


def _strip_mount_calls(source: str) -> str:
    bindings = _ROOT_BINDING_RE.findall(source)
    source = _remove_statements(source, _ROOT_BINDING_RE)
    source = _remove_statements(source, _MOUNT_START_RE)
    for name in dict.fromkeys(bindings):
        render_re = re.compile(r"^[ \t]*" + re.escape(name) + r"\s*\.\s*render\s*\(", re.MULTILINE)
        source = _remove_statements(source, render_re)
    return source


def _collapse_blank_lines(source: str) -> str:
    source = _BLANK_RUN_RE.sub("\n\n", source)
    source = re.sub(r"\A(?:[ \t]*\n)+", "", source)
    return re.sub(r"(?:\n[ \t]*)+\Z", "", source)


NORMALIZER_PASSES: tuple[tuple[str, Callable[[str], str]], ...] = (
    ("imports", _strip_imports),
    ("reexports", _strip_reexports),
    ("default_exports", _unwrap_default_exports),
    ("named_exports", _strip_named_exports),
    ("mount_calls", _strip_mount_calls),
    ("blank_lines", _collapse_blank_lines),
)


def normalize_component_source(source: str) -> str:
    """Run every normaliser pass over *source* in order."""
    if "\r\n" in source:
        source = source.replace("\r\n", "\n")
    for name, transform in NORMALIZER_PASSES:
        updated = transform(source)
        if updated != source:
            logger.debug("normalizer pass %s rewrote %d -> %d chars", name, len(source), len(updated))
        source = updated
    return source
