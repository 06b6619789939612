"""Heuristic static analysis over snapshots."""

from preview_engine.analysis.file_kinds import FileKind, classify_path, paths_of_kind
from preview_engine.analysis.mode_detector import detect_render_mode, find_full_document, is_full_document
from preview_engine.analysis.summarizer import (
    extract_component_names,
    extract_routes,
    summarize_snapshot,
    uses_utility_framework,
)

__all__ = [
    "FileKind",
    "classify_path",
    "detect_render_mode",
    "extract_component_names",
    "extract_routes",
    "find_full_document",
    "is_full_document",
    "paths_of_kind",
    "summarize_snapshot",
    "uses_utility_framework",
]
