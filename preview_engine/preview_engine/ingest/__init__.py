"""Turning assistant responses into snapshots."""

from preview_engine.ingest.response_parser import detect_language, parse_project_files

__all__ = ["detect_language", "parse_project_files"]
