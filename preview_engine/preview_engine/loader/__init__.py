"""Snapshot loaders."""

from preview_engine.loader.directory_loader import SnapshotLoadError, load_snapshot_from_directory

__all__ = ["SnapshotLoadError", "load_snapshot_from_directory"]
