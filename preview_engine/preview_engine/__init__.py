"""livepreview engine: preview synthesis, snapshot analysis and version history."""

from preview_engine.config import Settings, load_settings
from preview_engine.models.snapshot import InvalidSnapshotError, ProjectSnapshot
from preview_engine.project.actor import ProjectActor
from preview_engine.project.registry import ProjectRegistry, open_registry
from preview_engine.service import apply_sync, list_versions, render_preview, summarize
from preview_engine.versioning.ledger import VersionLedger

__version__ = "0.1.0"

__all__ = [
    "InvalidSnapshotError",
    "ProjectActor",
    "ProjectRegistry",
    "ProjectSnapshot",
    "Settings",
    "VersionLedger",
    "apply_sync",
    "list_versions",
    "load_settings",
    "open_registry",
    "render_preview",
    "summarize",
]
