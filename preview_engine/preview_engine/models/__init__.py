"""Domain models for the livepreview engine."""

from preview_engine.models.diff import ChangeSet
from preview_engine.models.operations import FileAction, FileOperation, FileOperationResult
from preview_engine.models.preview import DEFAULT_ROOT_CANDIDATES, RenderMode, SynthesisOptions
from preview_engine.models.project import FileEntry, ProjectRecord, ProjectStatus
from preview_engine.models.snapshot import (
    InvalidSnapshotError,
    ProjectSnapshot,
    SyncRequest,
    check_file_entry,
    parse_sync_payload,
)
from preview_engine.models.summary import ProjectSummary
from preview_engine.models.version import SyncResult, VersionHistory, VersionRecord

__all__ = [
    "DEFAULT_ROOT_CANDIDATES",
    "ChangeSet",
    "FileAction",
    "FileEntry",
    "FileOperation",
    "FileOperationResult",
    "InvalidSnapshotError",
    "ProjectRecord",
    "ProjectSnapshot",
    "ProjectStatus",
    "ProjectSummary",
    "RenderMode",
    "SyncRequest",
    "SyncResult",
    "SynthesisOptions",
    "VersionHistory",
    "VersionRecord",
    "check_file_entry",
    "parse_sync_payload",
]
