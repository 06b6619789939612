"""Snapshot models describing one complete state of a project's files.

A snapshot is a plain ``path -> source text`` mapping.  It is replaced
wholesale on every sync and never mutated in place once stored, so the
model is frozen and every accessor hands out a copy of the mapping.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class InvalidSnapshotError(ValueError):
    """Raised when a payload cannot be represented as ``path -> text`` pairs.

    Raised synchronously before any project state is touched.
    """


def check_file_entry(path: str, content: str | None = None) -> None:
    """Raise ``ValueError`` if *path* (and *content*, when given) break the snapshot rules."""
    if not path or not path.strip():
        raise ValueError("file paths must be non-empty")
    if "\x00" in path:
        raise ValueError(f"file path contains a NUL byte: {path!r}")
    for label, text in (("path", path), ("content", content)):
        if text is None:
            continue
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"file {label} of {path!r} is not valid UTF-8 text: {exc.reason}") from exc


class ProjectSnapshot(BaseModel):
    """Immutable file-set snapshot for a single project."""

    model_config = ConfigDict(frozen=True)

    files: dict[str, str] = Field(
        default_factory=dict,
        description="Source text keyed by project-relative path.",
    )

    @field_validator("files")
    @classmethod
    def _validate_entries(cls, value: dict[str, str]) -> dict[str, str]:
        for path, content in value.items():
            check_file_entry(path, content)
        return dict(value)

    @classmethod
    def of(cls, files: dict[str, str] | None = None) -> ProjectSnapshot:
        """Build a snapshot, converting validation failures to :class:`InvalidSnapshotError`."""
        try:
            return cls(files=dict(files or {}))
        except ValidationError as exc:
            raise InvalidSnapshotError(str(exc)) from exc

    def copy_files(self) -> dict[str, str]:
        """Return a private copy of the file mapping."""
        return dict(self.files)

    @property
    def paths(self) -> list[str]:
        return sorted(self.files)

    def __len__(self) -> int:
        return len(self.files)


class SyncRequest(BaseModel):
    """Inbound sync payload from the edit-producing collaborator."""

    project_id: str = Field(..., min_length=1, description="Target project identifier.")
    actor_id: str = Field(..., min_length=1, description="User or agent submitting the files.")
    files: dict[str, str] = Field(..., description="Complete replacement file set.")
    name: str | None = Field(default=None, description="Optional display name for the project.")
    message: str | None = Field(default=None, description="Free-text version message.")
    received_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


def parse_sync_payload(payload: object) -> SyncRequest:
    """Validate a raw sync payload.

    Raises
    ------
    InvalidSnapshotError
        If required fields are missing or any file entry is not text.
    """
    if not isinstance(payload, dict):
        raise InvalidSnapshotError(f"sync payload must be an object, got {type(payload).__name__}")
    try:
        request = SyncRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidSnapshotError(str(exc)) from exc
    # Path rules live on the snapshot model; run them before accepting.
    ProjectSnapshot.of(request.files)
    return request
