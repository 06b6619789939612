"""Project-level records handled by the project actor and its stores."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class ProjectRecord(BaseModel):
    """Durable representation of a project and its current snapshot."""

    project_id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    name: str = ""
    template: str | None = None
    files: dict[str, str] = Field(default_factory=dict)
    files_hash: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class FileEntry(BaseModel):
    path: str
    size: int


class ProjectStatus(BaseModel):
    """Status view returned by the actor's ``status`` operation."""

    project_id: str
    name: str
    owner_id: str
    template: str | None = None
    file_count: int = 0
    files_hash: str = ""
    created_at: datetime
    updated_at: datetime
