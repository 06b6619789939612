"""Per-file edit operations accepted by a project actor."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class FileAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    READ = "read"


class FileOperation(BaseModel):
    """A single edit against the current snapshot."""

    path: str = Field(..., min_length=1)
    action: FileAction
    content: str | None = None


class FileOperationResult(BaseModel):
    path: str
    success: bool
    error: str | None = None
    content: str | None = None
