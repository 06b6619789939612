"""Content-addressed versioning: hashing, change detection and the version ledger."""

from preview_engine.versioning.change_detector import compute_change_set
from preview_engine.versioning.hasher import HASH_LENGTH, canonical_bytes, compute_content_hash
from preview_engine.versioning.ledger import (
    DEFAULT_HISTORY_LIMIT,
    MAX_HISTORY_LIMIT,
    VersionLedger,
    VersionStore,
    build_sync_result,
)

__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "HASH_LENGTH",
    "MAX_HISTORY_LIMIT",
    "VersionLedger",
    "VersionStore",
    "build_sync_result",
    "canonical_bytes",
    "compute_change_set",
    "compute_content_hash",
]
