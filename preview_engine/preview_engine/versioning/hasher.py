"""Deterministic content hashing for project snapshots.

**Canonical serialisation (v1)**:
1. Paths are sorted lexicographically.
2. Each entry is emitted as a JSON ``[path, content]`` pair so that no
   path/content pair can alias another through delimiter injection.
3. The version prefix ``livepreview-snapshot-v1:`` is hashed first.

The digest is SHA-256, truncated to :data:`HASH_LENGTH` hex characters.
The hash is used for change detection and audit only; it is not a
security boundary.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping

from preview_engine.telemetry.profiling import profile_operation

HASH_LENGTH = 16
SERIALIZATION_VERSION = "v1"


def canonical_bytes(files: Mapping[str, str]) -> bytes:
    """Return the canonical byte serialisation of *files*."""
    entries = [[path, files[path]] for path in sorted(files)]
    body = json.dumps(entries, ensure_ascii=False, separators=(",", ":"))
    return f"livepreview-snapshot-{SERIALIZATION_VERSION}:{body}".encode()


@profile_operation("snapshot.hash")
def compute_content_hash(files: Mapping[str, str]) -> str:
    """Return the truncated SHA-256 hex digest of a snapshot's canonical form.

    Identical snapshots hash identically regardless of insertion order; any
    single-character change in any path or content changes the result.
    """
    return hashlib.sha256(canonical_bytes(files)).hexdigest()[:HASH_LENGTH]
