"""Unit tests for preview_engine.versioning.hasher."""

from __future__ import annotations

from preview_engine.versioning.hasher import HASH_LENGTH, canonical_bytes, compute_content_hash


class TestComputeContentHash:
    def test_fixed_length_hex(self):
        digest = compute_content_hash({"index.html": "<p>hi</p>"})
        assert len(digest) == HASH_LENGTH
        int(digest, 16)

    def test_independent_of_insertion_order(self):
        first = {"a.js": "1", "b.js": "2", "c/d.css": "3"}
        second = {"c/d.css": "3", "b.js": "2", "a.js": "1"}
        assert compute_content_hash(first) == compute_content_hash(second)

    def test_single_byte_content_change(self):
        assert compute_content_hash({"a.txt": "1"}) != compute_content_hash({"a.txt": "2"})

    def test_path_rename_changes_hash(self):
        assert compute_content_hash({"a.txt": "x"}) != compute_content_hash({"b.txt": "x"})

    def test_whitespace_is_significant(self):
        assert compute_content_hash({"a.js": "x;\n"}) != compute_content_hash({"a.js": "x;\r\n"})

    def test_empty_snapshot_hashes(self):
        assert len(compute_content_hash({})) == HASH_LENGTH

    def test_path_content_boundary_does_not_alias(self):
        # "ab" -> "c" and "a" -> "bc" would collide under naive concatenation.
        assert compute_content_hash({"ab": "c"}) != compute_content_hash({"a": "bc"})


class TestCanonicalBytes:
    def test_sorted_and_versioned(self):
        data = canonical_bytes({"b": "2", "a": "1"})
        assert data.startswith(b"livepreview-snapshot-v1:")
        assert data.index(b'"a"') < data.index(b'"b"')

    def test_non_ascii_is_utf8(self):
        assert "é".encode() in canonical_bytes({"x.txt": "é"})
