"""Unit tests for the stateless entry points in preview_engine.service."""

from __future__ import annotations

import pytest

from preview_engine.models.preview import RenderMode
from preview_engine.models.snapshot import InvalidSnapshotError
from preview_engine.service import apply_sync, list_versions, render_preview, summarize
from preview_engine.versioning.ledger import VersionLedger


class TestApplySync:
    def test_identical(self):
        files = {"a.txt": "1"}
        first = apply_sync(None, files)
        second = apply_sync(files, dict(files))
        assert second.changed_paths == []
        assert second.hash == first.hash

    def test_modified_and_added(self):
        result = apply_sync({"a.txt": "1"}, {"a.txt": "2", "b.txt": "3"})
        assert result.changed_paths == ["a.txt", "b.txt"]

    def test_invalid(self):
        with pytest.raises(InvalidSnapshotError):
            apply_sync(None, {"": "x"})

    def test_lone_surrogate_rejected(self):
        with pytest.raises(InvalidSnapshotError, match="UTF-8"):
            apply_sync(None, {"a.txt": "\ud800"})


class TestRenderAndSummarize:
    def test_render_forced_mode(self):
        out = render_preview({"index.html": "<p>x</p>"}, mode=RenderMode.PLAIN)
        assert "<p>x</p>" in out

    def test_summarize(self):
        assert summarize({"a.css": "", "App.jsx": "function App() {}"}).components == ["App"]


class TestListVersions:
    @pytest.mark.asyncio
    async def test_unavailable_store(self):
        history = await list_versions(VersionLedger(None), "p1", 5)
        assert history.available is False
