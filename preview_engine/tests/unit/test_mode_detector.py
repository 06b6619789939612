"""Unit tests for preview_engine.analysis.mode_detector."""

from __future__ import annotations

import pytest

from preview_engine.analysis.mode_detector import detect_render_mode, find_full_document, is_full_document
from preview_engine.models.preview import RenderMode

_DOC = "<!DOCTYPE html><html><head></head><body></body></html>"


class TestIsFullDocument:
    @pytest.mark.parametrize("markup", ["<!doctype html><p>x</p>", "<HTML lang='en'>", "<html>\n<body>"])
    def test_document_markers(self, markup):
        assert is_full_document(markup)

    def test_fragment(self):
        assert not is_full_document("<div>fragment</div>")

    def test_html_prefix_of_other_tag(self):
        assert not is_full_document("<htmlish>")


class TestDetectRenderMode:
    def test_empty_is_plain(self):
        assert detect_render_mode({}) is RenderMode.PLAIN

    def test_full_document_is_passthrough(self):
        assert detect_render_mode({"index.html": _DOC, "style.css": ""}) is RenderMode.PASSTHROUGH

    def test_components_win_over_full_document(self):
        files = {"index.html": _DOC, "src/App.jsx": "function App(){ return null; }"}
        assert detect_render_mode(files) is RenderMode.COMPONENT

    def test_tsx_is_component(self):
        assert detect_render_mode({"App.tsx": "export default function App() { return null }"}) is RenderMode.COMPONENT

    def test_fragment_markup_is_plain(self):
        assert detect_render_mode({"index.html": "<div>hi</div>", "main.js": "1"}) is RenderMode.PLAIN


class TestFindFullDocument:
    def test_prefers_shallowest_index(self):
        files = {"about.html": _DOC, "pages/index.html": _DOC, "index.html": _DOC}
        assert find_full_document(files) == "index.html"

    def test_first_in_path_order_without_index(self):
        assert find_full_document({"b.html": _DOC, "a.html": _DOC}) == "a.html"

    def test_none_when_only_fragments(self):
        assert find_full_document({"index.html": "<p>x</p>"}) is None
