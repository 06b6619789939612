"""Unit tests for preview_engine.project.templates."""

from __future__ import annotations

from preview_engine.analysis.mode_detector import detect_render_mode
from preview_engine.models.preview import RenderMode
from preview_engine.project.templates import available_templates, resolve_template, template_files


class TestTemplates:
    def test_available(self):
        assert available_templates() == ["react-vite", "vanilla-js"]

    def test_resolution(self):
        assert resolve_template(None) == "react-vite"
        assert resolve_template("vanilla-js") == "vanilla-js"
        assert resolve_template("python-flask") == "vanilla-js"

    def test_returns_copy(self):
        files = template_files("vanilla-js")
        files["index.html"] = "changed"
        assert template_files("vanilla-js")["index.html"] != "changed"

    def test_render_modes(self):
        assert detect_render_mode(template_files("react-vite")) is RenderMode.COMPONENT
        assert detect_render_mode(template_files("vanilla-js")) is RenderMode.PASSTHROUGH
