"""Tests for preview_cli/preview_cli/app.py -- the livepreview CLI application.

Uses typer.testing.CliRunner against real project directories written to
``tmp_path``.  The ``sync`` and ``history`` commands run against a SQLite
file inside ``tmp_path`` selected through ``PREVIEW_DATABASE_URL``.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from preview_cli.app import app
from preview_engine.synthesis.assets import DIAGNOSTICS_SOURCE
from preview_engine.versioning.hasher import compute_content_hash

runner = CliRunner()

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_INDEX = "<!DOCTYPE html><html><head></head><body><h1>Hi</h1></body></html>"


def _project(root: Path, files: dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture()
def site(tmp_path: Path) -> Path:
    return _project(tmp_path / "site", {"index.html": _INDEX, "style.css": "body{margin:0}"})


@pytest.fixture()
def db_env(tmp_path: Path) -> dict[str, str]:
    return {"PREVIEW_DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'state.db'}"}


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


class TestRender:
    def test_render_to_stdout(self, site: Path):
        result = runner.invoke(app, ["render", str(site)])
        assert result.exit_code == 0, result.output
        assert "body{margin:0}" in result.stdout
        assert DIAGNOSTICS_SOURCE in result.stdout

    def test_render_to_file(self, site: Path, tmp_path: Path):
        out = tmp_path / "out" / "preview.html"
        result = runner.invoke(app, ["render", str(site), "--out", str(out)])
        assert result.exit_code == 0, result.output
        assert "<h1>Hi</h1>" in out.read_text(encoding="utf-8")

    def test_render_forced_mode(self, site: Path):
        result = runner.invoke(app, ["render", str(site), "--mode", "plain", "--title", "Forced"])
        assert result.exit_code == 0, result.output
        assert "<title>Forced</title>" in result.stdout

    def test_missing_directory(self, tmp_path: Path):
        result = runner.invoke(app, ["render", str(tmp_path / "nope")])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# hash / diff / summary
# ---------------------------------------------------------------------------


class TestHash:
    def test_plain_output(self, site: Path):
        result = runner.invoke(app, ["hash", str(site)])
        assert result.exit_code == 0, result.output
        expected = compute_content_hash({"index.html": _INDEX, "style.css": "body{margin:0}"})
        assert result.stdout.strip() == expected

    def test_json_output(self, site: Path):
        result = runner.invoke(app, ["--json", "hash", str(site)])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["file_count"] == 2
        assert len(payload["hash"]) == 16


class TestDiff:
    def test_json_change_set(self, tmp_path: Path):
        old = _project(tmp_path / "old", {"a.txt": "1", "gone.txt": "x"})
        new = _project(tmp_path / "new", {"a.txt": "2", "b.txt": "3"})
        result = runner.invoke(app, ["--json", "diff", str(old), str(new)])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["changed"] == ["a.txt", "b.txt"]
        assert payload["added"] == ["b.txt"]
        assert payload["modified"] == ["a.txt"]
        assert payload["removed"] == ["gone.txt"]

    def test_human_output(self, tmp_path: Path):
        old = _project(tmp_path / "old", {"a.txt": "1"})
        new = _project(tmp_path / "new", {"a.txt": "1"})
        result = runner.invoke(app, ["diff", str(old), str(new)])
        assert result.exit_code == 0, result.output
        assert "No changes" in result.output


class TestSummary:
    def test_json_summary(self, tmp_path: Path):
        project = _project(
            tmp_path / "app",
            {"src/App.jsx": 'function App() { return <Route path="/about" />; }', "src/index.css": ""},
        )
        result = runner.invoke(app, ["--json", "summary", str(project)])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["components"] == ["App"]
        assert payload["routes"] == ["/about"]
        assert payload["has_css"] is True


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------


class TestExtract:
    def test_writes_files(self, tmp_path: Path):
        response = tmp_path / "response.md"
        response.write_text(
            "// filename: src/App.jsx\n```jsx\nfunction App() {}\n```\n"
            "// filename: ../escape.js\n```js\nbad()\n```\n",
            encoding="utf-8",
        )
        out = tmp_path / "extracted"
        result = runner.invoke(app, ["extract", str(response), "--out", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "src" / "App.jsx").read_text(encoding="utf-8") == "function App() {}"
        assert not (tmp_path / "escape.js").exists()

    def test_json_listing(self, tmp_path: Path):
        response = tmp_path / "response.md"
        response.write_text("<!-- filename: index.html -->\n```html\n<p>x</p>\n```\n", encoding="utf-8")
        result = runner.invoke(app, ["--json", "extract", str(response)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"files": {"index.html": "<p>x</p>"}}


# ---------------------------------------------------------------------------
# sync / history
# ---------------------------------------------------------------------------


class TestSyncAndHistory:
    def test_sync_then_history(self, tmp_path: Path, db_env: dict[str, str]):
        v1 = _project(tmp_path / "v1", {"a.txt": "1"})
        v2 = _project(tmp_path / "v2", {"a.txt": "2", "b.txt": "3"})

        first = runner.invoke(app, ["--json", "sync", str(v1), "--project", "demo", "-m", "first"], env=db_env)
        assert first.exit_code == 0, first.output
        second = runner.invoke(app, ["--json", "sync", str(v2), "--project", "demo", "-m", "second"], env=db_env)
        assert second.exit_code == 0, second.output

        first_payload = json.loads(first.stdout)
        second_payload = json.loads(second.stdout)
        assert second_payload["changed_paths"] == ["a.txt", "b.txt"]
        assert second_payload["hash"] != first_payload["hash"]
        assert second_payload["recorded"] is True

        history = runner.invoke(app, ["--json", "history", "--project", "demo"], env=db_env)
        assert history.exit_code == 0, history.output
        payload = json.loads(history.stdout)
        assert payload["available"] is True
        assert [v["message"] for v in payload["versions"]] == ["second", "first"]

    def test_identical_resync(self, tmp_path: Path, db_env: dict[str, str]):
        v1 = _project(tmp_path / "v1", {"a.txt": "1"})
        runner.invoke(app, ["--json", "sync", str(v1), "--project", "demo"], env=db_env)
        again = runner.invoke(app, ["--json", "sync", str(v1), "--project", "demo"], env=db_env)
        assert again.exit_code == 0, again.output
        assert json.loads(again.stdout)["changed_paths"] == []

    def test_history_human_output_empty(self, db_env: dict[str, str]):
        result = runner.invoke(app, ["history", "--project", "unknown"], env=db_env)
        assert result.exit_code == 0, result.output
        assert "No versions recorded" in result.output

    def test_unusable_state_store_exits_cleanly(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        env = {"PREVIEW_DATABASE_URL": f"sqlite+aiosqlite:///{blocker / 'state.db'}"}
        v1 = _project(tmp_path / "v1", {"a.txt": "1"})

        synced = runner.invoke(app, ["sync", str(v1), "--project", "demo"], env=env)
        assert synced.exit_code == 3
        assert "State store unavailable" in synced.output

        history = runner.invoke(app, ["history", "--project", "demo"], env=env)
        assert history.exit_code == 3
