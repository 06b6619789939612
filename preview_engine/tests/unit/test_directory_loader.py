"""Unit tests for preview_engine.loader.directory_loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from preview_engine.loader.directory_loader import SnapshotLoadError, load_snapshot_from_directory
from preview_engine.versioning.change_detector import compute_change_set


def _write(root: Path, relative: str, content: str | bytes) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


class TestLoadSnapshotFromDirectory:
    def test_posix_relative_paths(self, tmp_path: Path):
        _write(tmp_path, "index.html", "<p>x</p>")
        _write(tmp_path, "src/components/Nav.jsx", "function Nav() {}")
        snapshot = load_snapshot_from_directory(tmp_path)
        assert snapshot.paths == ["index.html", "src/components/Nav.jsx"]

    def test_skips_vcs_dependencies_and_hidden(self, tmp_path: Path):
        _write(tmp_path, "app.js", "1")
        _write(tmp_path, ".git/config", "x")
        _write(tmp_path, "node_modules/react/index.js", "x")
        _write(tmp_path, ".env", "SECRET=1")
        assert load_snapshot_from_directory(tmp_path).paths == ["app.js"]

    def test_skips_oversized_and_binary(self, tmp_path: Path):
        _write(tmp_path, "small.txt", "ok")
        _write(tmp_path, "big.txt", "x" * 100)
        _write(tmp_path, "logo.png", b"\x89PNG\r\n\x1a\n\xff\xfe")
        snapshot = load_snapshot_from_directory(tmp_path, max_file_bytes=50)
        assert snapshot.paths == ["small.txt"]

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(SnapshotLoadError):
            load_snapshot_from_directory(tmp_path / "nope")

    def test_line_endings_preserved(self, tmp_path: Path):
        _write(tmp_path / "unix", "app.js", b"x;\n")
        _write(tmp_path / "dos", "app.js", b"x;\r\n")
        unix = load_snapshot_from_directory(tmp_path / "unix")
        dos = load_snapshot_from_directory(tmp_path / "dos")
        assert dos.files["app.js"] == "x;\r\n"
        assert compute_change_set(unix.files, dos.files).changed == ["app.js"]
