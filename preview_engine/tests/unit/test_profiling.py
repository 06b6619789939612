"""Tests for preview_engine.telemetry.profiling."""

from __future__ import annotations

import logging

import pytest

from preview_engine.telemetry.profiling import ProfileCollector, ProfileResult, profile_operation
from preview_engine.versioning.hasher import compute_content_hash


@pytest.fixture(autouse=True)
def _reset_collector():
    """Ensure a fresh collector singleton for each test."""
    ProfileCollector.reset()
    yield
    ProfileCollector.reset()


class TestProfileOperation:
    def test_records_duration_and_preserves_result(self):
        @profile_operation("unit.add")
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        stats = ProfileCollector.get_instance().get_stats("unit.add")
        assert stats is not None
        assert stats["count"] == 1

    def test_records_on_exception(self):
        @profile_operation("unit.fail")
        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            fail()
        assert ProfileCollector.get_instance().get_stats("unit.fail")["count"] == 1

    def test_wraps_metadata(self):
        @profile_operation("unit.named")
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."

    def test_debug_log(self, caplog):
        @profile_operation("unit.logged")
        def noop():
            return None

        with caplog.at_level(logging.DEBUG, logger="preview_engine.telemetry.profiling"):
            noop()
        assert "profile unit.logged took" in caplog.text

    def test_hot_paths_are_instrumented(self):
        compute_content_hash({"a": "1"})
        assert "snapshot.hash" in ProfileCollector.get_instance().operations()


class TestProfileCollector:
    def test_singleton(self):
        assert ProfileCollector.get_instance() is ProfileCollector.get_instance()

    def test_stats(self):
        collector = ProfileCollector.get_instance()
        for ms in (1.0, 2.0, 3.0, 4.0, 5.0):
            collector.record(ProfileResult(operation="op", duration_ms=ms))
        stats = collector.get_stats("op")
        assert stats["count"] == 5
        assert stats["mean_ms"] == 3.0
        assert stats["p50_ms"] == 3.0
        assert stats["max_ms"] == 5.0
        assert stats["p95_ms"] == pytest.approx(4.8)

    def test_unknown_operation(self):
        assert ProfileCollector.get_instance().get_stats("nothing") is None

    def test_bounded_history(self):
        collector = ProfileCollector(max_results=3)
        for i in range(10):
            collector.record(ProfileResult(operation="op", duration_ms=float(i)))
        assert collector.get_stats("op")["count"] == 3
