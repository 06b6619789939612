"""Lightweight timing instrumentation for the pure hot-path functions.

``@profile_operation(name)`` wraps a synchronous function, measures it with
``time.perf_counter_ns`` and records the duration into the process-wide
:class:`ProfileCollector`.  Every measurement is also logged at DEBUG level::

    @profile_operation("preview.synthesize")
    def synthesize_document(snapshot):
        ...
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class ProfileResult:
    """A single timed call."""

    operation: str
    duration_ms: float


class ProfileCollector:
    """Keeps the most recent ``max_results`` timings per operation.  Thread-safe."""

    _instance: ProfileCollector | None = None
    _instance_lock = threading.Lock()

    def __init__(self, max_results: int = 200) -> None:
        self._max_results = max_results
        self._data: dict[str, deque[ProfileResult]] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> ProfileCollector:
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = ProfileCollector()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (for tests)."""
        with cls._instance_lock:
            cls._instance = None

    def record(self, result: ProfileResult) -> None:
        with self._lock:
            bucket = self._data.setdefault(result.operation, deque(maxlen=self._max_results))
            bucket.append(result)

    def operations(self) -> list[str]:
        with self._lock:
            return sorted(self._data)

    def get_stats(self, operation: str) -> dict[str, Any] | None:
        """Return count, mean and p50/p95/max in milliseconds, or ``None`` if unseen."""
        with self._lock:
            results = self._data.get(operation)
            if not results:
                return None
            durations = sorted(r.duration_ms for r in results)

        count = len(durations)
        return {
            "operation": operation,
            "count": count,
            "mean_ms": round(sum(durations) / count, 3),
            "p50_ms": round(_percentile(durations, 50), 3),
            "p95_ms": round(_percentile(durations, 95), 3),
            "max_ms": round(durations[-1], 3),
        }


def _percentile(sorted_values: list[float], pct: float) -> float:
    if len(sorted_values) == 1:
        return sorted_values[0]
    rank = (pct / 100) * (len(sorted_values) - 1)
    lower = int(rank)
    upper = min(lower + 1, len(sorted_values) - 1)
    weight = rank - lower
    return sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight


def profile_operation(name: str) -> Callable[[F], F]:
    """Decorator recording the wall time of each call under *name*."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter_ns()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter_ns() - start) / 1_000_000
                ProfileCollector.get_instance().record(ProfileResult(operation=name, duration_ms=elapsed_ms))
                logger.debug("profile %s took %.3fms", name, elapsed_ms)

        return wrapper  # type: ignore[return-value]

    return decorator
