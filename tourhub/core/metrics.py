"""Favorites operation metrics.

Keeps the most recent latency samples per GraphQL favorites operation and
outcome counters.
"""
import time
from collections import defaultdict, deque
from contextlib import contextmanager

# Samples kept per operation for percentile estimates
MAX_SAMPLES = 1000

_timings_ms: dict[str, deque] = defaultdict(lambda: deque(maxlen=MAX_SAMPLES))
_outcomes: dict[str, dict[str, int]] = defaultdict(lambda: {"success": 0, "failure": 0})


@contextmanager
def record_favorite_latency(operation: str):
    start = time.perf_counter()
    try:
        yield
    finally:
        _timings_ms[operation].append((time.perf_counter() - start) * 1000.0)


def record_outcome(operation: str, outcome: str) -> None:
    _outcomes[operation][outcome] += 1


def _percentiles(values) -> dict:
    if not values:
        return {"count": 0, "p95_ms": None, "p99_ms": None}
    vals = sorted(values)
    count = len(vals)

    def _p(p: float) -> float:
        idx = int(round(p * (count - 1)))
        return vals[idx]
    return {"count": count, "p95_ms": _p(0.95), "p99_ms": _p(0.99)}


def snapshot_metrics() -> dict:
    return {
        operation: {**_percentiles(_timings_ms[operation]), "outcomes": dict(_outcomes[operation])}
        for operation in sorted(set(_timings_ms) | set(_outcomes))
    }


def reset_metrics() -> None:
    _timings_ms.clear()
    _outcomes.clear()
