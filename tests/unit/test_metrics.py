"""
Unit tests for favorites metrics and access tokens
"""
from tourhub.core.jwt import create_access_token, decode_token
from tourhub.core.metrics import (
    MAX_SAMPLES,
    record_favorite_latency,
    record_outcome,
    snapshot_metrics,
)


def test_latency_samples_are_bounded():
    for _ in range(MAX_SAMPLES + 250):
        with record_favorite_latency("toggleFavorite"):
            pass

    snapshot = snapshot_metrics()["toggleFavorite"]
    assert snapshot["count"] == MAX_SAMPLES
    assert snapshot["p95_ms"] is not None


def test_outcomes_count_success_and_failure():
    record_outcome("reorderFavorites", "success")
    record_outcome("reorderFavorites", "failure")
    record_outcome("reorderFavorites", "failure")

    snapshot = snapshot_metrics()["reorderFavorites"]
    assert snapshot["outcomes"] == {"success": 1, "failure": 2}
    assert snapshot["count"] == 0


def test_access_token_round_trip():
    payload = decode_token(create_access_token("42", scopes=["favorites"]))

    assert payload["sub"] == "42"
    assert payload["scopes"] == ["favorites"]
    assert decode_token("not-a-token") is None
