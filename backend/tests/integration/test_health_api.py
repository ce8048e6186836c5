"""Integration test for the health endpoint."""

from __future__ import annotations


def test_health_ok(client) -> None:
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["db"] == "ok"
    assert "X-Request-ID" in resp.headers
