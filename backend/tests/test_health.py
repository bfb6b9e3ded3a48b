from __future__ import annotations

import logging

import requests
from fastapi.testclient import TestClient


def test_health_without_upstream(client: TestClient, upstream, unconfigured):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert "GOOGLE_SCRIPT_URL" in data["warning"]
    assert upstream.calls == []


def test_health_probes_upstream(client: TestClient, upstream, configured, script_url):
    upstream.answer(200, {"ok": True, "data": []})

    data = client.get("/api/health").json()

    assert data == {"ok": True, "gas_reachable": True, "gas_status": 200, "data": {"ok": True, "data": []}}
    assert upstream.calls[0]["url"] == f"{script_url}?action=getEntries&apiKey=s3cret-key"


def test_health_reports_non_json_upstream(client: TestClient, upstream, configured):
    upstream.answer(200, text="<html>login</html>", content_type="text/html")
    data = client.get("/api/health").json()
    assert data["data"] == {"raw": "<html>login</html>"}


def test_health_reports_unreachable_upstream(client: TestClient, upstream, configured):
    upstream.fail(requests.Timeout("timed out"))
    data = client.get("/api/health").json()
    assert data["ok"] is True
    assert data["gas_reachable"] is False
    assert data["error"] == "timed out"


def test_health_failure_never_exposes_api_key(client: TestClient, upstream, configured, script_url, api_key, caplog):
    caplog.set_level(logging.DEBUG)
    upstream.fail(requests.ConnectionError(f"Max retries exceeded with url: {script_url}?action=getEntries&apiKey={api_key}"))

    resp = client.get("/api/health")

    assert resp.json()["gas_reachable"] is False
    assert api_key not in resp.text
    assert api_key not in caplog.text
