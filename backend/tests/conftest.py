from __future__ import annotations

import json
from typing import Any, Generator, List

import pytest
import requests
from fastapi.testclient import TestClient

from timesheet_proxy.config import settings
from timesheet_proxy.main import app

SCRIPT_URL = "https://script.google.com/macros/s/test-deployment/exec"
API_KEY = "s3cret-key"


class UpstreamResponse:
    def __init__(self, status_code: int = 200, body: Any = None, *, text: str | None = None, content_type: str = "application/json"):
        self.status_code = status_code
        self.text = json.dumps(body) if text is None else text
        self.headers = {"content-type": content_type}


class FakeUpstream:
    """Records relayed requests and answers with scripted responses."""

    def __init__(self) -> None:
        self.calls: List[dict[str, Any]] = []
        self.responses: List[Any] = []

    def answer(self, status_code: int = 200, body: Any = None, **kwargs: Any) -> "FakeUpstream":
        self.responses.append(UpstreamResponse(status_code, body, **kwargs))
        return self

    def fail(self, exc: BaseException) -> "FakeUpstream":
        self.responses.append(exc)
        return self

    def __call__(self, method: str, url: str, **kwargs: Any) -> UpstreamResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.responses.pop(0) if self.responses else UpstreamResponse(200, {"ok": True})
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture()
def upstream(monkeypatch) -> FakeUpstream:
    fake = FakeUpstream()
    monkeypatch.setattr(requests, "request", fake)
    return fake


@pytest.fixture()
def configured(monkeypatch) -> None:
    monkeypatch.setattr(settings, "google_script_url", SCRIPT_URL)
    monkeypatch.setattr(settings, "google_script_api_key", API_KEY)


@pytest.fixture()
def unconfigured(monkeypatch) -> None:
    monkeypatch.setattr(settings, "google_script_url", None)
    monkeypatch.setattr(settings, "google_script_api_key", "")


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def script_url() -> str:
    return SCRIPT_URL


@pytest.fixture()
def api_key() -> str:
    return API_KEY
