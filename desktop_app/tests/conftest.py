from __future__ import annotations

import json
from typing import Any, Callable, Generator, List

import pytest
import requests

from timesheet_portal.api_client import ApiClient, ApiError
from timesheet_portal.retry import RetryPolicy
from timesheet_portal.roster import EMPLOYEES
from timesheet_portal.store import RecordStore

PROXY_URL = "http://proxy.test/api/proxy"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, *, text: str | None = None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(body)
        self.text = text
        self.headers = {"content-type": "application/json"}


class FakeTransport:
    """Stand-in for ``requests.request`` replaying scripted responses."""

    def __init__(self) -> None:
        self.responses: List[Any] = []
        self.calls: List[dict[str, Any]] = []

    def queue(self, *items: Any) -> "FakeTransport":
        """Queue JSON bodies (answered with 200) or exceptions to raise."""

        self.responses.extend(items)
        return self

    def reply(self, status_code: int, body: Any = None, *, text: str | None = None) -> "FakeTransport":
        self.responses.append(FakeResponse(status_code, body, text=text))
        return self

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError("No scripted response left")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, FakeResponse):
            return item
        return FakeResponse(200, item)


@pytest.fixture()
def transport(monkeypatch) -> Generator[FakeTransport, None, None]:
    fake = FakeTransport()
    monkeypatch.setattr(requests, "request", fake)
    yield fake


@pytest.fixture()
def sleeps() -> List[float]:
    return []


@pytest.fixture()
def client(sleeps: List[float]) -> ApiClient:
    policy = RetryPolicy(attempts=3, delay=0.8, retry_on=(ApiError,), sleep=sleeps.append)
    return ApiClient(PROXY_URL, timeout=5, retry_policy=policy)


@pytest.fixture()
def store(client: ApiClient) -> RecordStore:
    return RecordStore(client)


@pytest.fixture()
def daiana():
    return EMPLOYEES[0]


@pytest.fixture()
def row_factory() -> Callable[..., dict[str, Any]]:
    def make(**overrides: Any) -> dict[str, Any]:
        row = {
            "ID": "r-1",
            "Fecha": "2024-01-08",
            "Nombre": "Daiana",
            "Ingreso": "08:00",
            "Egreso": "16:00",
            "Total_Horas": 8,
            "Tipo_Dia": "Semana",
            "Feriado": False,
            "Observaciones": "",
            "Fecha_Carga": "2024-01-08T19:00:00.000Z",
        }
        row.update(overrides)
        return row

    return make


@pytest.fixture()
def proxy_url() -> str:
    return PROXY_URL
