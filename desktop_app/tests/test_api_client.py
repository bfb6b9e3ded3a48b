from __future__ import annotations

import json

import pytest
import requests

from timesheet_portal.api_client import ApiClient, extract_rows, is_write_ack
from timesheet_portal.models import TimeLogRecord


ACK = {"ok": True, "id": "r-1", "timestamp": "2024-01-08T19:00:00.000Z"}


def _record() -> TimeLogRecord:
    return TimeLogRecord(
        id="r-1",
        date="2024-01-08",
        employee_name="Daiana",
        entry_time="08:00",
        exit_time="16:00",
        total_hours=8.0,
        day_type="Semana",
    )


def test_extract_rows_unwraps_up_to_two_envelopes():
    rows = [{"ID": "1"}]
    assert extract_rows(rows) == rows
    assert extract_rows({"ok": True, "data": rows}) == rows
    assert extract_rows({"data": {"data": rows}}) == rows
    assert extract_rows({"data": {"data": {"data": rows}}}) is None
    assert extract_rows(ACK) is None
    assert extract_rows("nope") is None


def test_is_write_ack():
    assert is_write_ack(ACK)
    assert is_write_ack({"success": True, "id": 3})
    assert not is_write_ack({"ok": True, "data": []})
    assert not is_write_ack({"id": "r-1"})


def test_list_entries_normalizes_envelope(client: ApiClient, transport, row_factory, sleeps, proxy_url):
    transport.queue({"ok": True, "data": [row_factory(), {"ID": "broken"}]})
    records = client.list_entries()
    assert [record.id for record in records] == ["r-1"]
    assert records[0].total_hours == 8.0
    assert sleeps == []
    call = transport.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == proxy_url
    assert call["params"] == {"action": "getEntries"}
    assert call["timeout"] == 5


def test_list_entries_passes_owner(client: ApiClient, transport):
    transport.queue([])
    assert client.list_entries(owner="Daiana") == []
    assert transport.calls[0]["params"] == {"action": "getEntries", "owner": "Daiana"}


def test_list_entries_retries_stale_acknowledgment(client: ApiClient, transport, row_factory, sleeps):
    transport.queue(ACK, [row_factory(ID="first")], [row_factory(ID="second")])
    records = client.list_entries()
    assert [record.id for record in records] == ["first"]
    assert len(transport.calls) == 2
    assert sleeps == [0.8]


def test_list_entries_gives_up_with_empty_list(client: ApiClient, transport, sleeps):
    transport.queue(ACK, ACK, ACK)
    assert client.list_entries() == []
    assert len(transport.calls) == 3
    assert sleeps == [0.8, 0.8]


def test_list_entries_retries_network_and_parse_failures(client: ApiClient, transport, row_factory):
    transport.queue(requests.Timeout("read timed out"))
    transport.reply(200, text="<html>not json</html>")
    transport.queue({"data": {"data": [row_factory()]}})
    records = client.list_entries()
    assert [record.id for record in records] == ["r-1"]
    assert len(transport.calls) == 3


def test_list_entries_retries_http_errors(client: ApiClient, transport):
    transport.reply(500, {"error": "boom"}).reply(502, text="bad gateway").queue({"ok": False})
    assert client.list_entries() == []
    assert len(transport.calls) == 3


def test_empty_array_is_a_valid_answer(client: ApiClient, transport):
    transport.queue({"ok": True, "data": []}, [{"ID": "never"}])
    assert client.list_entries() == []
    assert len(transport.calls) == 1


def test_consecutive_lists_are_equal(client: ApiClient, transport, row_factory):
    rows = [row_factory(ID="a"), row_factory(ID="b", Nombre="Carla")]
    transport.queue(list(rows), {"ok": True, "data": list(reversed(rows))})
    first = client.list_entries()
    second = client.list_entries()
    key = lambda record: record.id  # noqa: E731
    assert sorted(first, key=key) == sorted(second, key=key)


def test_save_entry_posts_payload_without_timestamp(client: ApiClient, transport):
    transport.queue(ACK)
    assert client.save_entry(_record()) is True
    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["json"]["action"] == "saveEntry"
    entry = call["json"]["entry"]
    assert entry["employeeName"] == "Daiana"
    assert entry["totalHours"] == 8.0
    assert "timestamp" not in entry


def test_save_entry_accepts_plain_http_success(client: ApiClient, transport):
    transport.reply(200, text="Registro guardado")
    assert client.save_entry(_record()) is True


@pytest.mark.parametrize(
    ("status_code", "body"),
    [
        (200, {"ok": False, "error": "duplicated"}),
        (200, {"id": "r-1"}),
        (200, ["r-1"]),
        (500, {"error": "boom"}),
    ],
)
def test_save_entry_failures_are_false_and_not_retried(client: ApiClient, transport, sleeps, status_code, body):
    transport.reply(status_code, body)
    assert client.save_entry(_record()) is False
    assert len(transport.calls) == 1
    assert sleeps == []


def test_save_entry_network_error_is_not_retried(client: ApiClient, transport):
    transport.queue(requests.ConnectionError("offline"))
    assert client.save_entry(_record()) is False
    assert len(transport.calls) == 1


def test_delete_entry_sends_requester(client: ApiClient, transport):
    transport.queue({"ok": True})
    assert client.delete_entry("r-1", "Miguel") is True
    assert transport.calls[0]["json"] == {"action": "deleteEntry", "id": "r-1", "requesterName": "Miguel"}


def test_delete_entry_rejected(client: ApiClient, transport):
    transport.queue({"ok": False, "error": "not owner"})
    assert client.delete_entry("r-1", "Carla") is False
    assert json.dumps(transport.calls[0]["json"]).count("requesterName") == 1


@pytest.mark.parametrize("url", ["", "https://script.google.com/macros/s/AKfycby-YOUR-URL/exec"])
def test_unconfigured_client_never_touches_network(url, transport):
    client = ApiClient(url)
    assert not client.is_configured()
    assert client.list_entries() == []
    assert client.save_entry(_record()) is False
    assert client.delete_entry("r-1") is False
    assert transport.calls == []


def test_list_entries_survives_out_of_range_numbers(client: ApiClient, transport, row_factory):
    transport.queue([row_factory(Total_Horas=int("9" * 400)), row_factory(ID="r-2")])
    records = client.list_entries()
    assert [record.id for record in records] == ["r-1", "r-2"]
    assert records[0].total_hours == 0.0


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"ok": "false"}, False),
        ({"ok": "0"}, False),
        ({"success": 0}, False),
        ({"ok": "true"}, True),
        ({"success": 1}, True),
    ],
)
def test_write_flags_are_read_like_spreadsheet_booleans(client: ApiClient, transport, body, expected):
    transport.queue(body)
    assert client.delete_entry("r-1", "Miguel") is expected
