from __future__ import annotations

from pathlib import Path

from timesheet_portal.config import DEFAULT_PROXY_URL, load_config

ENV_VARS = (
    "TIMESHEET_PROXY_URL",
    "TIMESHEET_REQUEST_TIMEOUT",
    "TIMESHEET_RETRY_ATTEMPTS",
    "TIMESHEET_RETRY_DELAY",
    "TIMESHEET_REFRESH_DELAY",
    "TIMESHEET_SESSION_FILE",
    "TIMESHEET_FIELD_ALIASES_FILE",
    "TIMESHEET_LOG_LEVEL",
)


def _clear(monkeypatch):
    # setenv first so values written by load_dotenv are undone on teardown
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults(monkeypatch, tmp_path):
    _clear(monkeypatch)
    config = load_config(tmp_path / "missing.env")
    assert config.proxy_url == DEFAULT_PROXY_URL
    assert config.retry_attempts == 3
    assert config.retry_delay_seconds == 0.8
    assert config.field_aliases_file is None
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    _clear(monkeypatch)
    monkeypatch.setenv("TIMESHEET_PROXY_URL", "https://relay.example/api/proxy")
    monkeypatch.setenv("TIMESHEET_RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("TIMESHEET_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("TIMESHEET_SESSION_FILE", str(tmp_path / "s.json"))
    monkeypatch.setenv("TIMESHEET_LOG_LEVEL", "debug")

    config = load_config(tmp_path / "missing.env")

    assert config.proxy_url == "https://relay.example/api/proxy"
    assert config.retry_attempts == 5
    assert config.request_timeout_seconds == 2.5
    assert config.session_file == tmp_path / "s.json"
    assert config.log_level == "DEBUG"


def test_env_file_is_loaded(monkeypatch, tmp_path):
    _clear(monkeypatch)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "TIMESHEET_FIELD_ALIASES_FILE=aliases.json\nTIMESHEET_REFRESH_DELAY=1\n", encoding="utf-8"
    )

    config = load_config(env_file)

    assert config.field_aliases_file == Path("aliases.json")
    assert config.refresh_delay_seconds == 1.0
