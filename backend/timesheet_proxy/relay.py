from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote, quote_plus, urlencode

import requests

from .config import Settings

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "text/plain"
REDACTED = "***"


class RelayError(RuntimeError):
    """Upstream could not be reached."""


class NotConfiguredError(RuntimeError):
    """No upstream target configured."""


@dataclass(slots=True)
class UpstreamResponse:
    status_code: int
    body: str
    content_type: str

    def parsed(self) -> Any:
        """JSON body, or ``{"raw": text}`` when the upstream did not send JSON."""
        try:
            return json.loads(self.body)
        except ValueError:
            return {"raw": self.body}


def _target(settings: Settings) -> str:
    if not settings.google_script_url:
        raise NotConfiguredError("GOOGLE_SCRIPT_URL not configured")
    return settings.google_script_url


def _with_key(query: str, api_key: str) -> str:
    key_param = urlencode({"apiKey": api_key})
    return f"{query}&{key_param}" if query else key_param


def redact(text: str, secret: str) -> str:
    """Mask ``secret`` (raw or URL-encoded) inside ``text``."""
    if not secret:
        return text
    for form in {secret, quote_plus(secret), quote(secret, safe="")}:
        text = text.replace(form, REDACTED)
    return text


def _send(method: str, url: str, settings: Settings, **kwargs) -> UpstreamResponse:
    kwargs.setdefault("timeout", settings.upstream_timeout)
    try:
        response = requests.request(method, url, **kwargs)
    except requests.RequestException as exc:
        raise RelayError(redact(str(exc), settings.google_script_api_key)) from exc
    if response.status_code >= 400:
        logger.error(
            "Upstream error %s: %s",
            response.status_code,
            redact(response.text[:500], settings.google_script_api_key),
        )
    return UpstreamResponse(
        status_code=response.status_code,
        body=response.text,
        content_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
    )


def forward_get(settings: Settings, query: str) -> UpstreamResponse:
    """Forward a GET, keeping the caller's query string and appending the API key."""
    target = _target(settings)
    logger.info("GET -> %s?%s", target, redact(query or "", settings.google_script_api_key))
    url = f"{target}?{_with_key(query, settings.google_script_api_key)}"
    return _send("GET", url, settings)


def forward_post(settings: Settings, payload: Dict[str, Any]) -> UpstreamResponse:
    target = _target(settings)
    logger.info("POST -> %s action=%s", target, payload.get("action"))
    body = {**payload, "apiKey": settings.google_script_api_key}
    return _send(
        "POST",
        target,
        settings,
        data=json.dumps(body),
        headers={"Content-Type": "application/json;charset=utf-8"},
    )


def probe(settings: Settings) -> Dict[str, Any]:
    """Health information for the upstream script."""
    if not settings.google_script_url:
        return {
            "ok": True,
            "warning": "GOOGLE_SCRIPT_URL not configured (relay is running, upstream not set)",
        }
    query = "action=getEntries"
    if settings.google_script_api_key:
        query = _with_key(query, settings.google_script_api_key)
    try:
        upstream = _send("GET", f"{settings.google_script_url}?{query}", settings, headers={"Accept": "application/json"})
    except RelayError as exc:
        logger.warning("Health probe failed: %s", exc)
        return {"ok": True, "gas_reachable": False, "error": str(exc)}
    return {
        "ok": True,
        "gas_reachable": True,
        "gas_status": upstream.status_code,
        "data": upstream.parsed(),
    }


def decode_body(raw: bytes) -> Optional[Dict[str, Any]]:
    """Parse a JSON or text/plain request body; ``None`` if it is not an object."""
    if not raw or not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None
