"""Cliente HTTP hacia el proxy de la planilla de horas."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

from .models import TimeLogRecord
from .normalizer import FIELD_ALIASES, FieldAliases, coerce_bool, normalize_record
from .retry import RetryPolicy, Verdict

logger = logging.getLogger(__name__)

PLACEHOLDER_MARKER = "YOUR-URL"
SUCCESS_FLAGS = ("ok", "success")
MAX_DATA_ENVELOPES = 2


class ApiError(RuntimeError):
    """Error al acceder al proxy."""

    def __init__(self, message: str, *, response: Optional[requests.Response] = None) -> None:
        super().__init__(message)
        self.response = response


def _success_flag(payload: Mapping[str, Any]) -> Optional[bool]:
    for key in SUCCESS_FLAGS:
        if key in payload:
            return coerce_bool(payload[key])
    return None


def is_write_ack(payload: Any) -> bool:
    """Respuesta de escritura (flag + id) devuelta donde se esperaba una lista."""

    return (
        isinstance(payload, Mapping)
        and _success_flag(payload) is not None
        and "id" in payload
        and not isinstance(payload.get("data"), list)
    )


def extract_rows(payload: Any) -> Optional[List[Any]]:
    """Lista de filas, desenvolviendo hasta dos sobres ``data``; ``None`` si no hay."""

    current = payload
    for _ in range(MAX_DATA_ENVELOPES):
        if isinstance(current, list):
            return current
        if not isinstance(current, Mapping) or "data" not in current:
            return None
        current = current["data"]
    return current if isinstance(current, list) else None


class ApiClient:
    """Encapsula las llamadas ``getEntries``, ``saveEntry`` y ``deleteEntry``."""

    def __init__(
        self,
        proxy_url: str,
        timeout: float = 10,
        retry_policy: Optional[RetryPolicy] = None,
        field_aliases: FieldAliases = FIELD_ALIASES,
    ) -> None:
        self.proxy_url = (proxy_url or "").strip()
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy(retry_on=(ApiError,))
        # writes get exactly one attempt
        self.write_policy = RetryPolicy(attempts=1, delay=0, retry_on=(ApiError,))
        self.field_aliases = field_aliases

    # ------------------------------------------------------------------
    # Utilidades
    # ------------------------------------------------------------------
    def is_configured(self) -> bool:
        return bool(self.proxy_url) and PLACEHOLDER_MARKER not in self.proxy_url

    def _request(self, method: str, **kwargs) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        headers = kwargs.setdefault("headers", {})
        headers.setdefault("Accept", "application/json")
        try:
            response = requests.request(method, self.proxy_url, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(str(exc)) from exc

        if response.status_code >= 400:
            raise ApiError(f"Proxy error {response.status_code}: {response.text}", response=response)
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return json.loads(response.text)
        except ValueError as exc:
            raise ApiError(f"Invalid JSON from proxy: {exc}", response=response) from exc

    def _post_action(self, action: str, payload: Dict[str, Any]) -> bool:
        body = {"action": action, **payload}
        outcome = self.write_policy.run(
            lambda _attempt: self._request("POST", json=body), lambda _response: Verdict.SUCCESS
        )
        if not outcome.ok:
            logger.error("%s failed: %s", action, outcome.error)
            return False
        response = outcome.value
        try:
            data = json.loads(response.text)
        except ValueError:
            # not structured: plain HTTP success is the acknowledgment
            return True
        if isinstance(data, Mapping):
            flag = _success_flag(data)
            if flag:
                return True
            logger.error("%s rejected by backend: %s", action, data.get("error") or data)
            return False
        logger.error("%s returned an unexpected payload: %r", action, data)
        return False

    # ------------------------------------------------------------------
    # Registros
    # ------------------------------------------------------------------
    def list_entries(self, owner: Optional[str] = None) -> List[TimeLogRecord]:
        """Lista los registros; ante respuestas inválidas reintenta y termina en ``[]``."""

        if not self.is_configured():
            logger.warning("Proxy URL not configured, returning no entries")
            return []

        params = {"action": "getEntries"}
        if owner:
            params["owner"] = owner

        def fetch(_attempt: int) -> Any:
            return self._decode(self._request("GET", params=params))

        def classify(payload: Any) -> Verdict:
            if extract_rows(payload) is not None:
                return Verdict.SUCCESS
            if is_write_ack(payload):
                logger.warning("Stale write acknowledgment received instead of entries")
            return Verdict.RETRY

        outcome = self.retry_policy.run(fetch, classify)
        if not outcome.ok:
            logger.warning("Giving up on getEntries after %d attempts", outcome.attempts)
            return []

        records: List[TimeLogRecord] = []
        for row in extract_rows(outcome.value) or []:
            record = normalize_record(row, self.field_aliases)
            if record is not None:
                records.append(record)
        return records

    def save_entry(self, record: TimeLogRecord) -> bool:
        """Envía un registro nuevo (un único intento)."""

        if not self.is_configured():
            logger.warning("Proxy URL not configured, entry %s not sent", record.id)
            return False
        return self._post_action("saveEntry", {"entry": record.to_entry_payload()})

    def delete_entry(self, record_id: str, requester_name: Optional[str] = None) -> bool:
        """Pide el borrado de un registro; la autorización la resuelve el backend."""

        if not self.is_configured():
            logger.warning("Proxy URL not configured, entry %s not deleted", record_id)
            return False
        payload: Dict[str, Any] = {"id": record_id}
        if requester_name:
            payload["requesterName"] = requester_name
        return self._post_action("deleteEntry", payload)


__all__ = ["ApiClient", "ApiError", "extract_rows", "is_write_ack"]
