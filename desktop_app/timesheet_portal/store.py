"""Fachada de registros usada por los portales."""

from __future__ import annotations

import datetime as dt
import logging
import uuid
from typing import List, Optional, Union

from .api_client import ApiClient, ApiError
from .config import AppConfig
from .models import TimeLogRecord, User
from .normalizer import FIELD_ALIASES, load_field_aliases
from .retry import RetryPolicy
from .timecalc import classify_day, compute_hours

logger = logging.getLogger(__name__)


def build_record(
    user: User,
    day: Union[str, dt.date],
    entry_time: str,
    exit_time: str,
    is_holiday: bool = False,
    observation: str = "",
) -> TimeLogRecord:
    """Arma un registro nuevo con id propio y horas/tipo de día derivados."""

    date_value = day.isoformat() if isinstance(day, dt.date) else str(day)
    return TimeLogRecord(
        id=str(uuid.uuid4()),
        date=date_value,
        employee_name=user.name,
        entry_time=entry_time,
        exit_time=exit_time,
        total_hours=compute_hours(entry_time, exit_time),
        day_type=classify_day(date_value, is_holiday),
        is_holiday=bool(is_holiday),
        observation=(observation or "").strip(),
    )


class RecordStore:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def is_configured(self) -> bool:
        return self.client.is_configured()

    def list_all(self) -> List[TimeLogRecord]:
        return self.client.list_entries()

    def list_for(self, owner_name: str) -> List[TimeLogRecord]:
        """Registros de una empleada, filtrados del lado del cliente."""

        return [record for record in self.list_all() if record.employee_name == owner_name]

    def create(self, record: TimeLogRecord) -> bool:
        ok = self.client.save_entry(record)
        if ok:
            logger.info("Entry %s saved for %s on %s", record.id, record.employee_name, record.date)
        return ok

    def delete(self, record_id: str, requester_name: Optional[str] = None) -> bool:
        ok = self.client.delete_entry(record_id, requester_name)
        if ok:
            logger.info("Entry %s deleted by %s", record_id, requester_name or "-")
        return ok


def create_store(config: AppConfig) -> RecordStore:
    """Arma cliente y fachada a partir de la configuración."""

    aliases = FIELD_ALIASES
    if config.field_aliases_file is not None:
        aliases = load_field_aliases(config.field_aliases_file)
    policy = RetryPolicy(
        attempts=config.retry_attempts,
        delay=config.retry_delay_seconds,
        retry_on=(ApiError,),
    )
    client = ApiClient(
        config.proxy_url,
        timeout=config.request_timeout_seconds,
        retry_policy=policy,
        field_aliases=aliases,
    )
    return RecordStore(client)


__all__ = ["RecordStore", "build_record", "create_store"]
