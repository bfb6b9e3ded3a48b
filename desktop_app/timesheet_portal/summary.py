"""Agregados mensuales y utilidades de presentación de registros."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .models import DAY_HOLIDAY, DAY_WEEKDAY, DAY_WEEKEND, TimeLogRecord

INVALID_DATE_LABEL = "Fecha inválida"
RECENT_LIMIT = 5

_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


@dataclass(slots=True)
class EmployeeTotals:
    name: str
    weekday: float = 0.0
    weekend: float = 0.0
    holiday: float = 0.0
    total: float = 0.0

    def add(self, record: TimeLogRecord) -> None:
        self.total += record.total_hours
        if record.day_type == DAY_WEEKDAY:
            self.weekday += record.total_hours
        elif record.day_type == DAY_WEEKEND:
            self.weekend += record.total_hours
        elif record.day_type == DAY_HOLIDAY:
            self.holiday += record.total_hours

    def rounded(self) -> "EmployeeTotals":
        return EmployeeTotals(
            name=self.name,
            weekday=round(self.weekday, 2),
            weekend=round(self.weekend, 2),
            holiday=round(self.holiday, 2),
            total=round(self.total, 2),
        )


@dataclass(slots=True)
class MonthlySummary:
    """Totales de un mes (``YYYY-MM``) por tipo de día y por empleada."""

    month: str
    entries: List[TimeLogRecord] = field(default_factory=list)
    totals: EmployeeTotals = field(default_factory=lambda: EmployeeTotals(name=""))
    by_employee: Dict[str, EmployeeTotals] = field(default_factory=dict)

    @property
    def total_hours(self) -> float:
        return self.totals.total


def sort_recent(records: Iterable[TimeLogRecord], limit: Optional[int] = None) -> List[TimeLogRecord]:
    ordered = sorted(records, key=lambda record: record.date, reverse=True)
    return ordered[:limit] if limit is not None else ordered


def summarize_month(records: Iterable[TimeLogRecord], month: str) -> MonthlySummary:
    if not _MONTH_RE.match(month or ""):
        raise ValueError(f"Invalid month {month!r}, expected YYYY-MM")

    entries = sort_recent(record for record in records if record.date.startswith(month))
    totals = EmployeeTotals(name="")
    by_employee: Dict[str, EmployeeTotals] = {}
    for record in entries:
        totals.add(record)
        by_employee.setdefault(record.employee_name, EmployeeTotals(name=record.employee_name)).add(record)

    return MonthlySummary(
        month=month,
        entries=entries,
        totals=totals.rounded(),
        by_employee={name: item.rounded() for name, item in by_employee.items()},
    )


def current_month(today: Optional[dt.date] = None) -> str:
    return (today or dt.date.today()).strftime("%Y-%m")


def format_date_for_display(value: str) -> str:
    """``YYYY-MM-DD`` (o timestamp ISO) como ``DD/MM/YYYY``."""

    if not value:
        return INVALID_DATE_LABEL
    text = value.strip()
    if "T" in text[:11]:
        text = text.split("T", 1)[0]
    try:
        parsed = dt.date.fromisoformat(text)
    except ValueError:
        return INVALID_DATE_LABEL
    return parsed.strftime("%d/%m/%Y")


__all__ = [
    "EmployeeTotals",
    "INVALID_DATE_LABEL",
    "MonthlySummary",
    "RECENT_LIMIT",
    "current_month",
    "format_date_for_display",
    "sort_recent",
    "summarize_month",
]
