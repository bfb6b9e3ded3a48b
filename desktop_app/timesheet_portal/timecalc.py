"""Cálculo de horas y clasificación de días."""

from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Optional, Union

from .models import DAY_HOLIDAY, DAY_WEEKDAY, DAY_WEEKEND, DayType

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_clock(value: Optional[str]) -> Optional[int]:
    """Devuelve los minutos desde medianoche para ``HH:MM`` o ``None``."""

    if not value:
        return None
    match = _CLOCK_RE.match(str(value))
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def compute_hours(entry_time: Optional[str], exit_time: Optional[str]) -> float:
    """Horas entre ingreso y egreso; un egreso anterior cruza la medianoche."""

    start = parse_clock(entry_time)
    end = parse_clock(exit_time)
    if start is None or end is None:
        return 0.0
    diff = end - start
    if diff < 0:
        diff += MINUTES_PER_DAY
    return round(diff / 60, 2)


def _as_local_noon(value: Union[str, dt.date]) -> Optional[dt.datetime]:
    if isinstance(value, dt.datetime):
        value = value.date()
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time(12, 0))
    text = str(value).strip()
    if "T" in text:
        text = text.split("T", 1)[0]
    if not _ISO_DATE_RE.match(text):
        return None
    try:
        return dt.datetime.fromisoformat(f"{text}T12:00:00")
    except ValueError:
        return None


def classify_day(day: Union[str, dt.date], manual_holiday: bool = False) -> DayType:
    """Clasifica la fecha como ``Semana``, ``Fin de Semana`` o ``Feriado``."""

    if manual_holiday:
        return DAY_HOLIDAY
    noon = _as_local_noon(day)
    if noon is None:
        logger.debug("Cannot classify unparseable date %r, assuming weekday", day)
        return DAY_WEEKDAY
    # Monday == 0 ... Sunday == 6
    if noon.weekday() >= 5:
        return DAY_WEEKEND
    return DAY_WEEKDAY


__all__ = ["compute_hours", "classify_day", "parse_clock"]
