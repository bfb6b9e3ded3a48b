"""Normalización de filas devueltas por la planilla.

El backend entrega filas con claves elegidas por la planilla (etiquetas en
castellano, espacios sobrantes, mayúsculas variables) y fechas u horas
codificadas como timestamps completos. Este módulo es el único punto que
conoce esas variantes: ``FIELD_ALIASES`` declara, para cada campo canónico,
las claves alternativas en orden de prioridad.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import math
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .models import DAY_HOLIDAY, DAY_TYPES, TimeLogRecord
from .timecalc import classify_day

logger = logging.getLogger(__name__)

FieldAliases = Mapping[str, Tuple[str, ...]]

FIELD_ALIASES: FieldAliases = MappingProxyType(
    {
        "id": ("id", "ID", "Id", "ID_Registro"),
        "date": ("date", "Fecha", "fecha"),
        "employee_name": ("employeeName", "Nombre", "Nombre_Empleada", "nombre"),
        "entry_time": ("entryTime", "Ingreso", "Hora_Ingreso"),
        "exit_time": ("exitTime", "Egreso", "Hora_Egreso"),
        "total_hours": ("totalHours", "Total_Horas", "Total Horas"),
        "day_type": ("dayType", "Tipo_Dia", "Tipo Día"),
        "is_holiday": ("isHoliday", "Feriado", "Feriado_Si_No"),
        "observation": ("observation", "Observaciones", "Observacion"),
        "timestamp": ("timestamp", "Fecha_Carga"),
    }
)

REQUIRED_FIELDS = ("id", "date", "employee_name")

TRUTHY_STRINGS = {"true", "1", "sí", "si", "yes"}

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_STAMP_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})T")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?$")
_FALLBACK_DATE_FORMATS = ("%d/%m/%Y", "%Y/%m/%d", "%d-%m-%Y", "%a %b %d %Y")


def load_field_aliases(path: Path, base: FieldAliases = FIELD_ALIASES) -> FieldAliases:
    """Combina un JSON ``{campo: [claves...]}`` con la tabla por defecto."""

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object of field aliases")
    merged: Dict[str, Tuple[str, ...]] = dict(base)
    for field, keys in raw.items():
        if field not in FIELD_ALIASES:
            raise ValueError(f"{path}: unknown field {field!r}")
        if isinstance(keys, str):
            keys = [keys]
        merged[field] = tuple(str(key) for key in keys)
    return MappingProxyType(merged)


def _canonical_key(key: Any) -> str:
    return str(key).strip().casefold()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def lookup(row: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    """Primer valor no vacío de ``row`` según las claves de ``aliases``."""

    folded: Dict[str, Any] = {}
    for key, value in row.items():
        folded.setdefault(_canonical_key(key), value)
    for alias in aliases:
        if alias in row and not _is_blank(row[alias]):
            return row[alias]
        value = folded.get(_canonical_key(alias))
        if not _is_blank(value):
            return value
    return None


def normalize_date(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    text = str(value).strip()
    stamp = _ISO_STAMP_RE.match(text)
    if stamp:
        return stamp.group(1)
    if _ISO_DATE_RE.match(text):
        return text
    try:
        return dt.datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        pass
    # Date.toString(): "Mon Jan 08 2024 00:00:00 GMT-0300 (...)"
    candidates = (text, " ".join(text.split()[:4]))
    for fmt in _FALLBACK_DATE_FORMATS:
        for candidate in candidates:
            try:
                return dt.datetime.strptime(candidate, fmt).date().isoformat()
            except ValueError:
                continue
    return text


def _parse_timestamp(text: str) -> Optional[dt.datetime]:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        return None


def normalize_time(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, dt.datetime):
        return value.strftime("%H:%M")
    if isinstance(value, dt.time):
        return value.strftime("%H:%M")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # spreadsheet serial time: fraction of a day
        if 0 <= value < 1:
            minutes = int(round(value * 24 * 60)) % (24 * 60)
            return f"{minutes // 60:02d}:{minutes % 60:02d}"
        return str(value)
    text = str(value).strip()
    match = _CLOCK_RE.match(text)
    if match:
        return f"{int(match.group(1)):02d}:{match.group(2)}"
    if _ISO_STAMP_RE.match(text):
        parsed = _parse_timestamp(text)
        if parsed is not None:
            if parsed.tzinfo is not None:
                try:
                    parsed = parsed.astimezone(dt.timezone.utc)
                except OverflowError:
                    return text
            return parsed.strftime("%H:%M")
    return text


def coerce_hours(value: Any) -> float:
    if isinstance(value, bool) or _is_blank(value):
        return 0.0
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(str(value).strip().replace(",", "."))
    except (OverflowError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return round(number, 2)


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().casefold() in TRUTHY_STRINGS
    return False


def _text(value: Any) -> str:
    if _is_blank(value):
        return ""
    return str(value).strip()


def normalize_record(row: Any, aliases: FieldAliases = FIELD_ALIASES) -> Optional[TimeLogRecord]:
    """Convierte una fila cruda en ``TimeLogRecord`` o ``None`` si es inválida."""

    if not isinstance(row, Mapping):
        logger.debug("Dropping non-object row %r", row)
        return None

    def field(name: str) -> Any:
        return lookup(row, aliases.get(name, ()))

    record_id = _text(field("id"))
    date_value = normalize_date(field("date"))
    employee_name = _text(field("employee_name"))
    values = {"id": record_id, "date": date_value, "employee_name": employee_name}
    missing = [name for name in REQUIRED_FIELDS if not values[name]]
    if missing:
        logger.debug("Dropping row without %s: %r", ", ".join(missing), row)
        return None

    is_holiday = coerce_bool(field("is_holiday"))
    raw_day_type = _text(field("day_type"))
    if is_holiday:
        day_type = DAY_HOLIDAY
    elif raw_day_type in DAY_TYPES:
        day_type = raw_day_type
    else:
        day_type = classify_day(date_value)

    timestamp = field("timestamp")
    return TimeLogRecord(
        id=record_id,
        date=date_value,
        employee_name=employee_name,
        entry_time=normalize_time(field("entry_time")),
        exit_time=normalize_time(field("exit_time")),
        total_hours=coerce_hours(field("total_hours")),
        day_type=day_type,
        is_holiday=is_holiday,
        observation=_text(field("observation")),
        timestamp=None if _is_blank(timestamp) else str(timestamp),
    )


__all__ = [
    "FIELD_ALIASES",
    "FieldAliases",
    "coerce_bool",
    "coerce_hours",
    "load_field_aliases",
    "lookup",
    "normalize_date",
    "normalize_record",
    "normalize_time",
]
