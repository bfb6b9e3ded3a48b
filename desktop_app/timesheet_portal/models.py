"""Modelos de datos del portal de horas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from typing_extensions import Literal

DayType = Literal["Semana", "Fin de Semana", "Feriado"]
Role = Literal["ADMIN", "EMPLOYEE"]

DAY_WEEKDAY: DayType = "Semana"
DAY_WEEKEND: DayType = "Fin de Semana"
DAY_HOLIDAY: DayType = "Feriado"
DAY_TYPES: tuple[DayType, ...] = (DAY_WEEKDAY, DAY_WEEKEND, DAY_HOLIDAY)

ROLE_ADMIN: Role = "ADMIN"
ROLE_EMPLOYEE: Role = "EMPLOYEE"
ROLES: tuple[Role, ...] = (ROLE_ADMIN, ROLE_EMPLOYEE)


@dataclass(slots=True)
class User:
    """Usuario del portal (empleada o administrador)."""

    id: str
    username: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "username": self.username, "name": self.name, "role": self.role}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["User"]:
        role = data.get("role")
        if role not in ROLES:
            return None
        try:
            return cls(
                id=str(data["id"]),
                username=str(data["username"]),
                name=str(data["name"]),
                role=role,
            )
        except KeyError:
            return None


@dataclass(slots=True)
class TimeLogRecord:
    """Registro de asistencia de un día."""

    id: str
    date: str
    employee_name: str
    entry_time: str = ""
    exit_time: str = ""
    total_hours: float = 0.0
    day_type: DayType = DAY_WEEKDAY
    is_holiday: bool = False
    observation: str = ""
    timestamp: Optional[str] = None

    def to_entry_payload(self) -> Dict[str, Any]:
        """Cuerpo ``entry`` para ``saveEntry``; el backend asigna el timestamp."""

        return {
            "id": self.id,
            "date": self.date,
            "employeeName": self.employee_name,
            "entryTime": self.entry_time,
            "exitTime": self.exit_time,
            "totalHours": self.total_hours,
            "dayType": self.day_type,
            "isHoliday": self.is_holiday,
            "observation": self.observation,
        }


__all__ = [
    "DAY_HOLIDAY",
    "DAY_TYPES",
    "DAY_WEEKDAY",
    "DAY_WEEKEND",
    "DayType",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_EMPLOYEE",
    "Role",
    "TimeLogRecord",
    "User",
]
