"""Plantel fijo de usuarios del portal."""

from __future__ import annotations

from .models import ROLE_ADMIN, ROLE_EMPLOYEE, User

EMPLOYEES: tuple[User, ...] = (
    User(id="1", username="daiana", name="Daiana", role=ROLE_EMPLOYEE),
    User(id="2", username="matilde", name="Matilde", role=ROLE_EMPLOYEE),
    User(id="3", username="yadia", name="Yadia", role=ROLE_EMPLOYEE),
    User(id="4", username="carla", name="Carla", role=ROLE_EMPLOYEE),
    User(id="5", username="paula", name="Paula", role=ROLE_EMPLOYEE),
    User(id="6", username="ernestina", name="Ernestina", role=ROLE_EMPLOYEE),
)

ADMINS: tuple[User, ...] = (
    User(id="admin-1", username="miguel", name="Miguel", role=ROLE_ADMIN),
)

ALL_USERS: tuple[User, ...] = EMPLOYEES + ADMINS

OBSERVATION_PLACEHOLDER = (
    "horas extras, cobertura de guardia pasiva, reemplazo de personal de fin de semana, etc"
)


__all__ = ["ADMINS", "ALL_USERS", "EMPLOYEES", "OBSERVATION_PLACEHOLDER"]
