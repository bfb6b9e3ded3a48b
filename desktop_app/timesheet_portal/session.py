"""Sesión del portal: login con contraseña derivada y persistencia local."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .models import User
from .roster import ALL_USERS

logger = logging.getLogger(__name__)

PASSWORD_SUFFIX = "123"
LOGIN_ERROR = "Usuario o contraseña incorrectos"


@dataclass(slots=True)
class LoginResult:
    ok: bool
    user: Optional[User] = None
    error: Optional[str] = None


class SessionStorage:
    """Guarda la identidad autenticada en un archivo JSON."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Optional[User]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return None
        if not isinstance(data, dict) or not data.get("isAuthenticated"):
            return None
        user = data.get("user")
        return User.from_dict(user) if isinstance(user, dict) else None

    def save(self, user: User) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        blob = {"user": user.to_dict(), "isAuthenticated": True}
        self.path.write_text(json.dumps(blob), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def expected_password(user: User) -> str:
    return f"{user.username.lower()}{PASSWORD_SUFFIX}"


class SessionGate:
    """Estados ``Anonymous`` y ``Authenticated(User)``."""

    def __init__(self, roster: Iterable[User] = ALL_USERS, storage: Optional[SessionStorage] = None) -> None:
        self.roster = tuple(roster)
        self.storage = storage
        self._user: Optional[User] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def find_user(self, username: str) -> Optional[User]:
        wanted = (username or "").strip().lower()
        if not wanted:
            return None
        for user in self.roster:
            if user.username.lower() == wanted:
                return user
        return None

    def login(self, username: str, password: str) -> LoginResult:
        user = self.find_user(username)
        # the suffix is numeric, so only the username part is case-folded here
        if user is None or (password or "").lower() != expected_password(user):
            logger.info("Rejected login for %r", username)
            return LoginResult(ok=False, error=LOGIN_ERROR)
        self._user = user
        if self.storage is not None:
            self.storage.save(user)
        logger.info("User %s logged in as %s", user.username, user.role)
        return LoginResult(ok=True, user=user)

    def logout(self) -> None:
        self._user = None
        if self.storage is not None:
            self.storage.clear()

    def restore(self) -> Optional[User]:
        """Recupera la sesión guardada sin volver a validarla."""

        if self.storage is None:
            return None
        user = self.storage.load()
        if user is not None:
            self._user = user
        return user


__all__ = ["LOGIN_ERROR", "LoginResult", "SessionGate", "SessionStorage", "expected_password"]
