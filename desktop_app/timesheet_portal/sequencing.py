"""Descarta respuestas que llegan después de una consulta más nueva."""

from __future__ import annotations

import itertools
from threading import Lock
from typing import Dict


class RequestSequencer:
    def __init__(self) -> None:
        self._lock = Lock()
        self._counter = itertools.count(1)
        self._latest: Dict[str, int] = {}

    def issue(self, view: str) -> int:
        """Nuevo número de orden para ``view``; invalida los anteriores."""

        with self._lock:
            ticket = next(self._counter)
            self._latest[view] = ticket
            return ticket

    def is_current(self, view: str, ticket: int) -> bool:
        with self._lock:
            return self._latest.get(view) == ticket


__all__ = ["RequestSequencer"]
