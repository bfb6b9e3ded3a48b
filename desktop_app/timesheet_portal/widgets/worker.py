"""Ejecución de operaciones de red fuera del hilo de la interfaz."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

logger = logging.getLogger(__name__)


class TaskSignals(QObject):
    finished = Signal(int, object)
    failed = Signal(int, str)


class StoreTask(QRunnable):
    """Corre ``func(*args)`` en el pool y emite el resultado con su número de orden."""

    def __init__(self, ticket: int, func: Callable[..., Any], *args: Any) -> None:
        super().__init__()
        self.ticket = ticket
        self.func = func
        self.args = args
        self.signals = TaskSignals()

    def run(self) -> None:  # pragma: no cover - Qt thread
        try:
            result = self.func(*self.args)
        except Exception as exc:
            logger.exception("Background task %s failed", getattr(self.func, "__name__", self.func))
            self.signals.failed.emit(self.ticket, str(exc))
            return
        self.signals.finished.emit(self.ticket, result)


def submit(
    ticket: int,
    func: Callable[..., Any],
    *args: Any,
    on_finished: Optional[Callable[[int, Any], None]] = None,
    on_failed: Optional[Callable[[int, str], None]] = None,
) -> StoreTask:
    task = StoreTask(ticket, func, *args)
    if on_finished is not None:
        task.signals.finished.connect(on_finished)
    if on_failed is not None:
        task.signals.failed.connect(on_failed)
    QThreadPool.globalInstance().start(task)
    return task


__all__ = ["StoreTask", "TaskSignals", "submit"]
