"""Política de reintentos compartida por todas las operaciones de red."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Generic, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Verdict(enum.Enum):
    SUCCESS = "success"
    RETRY = "retry"
    FATAL = "fatal"


@dataclass(slots=True)
class RetryOutcome(Generic[T]):
    """Resultado de ``RetryPolicy.run``."""

    verdict: Verdict
    value: Optional[T] = None
    attempts: int = 0
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.verdict is Verdict.SUCCESS


@dataclass(slots=True)
class RetryPolicy:
    """Intentos secuenciales con espera fija entre ellos.

    ``classify`` decide por cada respuesta si se acepta, se reintenta o se
    abandona. Las excepciones de ``retry_on`` cuentan como intento fallido.
    """

    attempts: int = 3
    delay: float = 0.8
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def run(self, operation: Callable[[int], T], classify: Callable[[T], Verdict]) -> RetryOutcome[T]:
        outcome: RetryOutcome[T] = RetryOutcome(verdict=Verdict.RETRY)
        total = max(1, self.attempts)
        for attempt in range(1, total + 1):
            if attempt > 1 and self.delay > 0:
                self.sleep(self.delay)
            outcome.attempts = attempt
            try:
                value = operation(attempt)
            except self.retry_on as exc:
                logger.warning("Attempt %d/%d failed: %s", attempt, total, exc)
                outcome.error = exc
                outcome.value = None
                continue
            verdict = classify(value)
            outcome.value = value
            outcome.error = None
            if verdict is Verdict.SUCCESS:
                outcome.verdict = Verdict.SUCCESS
                return outcome
            if verdict is Verdict.FATAL:
                outcome.verdict = Verdict.FATAL
                return outcome
            logger.warning("Attempt %d/%d returned an unusable response", attempt, total)
        outcome.verdict = Verdict.RETRY
        return outcome


__all__ = ["RetryOutcome", "RetryPolicy", "Verdict"]
