"""Live or simulated current instant shared by every time-gated rule."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[datetime], None]


class TimeSource:
    """Current instant, either following the wall clock or pinned by the operator.

    In live mode the instant only moves when `tick()` is called (once per
    second by the terminal). In simulated mode it stays frozen until the
    operator changes it or calls `reset()`.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._current = clock()
        self._simulated = False
        self._listeners: list[Listener] = []

    @property
    def is_simulated(self) -> bool:
        return self._simulated

    def now(self) -> datetime:
        return self._current

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def tick(self) -> None:
        if self._simulated:
            return
        self._set(self._clock())

    def simulate(self, hour: int, minute: int) -> datetime:
        """Pin the clock to hour:minute on the current instant's date."""
        if not (0 <= hour <= 23):
            raise ValueError("hour must be between 0 and 23")
        if not (0 <= minute <= 59):
            raise ValueError("minute must be between 0 and 59")
        pinned = self._current.replace(hour=hour, minute=minute, second=0, microsecond=0)
        return self.pin(pinned)

    def pin(self, instant: datetime) -> datetime:
        self._simulated = True
        logger.info("clock_simulate instant=%s", instant.isoformat())
        self._set(instant)
        return instant

    def reset(self) -> datetime:
        self._simulated = False
        logger.info("clock_reset")
        self._set(self._clock())
        return self._current

    def _set(self, instant: datetime) -> None:
        self._current = instant
        for listener in list(self._listeners):
            listener(instant)
