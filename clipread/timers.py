"""
Recurring timer primitives.

A timer hands out opaque handles: ``arm(period_ms, callback)`` starts a new
recurring schedule and ``disarm(handle)`` stops it. Disarming is idempotent
and a disarmed handle never invokes its callback again.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class IntervalTimer(Protocol):
    def arm(self, period_ms: float, callback: Callback) -> object: ...

    def disarm(self, handle: Optional[object]) -> None: ...


class _Schedule:
    _ids = itertools.count(1)

    def __init__(self, period_ms: float, callback: Callback) -> None:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        self.id = next(self._ids)
        self.period_ms = period_ms
        self.callback = callback
        self.cancelled = threading.Event()

    def __repr__(self) -> str:
        return f"<timer #{self.id} every {self.period_ms:.1f}ms>"


class ThreadingIntervalTimer:
    """Runs each armed schedule on its own daemon thread."""

    def __init__(self, name: str = "clipread-timer") -> None:
        self.name = name

    def arm(self, period_ms: float, callback: Callback) -> _Schedule:
        schedule = _Schedule(period_ms, callback)
        thread = threading.Thread(
            target=self._run, args=(schedule,), name=f"{self.name}-{schedule.id}", daemon=True
        )
        thread.start()
        logger.debug("Armed %r", schedule)
        return schedule

    def disarm(self, handle: Optional[object]) -> None:
        if isinstance(handle, _Schedule) and not handle.cancelled.is_set():
            handle.cancelled.set()
            logger.debug("Disarmed %r", handle)

    @staticmethod
    def _run(schedule: _Schedule) -> None:
        interval = schedule.period_ms / 1000.0
        # wait() returns True once cancelled
        while not schedule.cancelled.wait(interval):
            try:
                schedule.callback()
            except Exception:
                logger.exception("Timer callback failed, stopping %r", schedule)
                schedule.cancelled.set()


class ManualTimer:
    """Deterministic timer driven by explicit ``tick()`` calls.

    Used by tests and by hosts that own their own event loop. Keeps every
    schedule it ever armed so callers can check that no two were live at once.
    """

    def __init__(self) -> None:
        self.schedules: Dict[int, _Schedule] = {}
        self.max_concurrent = 0

    @property
    def active(self) -> List[_Schedule]:
        return [s for s in self.schedules.values() if not s.cancelled.is_set()]

    @property
    def armed(self) -> bool:
        return bool(self.active)

    @property
    def period_ms(self) -> Optional[float]:
        active = self.active
        return active[-1].period_ms if active else None

    def arm(self, period_ms: float, callback: Callback) -> _Schedule:
        schedule = _Schedule(period_ms, callback)
        self.schedules[schedule.id] = schedule
        self.max_concurrent = max(self.max_concurrent, len(self.active))
        return schedule

    def disarm(self, handle: Optional[object]) -> None:
        if isinstance(handle, _Schedule):
            handle.cancelled.set()

    def tick(self, count: int = 1) -> int:
        """Fire every live schedule ``count`` times; returns callbacks run."""
        fired = 0
        for _ in range(count):
            for schedule in self.active:
                # a callback may disarm later schedules in this pass
                if schedule.cancelled.is_set():
                    continue
                schedule.callback()
                fired += 1
        return fired
