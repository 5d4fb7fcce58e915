"""Debounced resize handling.

Rapid container resizes (a user dragging a window corner) must not trigger
one full re-layout each. Events are collected and a single *commit* callback
runs after ``quiet_ms`` of inactivity (last-event-wins).

Timing goes through a small :class:`Scheduler` protocol so the debounce
logic stays pure Python:

* :class:`QtTimerScheduler` - single-shot ``QTimer`` on the running Qt loop.
* :class:`ThreadTimerScheduler` - ``threading.Timer`` per commit, for headless
  hosts without a Qt application. Callbacks run on the timer thread.
* :class:`ManualScheduler` - virtual clock advanced explicitly (tests).

Tests assert:
* N signals inside one window -> exactly one callback.
* ``cancel`` drops a pending commit; ``force_commit`` runs it immediately.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Protocol, Tuple

from PyQt6.QtCore import QCoreApplication, QObject, QTimer

from .. import settings

log = logging.getLogger(__name__)


class TimerHandle(Protocol):  # pragma: no cover - structural only
    def cancel(self) -> None: ...


class Scheduler(Protocol):  # pragma: no cover - structural only
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...


class _QtHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()
        self._timer.deleteLater()


class QtTimerScheduler:
    """Schedule callbacks as single-shot timers on the Qt event loop."""

    def __init__(self) -> None:
        # timers are children of _owner and delete themselves after firing
        self._owner = QObject()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _QtHandle:
        timer = QTimer(self._owner)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)  # type: ignore[attr-defined]
        timer.timeout.connect(timer.deleteLater)  # type: ignore[attr-defined]
        timer.start(int(delay_ms))
        return _QtHandle(timer)


class ThreadTimerScheduler:
    """Schedule callbacks on daemon ``threading.Timer`` threads."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(max(0.0, delay_ms) / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer


class _ManualHandle:
    def __init__(self, owner: "ManualScheduler") -> None:
        self._owner = owner
        self.cancelled = False

    def cancel(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            self._owner._discard(self)


class ManualScheduler:
    """Deterministic scheduler driven by :meth:`advance`."""

    def __init__(self) -> None:
        self.now_ms = 0.0
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(self)
        heapq.heappush(self._queue, (self.now_ms + delay_ms, next(self._seq), handle, callback))
        return handle

    def _discard(self, handle: _ManualHandle) -> None:
        self._queue = [entry for entry in self._queue if entry[2] is not handle]
        heapq.heapify(self._queue)

    def pending(self) -> int:
        return len(self._queue)

    def advance(self, ms: float) -> int:
        """Move the clock forward, running due callbacks; returns how many ran."""
        target = self.now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _seq, handle, callback = heapq.heappop(self._queue)
            self.now_ms = due
            handle.cancelled = True
            callback()
            ran += 1
        self.now_ms = target
        return ran


def default_scheduler() -> Scheduler:
    """Qt timers when a Qt application is running, else timer threads."""
    if QCoreApplication.instance() is not None:
        return QtTimerScheduler()
    log.debug("no Qt application running; resize debouncing uses timer threads")
    return ThreadTimerScheduler()


class ResizeDebouncer:
    """Collapse bursts of resize signals into one callback."""

    def __init__(
        self,
        callback: Callable[[], None],
        quiet_ms: int = settings.RESIZE_DEBOUNCE_MS,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self._callback = callback
        self._quiet_ms = max(0, int(quiet_ms))
        self._scheduler = scheduler or default_scheduler()
        self._handle: Optional[TimerHandle] = None
        self._generation = 0
        self._lock = threading.Lock()
        self.signals = 0

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def quiet_ms(self) -> int:
        return self._quiet_ms

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def signal(self) -> None:
        """Record a resize; restarts the quiet window."""
        with self._lock:
            self.signals += 1
            self._drop_locked()
            generation = self._generation
            self._handle = self._scheduler.call_later(self._quiet_ms, lambda: self._fire(generation))

    def cancel(self) -> None:
        with self._lock:
            self._drop_locked()

    def force_commit(self) -> None:
        with self._lock:
            if self._handle is None:
                return
            self._drop_locked()
        self._callback()

    def _drop_locked(self) -> None:
        # a timer already running its callback sees a stale generation and returns
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._handle = None
        self._callback()


__all__ = [
    "Scheduler",
    "TimerHandle",
    "QtTimerScheduler",
    "ThreadTimerScheduler",
    "ManualScheduler",
    "default_scheduler",
    "ResizeDebouncer",
]
