"""Timer subsystem: id-addressed one-shot timers and periodic ticks.

Timers are armed through a ``TimerBackend``.  When one fires, the backend
calls back from its own thread; the only shared state that callback touches
is the ``ActiveTimerSlot``, a single lock-protected cell holding the id of
the most recently fired timer.  The slot is never cleared by reading it, so
two fires between reads coalesce into the later id.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from ._errors import NotFoundError


logger = logging.getLogger(__name__)


FireCallback = Callable[[int], None]


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class TimerBackend(Protocol):
    def arm(self, timer_id: int, interval_ms: int, periodic: bool, callback: FireCallback) -> None: ...

    def cancel(self, timer_id: int) -> bool: ...


class _Tick(threading.Thread):
    """Calls *callback(timer_id)* every *interval* seconds until cancelled."""

    def __init__(self, timer_id: int, interval: float, callback: FireCallback) -> None:
        super().__init__(name=f"vascript-tick-{timer_id}", daemon=True)
        self._timer_id = timer_id
        self._interval = interval
        self._callback = callback
        self._finished = threading.Event()

    def cancel(self) -> None:
        self._finished.set()

    def run(self) -> None:
        while not self._finished.wait(self._interval):
            self._callback(self._timer_id)


class _Disarmed:
    """Placeholder for a timer armed with a zero interval: it never fires."""

    def cancel(self) -> None:
        pass


class ThreadingTimerBackend:
    """Timer backend built on ``threading``.

    One-shot timers are ``threading.Timer`` objects; ticks are daemon threads
    waiting on an event.  A zero interval leaves the timer armed but silent.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timers: dict[int, threading.Timer | _Tick | _Disarmed] = {}

    def arm(self, timer_id: int, interval_ms: int, periodic: bool, callback: FireCallback) -> None:
        self.cancel(timer_id)

        if interval_ms <= 0:
            timer: threading.Timer | _Tick | _Disarmed = _Disarmed()
        elif periodic:
            timer = _Tick(timer_id, interval_ms / 1000, callback)
        else:
            timer = threading.Timer(interval_ms / 1000, callback, args=(timer_id,))
            timer.name = f"vascript-timer-{timer_id}"
            timer.daemon = True

        with self._lock:
            self._timers[timer_id] = timer
        if not isinstance(timer, _Disarmed):
            timer.start()

    def cancel(self, timer_id: int) -> bool:
        with self._lock:
            timer = self._timers.pop(timer_id, None)
        if timer is None:
            return False
        timer.cancel()
        return True


# ---------------------------------------------------------------------------
# Active timer slot
# ---------------------------------------------------------------------------

class ActiveTimerSlot:
    """Single-slot, last-write-wins record of the most recently fired timer."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timer_id = 0

    def set(self, timer_id: int) -> None:
        with self._lock:
            self._timer_id = timer_id

    def get(self) -> int:
        with self._lock:
            return self._timer_id


# ---------------------------------------------------------------------------
# TimerSubsystem
# ---------------------------------------------------------------------------

class TimerSubsystem:
    """Arms, re-arms and cancels timers by id.

    Parameters
    ----------
    backend : TimerBackend
        Where timers are actually armed (default ``ThreadingTimerBackend``).
    max_timer_id : int
        Largest valid id; valid ids are ``1..max_timer_id``.
    on_fire : callable, optional
        Called with the timer id after the active slot has been updated.
        Runs on the backend's thread.
    """

    def __init__(
        self,
        backend: TimerBackend | None = None,
        max_timer_id: int = 254,
        on_fire: FireCallback | None = None,
    ) -> None:
        self.backend = backend if backend is not None else ThreadingTimerBackend()
        self.max_timer_id = max_timer_id
        self.on_fire = on_fire
        self._armed: set[int] = set()
        self._active = ActiveTimerSlot()

    def _check_id(self, timer_id: int) -> None:
        if not 1 <= timer_id <= self.max_timer_id:
            raise NotFoundError(
                f"timer id {timer_id} out of range (1..{self.max_timer_id})"
            )

    def _arm(self, timer_id: int, interval_ms: int, periodic: bool) -> None:
        self._check_id(timer_id)
        if timer_id in self._armed:
            self.backend.cancel(timer_id)
            self._armed.discard(timer_id)
        self.backend.arm(timer_id, interval_ms, periodic, self._fire)
        self._armed.add(timer_id)
        logger.debug(
            "armed %s %d: %d ms", "tick" if periodic else "timer", timer_id, interval_ms
        )

    def create_timer(self, timer_id: int, delay_ms: int) -> None:
        """Arm a one-shot timer, replacing any timer already using *timer_id*."""
        self._arm(timer_id, delay_ms, periodic=False)

    def create_tick(self, timer_id: int, period_ms: int) -> None:
        """Arm a periodic tick, replacing any timer already using *timer_id*."""
        self._arm(timer_id, period_ms, periodic=True)

    def delete_timer(self, timer_id: int) -> None:
        self._check_id(timer_id)
        if timer_id not in self._armed:
            raise NotFoundError(f"timer {timer_id} is not armed")
        self._armed.discard(timer_id)
        self.backend.cancel(timer_id)
        logger.debug("deleted timer %d", timer_id)

    def is_armed(self, timer_id: int) -> bool:
        return timer_id in self._armed

    def _fire(self, timer_id: int) -> None:
        self._active.set(timer_id)
        logger.debug("timer %d fired", timer_id)
        if self.on_fire is not None:
            self.on_fire(timer_id)

    def get_active_timer(self) -> int:
        """Id of the most recently fired timer, 0 if none has fired."""
        return self._active.get()

    def set_active_timer(self, timer_id: int) -> None:
        """Overwrite the active timer slot (0 means no active timer)."""
        self._active.set(timer_id)

    def shutdown(self) -> None:
        """Cancel every armed timer."""
        for timer_id in sorted(self._armed):
            self.backend.cancel(timer_id)
        self._armed.clear()
