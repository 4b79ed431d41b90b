"""
Tick schedulers.

A scheduler invokes one callback periodically at a configurable interval.
The game controller reconfigures it whenever the tick interval changes and
cancels it on pause, game over and reset.

    scheduler = ScheduleLibScheduler()
    scheduler.configure(150, controller.on_tick)
    while scheduler.active:
        scheduler.run_pending()

Implementations:
  - ScheduleLibScheduler: wall-clock driver backed by the ``schedule`` library
  - ManualScheduler: virtual clock, advanced explicitly (tests, fast simulation)
  - PygameTimerScheduler lives in services.pygame_frontend
"""

import logging
import time
from typing import Callable, Optional

import schedule

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]


class Scheduler:
    """
    Base class/interface for periodic tick drivers.
    """

    def __init__(self):
        self.interval_ms: Optional[int] = None
        self.callback: Optional[TickCallback] = None

    @property
    def active(self) -> bool:
        return self.callback is not None

    def configure(self, interval_ms: int, callback: TickCallback):
        """
        Cancel any current schedule and start calling ``callback`` every
        ``interval_ms`` milliseconds. The first call happens one interval
        from now.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.cancel()
        self.interval_ms = interval_ms
        self.callback = callback
        self._start(interval_ms, callback)
        logger.debug(f"{self.__class__.__name__} ticking every {interval_ms}ms")

    def cancel(self):
        """Stop calling the callback. Safe to call when nothing is scheduled."""
        if self.callback is not None:
            self._stop()
        self.callback = None

    def _start(self, interval_ms: int, callback: TickCallback):
        raise NotImplementedError

    def _stop(self):
        raise NotImplementedError


class ScheduleLibScheduler(Scheduler):
    """
    Drives ticks off the wall clock through a private ``schedule.Scheduler``.

    The owner pumps it with run_pending() (or run_forever()) on its own thread.
    """

    def __init__(self, sleep_seconds: float = 0.005):
        super().__init__()
        self._scheduler = schedule.Scheduler()
        self._job: Optional[schedule.Job] = None
        self.sleep_seconds = sleep_seconds

    def _start(self, interval_ms: int, callback: TickCallback):
        # Wrap so a callback return value is never mistaken for CancelJob
        def job():
            callback()

        self._job = self._scheduler.every(interval_ms / 1000.0).seconds.do(job)

    def _stop(self):
        if self._job is not None:
            self._scheduler.cancel_job(self._job)
            self._job = None

    def run_pending(self):
        self._scheduler.run_pending()

    def run_forever(self, should_stop: Optional[Callable[[], bool]] = None):
        """Pump pending jobs until nothing is scheduled or ``should_stop()`` is true."""
        while self.active:
            if should_stop is not None and should_stop():
                break
            self.run_pending()
            idle = self._scheduler.idle_seconds
            if idle is None:
                continue
            time.sleep(min(max(idle, 0.0), self.sleep_seconds))


class ManualScheduler(Scheduler):
    """
    A virtual clock. Nothing happens until advance() or fire() is called.
    """

    def __init__(self):
        super().__init__()
        self.now_ms = 0
        self._next_due_ms: Optional[int] = None
        self._generation = 0
        self.fired = 0

    def _start(self, interval_ms: int, callback: TickCallback):
        self._generation += 1
        self._next_due_ms = self.now_ms + interval_ms

    def _stop(self):
        self._generation += 1
        self._next_due_ms = None

    def fire(self):
        """Jump the clock straight to the next due tick and run it."""
        if not self.active:
            return None
        self.now_ms = self._next_due_ms
        return self._run_due()

    def advance(self, ms: int) -> int:
        """
        Move the virtual clock forward by ``ms`` and run every tick that falls
        due, honouring reconfiguration done by the callback. Returns the
        number of callbacks run.
        """
        target = self.now_ms + ms
        ran = 0
        while self.active and self._next_due_ms is not None and self._next_due_ms <= target:
            self.now_ms = self._next_due_ms
            self._run_due()
            ran += 1
        self.now_ms = target
        return ran

    def _run_due(self):
        generation = self._generation
        due = self._next_due_ms
        self.fired += 1
        result = self.callback()
        # Only re-arm if the callback didn't cancel or reconfigure us
        if self._generation == generation:
            self._next_due_ms = due + self.interval_ms
        return result
