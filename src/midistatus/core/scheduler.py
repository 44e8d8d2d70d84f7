"""
Cooperative polling loop.

Each tick reads the elapsed time ``E`` once, runs every registration whose
interval has passed (in configuration order), flushes the driver once if
anything was drawn, then sleeps until the next registration is due::

    tick(E):
        for reg in registrations:
            if reg.last_update + reg.interval < E:
                reg.tracker.update(reg.config)
                reg.tracker.display(driver, reg.config)
                reg.last_update = E
        driver.update()                      # only if something ran
        sleep(max(100, next_due - now + 1))

Registrations start overdue, so every tracker runs on the first tick.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from midistatus.exceptions import DeviceNotConnectedError, SchedulerStateError
from midistatus.models import TrackerConfig

if TYPE_CHECKING:
    from midistatus.devices import GridDriver
    from midistatus.trackers import Tracker

logger = logging.getLogger(__name__)

MIN_SLEEP_MS = 100
IDLE_SLEEP_MS = 1000


class SchedulerState(Enum):
    """Scheduler lifecycle. STOPPED is terminal."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class TrackerRegistration:
    """A tracker entry and its bookkeeping, owned by the scheduler."""

    tracker: "Tracker"
    config: TrackerConfig
    last_update: int = field(init=False)

    def __post_init__(self) -> None:
        self.last_update = -self.config.update_interval - 100

    @property
    def interval(self) -> int:
        return self.config.update_interval

    @property
    def next_due(self) -> int:
        return self.last_update + self.interval

    def is_due(self, elapsed_ms: int) -> bool:
        return self.next_due < elapsed_ms


class Scheduler:
    """
    Runs trackers at their intervals and draws their values on one driver.

    ``run()`` blocks the calling thread. ``stop()`` and ``shutdown()`` may be
    called from any thread.
    """

    def __init__(
        self,
        driver: "GridDriver",
        clock: Callable[[], float] | None = None,
        sleep: Callable[[int], None] | None = None,
    ):
        """
        Args:
            driver: Grid driver; the scheduler closes it when the loop ends
            clock: Monotonic clock in seconds (default ``time.monotonic``)
            sleep: Called with a duration in ms between ticks (default
                waits on the stop flag, so ``stop()`` wakes it)
        """
        self.driver = driver
        self.registrations: list[TrackerRegistration] = []
        self._clock = clock or time.monotonic
        self._sleep = sleep or self._wait_for_stop
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._state = SchedulerState.NOT_STARTED
        self._start = 0.0

    @property
    def state(self) -> SchedulerState:
        with self._lock:
            return self._state

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    def register(self, tracker: "Tracker", config: TrackerConfig) -> TrackerRegistration:
        """
        Add a tracker entry. Entries run in registration order.

        Raises:
            SchedulerStateError: If the loop has already started
        """
        if self.state is not SchedulerState.NOT_STARTED:
            raise SchedulerStateError("Trackers must be registered before the scheduler starts")
        registration = TrackerRegistration(tracker, config)
        self.registrations.append(registration)
        logger.debug(f"Registered {config.tracker_type.value} tracker every {config.update_interval} ms")
        return registration

    def elapsed_ms(self) -> int:
        """Milliseconds since the loop started."""
        return round((self._clock() - self._start) * 1000)

    def run(self) -> None:
        """
        Wait for the device handshake, then poll until stopped.

        A failed handshake is logged and the call keeps blocking until
        ``stop()`` or ``shutdown()``. The driver is closed when this returns
        or raises.

        Raises:
            SchedulerStateError: If this scheduler already ran
            Exception: Anything a tracker raises ends the loop and propagates
        """
        with self._lock:
            if self._state is not SchedulerState.NOT_STARTED:
                raise SchedulerStateError(
                    "Scheduler cannot be restarted",
                    technical_message=f"run() called in state {self._state.value}",
                )
            self._state = SchedulerState.RUNNING

        try:
            self.driver.wait_settled()
            if self.stopping:
                logger.info("Stopped before the device connected")
                return
            if not self.driver.connected:
                logger.error(f"Handshake did not complete: {self.driver.error}; waiting for stop")
                self._stop_event.wait()
                return

            for registration in self.registrations:
                registration.tracker.init(self, registration.config)

            logger.info(f"Scheduler running {len(self.registrations)} tracker(s)")
            self._loop()

        except DeviceNotConnectedError:
            if not self.stopping:
                raise
            logger.debug("Device closed while stopping")

        finally:
            self.driver.close()
            with self._lock:
                self._state = SchedulerState.STOPPED
            logger.info("Scheduler stopped")

    def _loop(self) -> None:
        self._start = self._clock()
        while not self.stopping:
            next_due = self.tick(self.elapsed_ms())
            if self.stopping:
                break
            self._sleep(max(MIN_SLEEP_MS, next_due - self.elapsed_ms() + 1))

    def tick(self, elapsed_ms: int) -> int:
        """
        Run every due registration once.

        Args:
            elapsed_ms: Loop time shared by all registrations in this tick

        Returns:
            Loop time at which the next registration is due
        """
        updated = False
        next_due = None

        for registration in self.registrations:
            if registration.is_due(elapsed_ms):
                registration.tracker.update(registration.config)
                registration.tracker.display(self.driver, registration.config)
                registration.last_update = elapsed_ms
                updated = True
            if next_due is None or registration.next_due < next_due:
                next_due = registration.next_due

        if updated:
            frames = self.driver.update()
            logger.debug(f"Tick at {elapsed_ms} ms sent {frames} frame(s)")

        if next_due is None:
            return elapsed_ms + IDLE_SLEEP_MS
        return next_due

    def _wait_for_stop(self, duration_ms: int) -> None:
        self._stop_event.wait(duration_ms / 1000)

    def stop(self) -> None:
        """Ask the loop to exit after the current tracker finishes."""
        self._stop_event.set()

    def shutdown(self) -> None:
        """
        Stop the loop and tear the device down immediately.

        Closing the driver clears the grid and its mirror from the calling
        thread, so a tick still in progress on the scheduler thread may race
        with it. Prefer ``stop()`` and let ``run()`` close the driver when the
        loop has exited.
        """
        logger.info("Shutting down scheduler")
        self.stop()
        self.driver.close()
        with self._lock:
            if self._state is SchedulerState.NOT_STARTED:
                self._state = SchedulerState.STOPPED
