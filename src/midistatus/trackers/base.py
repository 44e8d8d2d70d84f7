"""Metric source protocol and shared HTTP plumbing."""

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import requests

from midistatus.models import TrackerConfig

if TYPE_CHECKING:
    from midistatus.core.scheduler import Scheduler
    from midistatus.devices import GridDriver

logger = logging.getLogger(__name__)

# Network failures a tracker degrades from instead of ending the loop
TRANSIENT_ERRORS = (requests.ConnectionError, requests.Timeout)


@runtime_checkable
class Tracker(Protocol):
    """
    A metric source polled by the scheduler.

    One instance serves every tracker entry of its type. All three methods
    run on the scheduler thread.
    """

    def init(self, scheduler: "Scheduler", config: TrackerConfig) -> None:
        """Validate and prepare a tracker entry before the first tick."""
        ...

    def update(self, config: TrackerConfig) -> None:
        """Fetch fresh values for the entry's items."""
        ...

    def display(self, driver: "GridDriver", config: TrackerConfig) -> None:
        """Draw the latest values; bars are flushed by the scheduler."""
        ...


class HttpTracker:
    """Base for trackers that poll over HTTP with one pooled session."""

    name = "tracker"

    def __init__(self, timeout_ms: int, session: requests.Session | None = None):
        """
        Args:
            timeout_ms: Per-request timeout in milliseconds
            session: Session to use (a new one if None)
        """
        self.timeout = timeout_ms / 1000
        self.session = session or requests.Session()

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(timeout={self.timeout}s)"
