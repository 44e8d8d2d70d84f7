"""Scheduling loop and session wiring."""

from .controller import TRACKER_FACTORIES, Controller, resolve_selector
from .scheduler import MIN_SLEEP_MS, Scheduler, SchedulerState, TrackerRegistration

__all__ = [
    "MIN_SLEEP_MS",
    "TRACKER_FACTORIES",
    "Controller",
    "Scheduler",
    "SchedulerState",
    "TrackerRegistration",
    "resolve_selector",
]
