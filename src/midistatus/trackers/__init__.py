"""Metric sources polled by the scheduler."""

from .base import TRANSIENT_ERRORS, HttpTracker, Tracker
from .jellyfin import JellyfinTracker
from .ping import PingTracker
from .truenas import TrueNasTracker

__all__ = [
    "TRANSIENT_ERRORS",
    "HttpTracker",
    "JellyfinTracker",
    "PingTracker",
    "Tracker",
    "TrueNasTracker",
]
