"""HTTP reachability tracker: one LED per URL."""

import logging

import requests

from midistatus.exceptions import TrackerConfigError
from midistatus.models import AppConfig, TrackerConfig

from .base import TRANSIENT_ERRORS, HttpTracker

logger = logging.getLogger(__name__)

DEFAULT_COLORS = [0, 3]


class PingTracker(HttpTracker):
    """
    Lights an LED while a URL answers with a success status.

    Each item's ``stat_key`` is the URL. ``colors[0]`` is shown while the
    URL is down and ``colors[1]`` while it is up; ``size`` holds the
    current state (0 or 1) and doubles as the color index.
    """

    name = "ping"

    def __init__(self, app_config: AppConfig, session: requests.Session | None = None):
        super().__init__(app_config.ping_timeout, session)

    def init(self, scheduler, config: TrackerConfig) -> None:
        """
        Normalize colors and reset every item to "down".

        Raises:
            TrackerConfigError: If an item has no URL
        """
        for item in config.items:
            if not item.stat_key:
                raise TrackerConfigError(self.name, f"item at ({item.pos_x}, {item.pos_y}) has no URL in 'stat_key'")
            if not item.colors:
                item.colors = list(DEFAULT_COLORS)
            elif len(item.colors) == 1:
                item.colors = [0, item.colors[0]]
            item.size = 0

    def update(self, config: TrackerConfig) -> None:
        for item in config.items:
            item.size = 1 if self.ping(item.stat_key) else 0

    def ping(self, url: str) -> bool:
        """Return True if ``url`` answers with a success status in time."""
        try:
            response = self.session.get(url, timeout=self.timeout)
        except TRANSIENT_ERRORS as e:
            logger.debug(f"Ping {url} - Failed: {e}")
            return False

        if response.ok:
            logger.debug(f"Ping {url} - Success")
            return True
        logger.debug(f"Ping {url} - Failed: HTTP {response.status_code}")
        return False

    def display(self, driver, config: TrackerConfig) -> None:
        for item in config.items:
            driver.set_pixel(item.pos_x, item.pos_y, item.colors[item.size])
