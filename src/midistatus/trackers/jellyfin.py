"""Jellyfin active-user tracker."""

import logging
import re
from datetime import datetime, timedelta, timezone

import requests

from midistatus.exceptions import TrackerConfigError, UnknownStatKeyError
from midistatus.models import AppConfig, TrackerConfig

from .base import TRANSIENT_ERRORS, HttpTracker

logger = logging.getLogger(__name__)

STAT_KEYS = ("active_users",)

# Jellyfin reports 7 fractional digits; datetime accepts at most 6
_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_activity_date(value: str | None) -> datetime | None:
    """
    Parse a Jellyfin ``LastActivityDate`` as an aware UTC datetime.

    Returns None for missing or unparseable values.
    """
    if not value:
        return None
    text = _FRACTION.sub(r"\1", value.strip())
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def count_active_sessions(sessions: list[dict], active_ms: int, now: datetime | None = None) -> int:
    """Count sessions whose last activity is at most ``active_ms`` old."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(milliseconds=active_ms)

    count = 0
    for session in sessions:
        last_activity = parse_activity_date(session.get("LastActivityDate"))
        if last_activity is not None and last_activity >= cutoff:
            count += 1
    return count


class JellyfinTracker(HttpTracker):
    """Draws the number of recently active Jellyfin sessions as a bar."""

    name = "jellyfin"

    def __init__(self, app_config: AppConfig, session: requests.Session | None = None):
        super().__init__(app_config.timeout, session)
        self.app_config = app_config
        self.base_url = app_config.jellyfin_url.rstrip("/")
        self.session.headers["X-Emby-Token"] = app_config.jellyfin_api_key
        self.active_user_count = 0
        self._last_drawn = -1

    def init(self, scheduler, config: TrackerConfig) -> None:
        if not self.app_config.is_jellyfin_configured:
            raise TrackerConfigError(self.name, "'jellyfin_url' and 'jellyfin_api_key' must be set")

    def update(self, config: TrackerConfig) -> None:
        self.active_user_count = self.fetch_active_user_count()

    def fetch_active_user_count(self) -> int:
        """
        Query /Sessions and count the active ones.

        Timeouts and connection failures count as zero users.

        Raises:
            requests.HTTPError: On an error status
        """
        try:
            response = self.session.get(f"{self.base_url}/Sessions", timeout=self.timeout)
        except TRANSIENT_ERRORS as e:
            logger.warning(f"Jellyfin unreachable: {e}")
            return 0
        response.raise_for_status()

        count = count_active_sessions(response.json(), self.app_config.jellyfin_active_user_time)
        logger.debug(f"Jellyfin active user count: {count}")
        return count

    def display(self, driver, config: TrackerConfig) -> None:
        """Redraw the bar only when the count changed since the last draw."""
        changed = self.active_user_count != self._last_drawn
        for item in config.items:
            if item.stat_key not in STAT_KEYS:
                raise UnknownStatKeyError(self.name, item.stat_key, STAT_KEYS)
            if changed:
                driver.draw_bar_x(self.active_user_count, item.pos_x)
        self._last_drawn = self.active_user_count
