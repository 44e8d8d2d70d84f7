"""Wires configuration, device and trackers into a running display."""

import logging

from midistatus.devices import DialectRegistry, GridDriver
from midistatus.exceptions import DeviceNotFoundError
from midistatus.midi import ConnectionNegotiator, Endpoint, list_inputs, select_endpoint
from midistatus.models import AppConfig, Profile, TrackerType
from midistatus.trackers import JellyfinTracker, PingTracker, Tracker, TrueNasTracker

from .scheduler import Scheduler

logger = logging.getLogger(__name__)

TRACKER_FACTORIES = {
    TrackerType.PING: PingTracker,
    TrackerType.JELLYFIN: JellyfinTracker,
    TrackerType.TRUENAS: TrueNasTracker,
}


def resolve_selector(config: AppConfig, profile: Profile, device_selector: str | None = None) -> str:
    """Pick the device selector: explicit argument, then profile, then config."""
    return device_selector or profile.device or config.default_device


class Controller:
    """
    Owns the driver, the trackers and the scheduler of one display session.

    Construction resolves the device and builds everything; ``run()``
    starts the handshake and blocks in the scheduler loop.
    """

    def __init__(
        self,
        config: AppConfig,
        profile: Profile,
        device_selector: str | None = None,
        registry: DialectRegistry | None = None,
    ):
        """
        Args:
            config: Application settings
            profile: Trackers and items to draw
            device_selector: Input endpoint id or name prefix (overrides
                profile and config)
            registry: Dialect registry (the bundled one if None)

        Raises:
            DeviceNotFoundError: If no input endpoint matches the selector
        """
        self.config = config
        self.profile = profile

        selector = resolve_selector(config, profile, device_selector)
        endpoint = select_endpoint(list_inputs(), selector) if selector else None
        if endpoint is None:
            raise DeviceNotFoundError(selector)
        self.endpoint: Endpoint = endpoint

        registry = registry or DialectRegistry()
        self.driver: GridDriver = registry.create_driver(endpoint.name, ConnectionNegotiator())

        self.trackers: dict[TrackerType, Tracker] = {}
        self.scheduler = Scheduler(self.driver)
        for tracker_config in profile.trackers:
            self.scheduler.register(self._tracker_for(tracker_config.tracker_type), tracker_config)

    def _tracker_for(self, tracker_type: TrackerType) -> Tracker:
        """One tracker instance per type, shared by all entries of that type."""
        if tracker_type not in self.trackers:
            self.trackers[tracker_type] = TRACKER_FACTORIES[tracker_type](self.config)
        return self.trackers[tracker_type]

    def run(self) -> None:
        """
        Connect and poll until stopped.

        If the handshake fails this keeps waiting until stopped.

        Raises:
            TrackerError: If a tracker's configuration is unusable
        """
        logger.info(f"Starting display on {self.endpoint.name} ({self.driver.config.display_name})")
        try:
            self.driver.connect(self.endpoint)
            self.scheduler.run()
        finally:
            self.driver.close()
            self._close_trackers()

    def stop(self) -> None:
        self.scheduler.stop()

    def shutdown(self) -> None:
        """Stop the loop and close the device from any thread."""
        self.scheduler.shutdown()

    def _close_trackers(self) -> None:
        for tracker in self.trackers.values():
            close = getattr(tracker, "close", None)
            if close is not None:
                close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.shutdown()
