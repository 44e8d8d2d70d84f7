"""Tests for session wiring."""

from unittest.mock import Mock, patch

import pytest

from midistatus.core import Controller, resolve_selector
from midistatus.devices import GridDriver, LaunchpadProDriver
from midistatus.exceptions import DeviceNotFoundError
from midistatus.midi import Endpoint
from midistatus.models import AppConfig, Profile, TrackerConfig, TrackerType
from midistatus.trackers import JellyfinTracker, PingTracker

INPUTS = [Endpoint("0", "Midi Through Port-0"), Endpoint("1", "Launchpad Pro MIDI 1")]


@pytest.fixture
def mock_inputs():
    with patch('midistatus.core.controller.list_inputs', return_value=INPUTS) as mock:
        yield mock


def profile_with(*types, device=""):
    return Profile(device=device, trackers=[TrackerConfig(tracker_type=t) for t in types])


@pytest.mark.unit
class TestSelector:

    def test_argument_wins(self):
        config = AppConfig(default_device="config")
        assert resolve_selector(config, Profile(device="profile"), "arg") == "arg"

    def test_profile_before_config(self):
        config = AppConfig(default_device="config")
        assert resolve_selector(config, Profile(device="profile")) == "profile"

    def test_config_last(self):
        config = AppConfig(default_device="config")
        assert resolve_selector(config, Profile(device=None)) == "config"


@pytest.mark.unit
class TestController:

    def test_builds_dialect_for_selected_device(self, mock_inputs, app_config):
        controller = Controller(app_config, profile_with(), "launchpad")

        assert controller.endpoint == INPUTS[1]
        assert isinstance(controller.driver, LaunchpadProDriver)

    def test_unknown_device_uses_fallback_dialect(self, mock_inputs, app_config):
        controller = Controller(app_config, profile_with(), "0")
        assert type(controller.driver) is GridDriver

    def test_no_matching_device(self, mock_inputs, app_config):
        with pytest.raises(DeviceNotFoundError):
            Controller(app_config, profile_with(), "APC40")

    def test_no_selector(self, mock_inputs, app_config):
        with pytest.raises(DeviceNotFoundError):
            Controller(app_config, profile_with())

    def test_one_tracker_instance_per_type(self, mock_inputs, app_config):
        profile = profile_with(TrackerType.PING, TrackerType.JELLYFIN, TrackerType.PING, device="1")

        controller = Controller(app_config, profile)

        registrations = controller.scheduler.registrations
        assert len(registrations) == 3
        assert registrations[0].tracker is registrations[2].tracker
        assert isinstance(registrations[0].tracker, PingTracker)
        assert isinstance(registrations[1].tracker, JellyfinTracker)
        assert len(controller.trackers) == 2

    def test_run_connects_then_runs_scheduler(self, mock_inputs, app_config):
        controller = Controller(app_config, profile_with(TrackerType.PING), "1")
        controller.driver = Mock()
        controller.scheduler = Mock()
        tracker = controller.trackers[TrackerType.PING] = Mock()

        controller.run()

        controller.driver.connect.assert_called_once_with(INPUTS[1])
        controller.scheduler.run.assert_called_once()
        controller.driver.close.assert_called_once()
        tracker.close.assert_called_once()

    def test_exit_shuts_down(self, mock_inputs, app_config):
        with Controller(app_config, profile_with(), "1") as controller:
            controller.scheduler = Mock()
        controller.scheduler.shutdown.assert_called_once()
