"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import Mock

import pytest

from midistatus.devices import LAUNCHPAD_PRO_HEADER, DeviceConfig
from midistatus.midi import ConnectionNegotiator
from midistatus.models import AppConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_negotiator():
    """Connected negotiator double that records sent messages."""
    mock = Mock(spec=ConnectionNegotiator)
    mock.connected = True
    mock.device_name = "Launchpad Pro"
    return mock


@pytest.fixture
def launchpad_config():
    """Launchpad Pro device entry."""
    return DeviceConfig(
        model="Launchpad Pro",
        manufacturer="Novation",
        implements="launchpad_pro",
        detection_patterns=["Launchpad Pro"],
        exclude_patterns=["MK3", "LPProMK3"],
        sysex_header=LAUNCHPAD_PRO_HEADER,
    )


@pytest.fixture
def app_config():
    """Config with every tracker configured."""
    return AppConfig(
        jellyfin_url="http://jellyfin:8096/",
        jellyfin_api_key="jf-key",
        truenas_url="http://truenas/",
        truenas_api_key="tn-key",
    )
