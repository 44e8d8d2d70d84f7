"""
Dialect registry.

Picks the driver class for a MIDI device from its advertised port name::

    Port name: "Launchpad Pro MIDI 1"
                      ↓
    devices.json: "Launchpad Pro" matches, "MK3" does not
                      ↓
    DeviceConfig(model="Launchpad Pro", implements="launchpad_pro")
                      ↓
    dialect factory "launchpad_pro" → LaunchpadProDriver(negotiator, config)

Resolution happens once, at connect time. A name that matches no entry
resolves to ``FALLBACK_CONFIG`` whose dialect is the no-op
:class:`GridDriver`: input events still arrive, nothing is drawn.

New hardware is added with an entry in devices.json (or
:meth:`DialectRegistry.add_device`) plus
:meth:`DialectRegistry.register_dialect` for its driver class.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, Field

from midistatus.midi import ConnectionNegotiator
from midistatus.persistence import PydanticPersistence

from .config import DeviceConfig
from .driver import GridDriver
from .launchpad_pro import LaunchpadProDriver

logger = logging.getLogger(__name__)

DEFAULT_DEVICES_PATH = Path(__file__).parent / "devices.json"

GENERIC_DIALECT = "generic"

FALLBACK_CONFIG = DeviceConfig(
    model="Generic MIDI device",
    implements=GENERIC_DIALECT,
)

DialectFactory = Callable[[ConnectionNegotiator, DeviceConfig], GridDriver]


class DeviceRegistrySchema(BaseModel):
    """Root of devices.json."""

    devices: list[DeviceConfig] = Field(default_factory=list)


class DialectRegistry:
    """
    Registry of supported devices and the dialects that drive them.

    Devices are checked in registration order; the first match wins.
    """

    def __init__(self, config_path: Path | None = None):
        """
        Args:
            config_path: devices.json to load. If None, uses the bundled file.

        Raises:
            ConfigFileInvalidError: If the file is not valid JSON
            ConfigValidationError: If an entry fails validation
        """
        self.config_path = config_path or DEFAULT_DEVICES_PATH
        schema = PydanticPersistence.load_json(self.config_path, DeviceRegistrySchema)
        self.devices: list[DeviceConfig] = list(schema.devices)
        self._dialects: dict[str, DialectFactory] = {}

        self.register_dialect(GENERIC_DIALECT, GridDriver)
        self.register_dialect("launchpad_pro", LaunchpadProDriver)
        logger.info(f"Loaded {len(self.devices)} device configurations")

    def register_dialect(self, name: str, factory: DialectFactory) -> None:
        """
        Register a driver factory.

        Args:
            name: Dialect name (matches the ``implements`` field)
            factory: Callable taking (negotiator, config) and returning a driver
        """
        self._dialects[name] = factory

    def add_device(self, config: DeviceConfig) -> None:
        """Append a device entry (checked after the existing ones)."""
        self.devices.append(config)

    def detect(self, port_name: str) -> DeviceConfig:
        """
        Find the device entry for a port name.

        Returns:
            The first matching entry, or ``FALLBACK_CONFIG``
        """
        for config in self.devices:
            if config.matches(port_name):
                logger.info(f"Detected {config.display_name} from port name {port_name!r}")
                return config

        logger.warning(f"No dialect matches {port_name!r}, drawing is disabled")
        return FALLBACK_CONFIG

    def create_driver(self, port_name: str, negotiator: ConnectionNegotiator) -> GridDriver:
        """
        Build the driver for a port name.

        An entry naming an unregistered dialect is treated as unmatched.
        """
        config = self.detect(port_name)
        factory = self._dialects.get(config.implements)
        if factory is None:
            logger.warning(
                f"{config.display_name} implements unknown dialect "
                f"'{config.implements}', using fallback"
            )
            config = FALLBACK_CONFIG
            factory = self._dialects[GENERIC_DIALECT]

        return factory(negotiator, config)

    @property
    def dialects(self) -> list[str]:
        """Registered dialect names."""
        return list(self._dialects)
