"""Grid device dialects and the registry that selects them."""

from .config import DeviceConfig
from .driver import CELL_COUNT, GRID_SIZE, GridDriver
from .events import ControlChangeEvent, DeviceEvent, PadPressEvent, PadReleaseEvent
from .frames import LAUNCHPAD_PRO_HEADER, Command, Layout, Mode, SysExFrameBuilder, pixel_message
from .launchpad_pro import LaunchpadProDriver, ramp_color
from .registry import FALLBACK_CONFIG, DialectRegistry

__all__ = [
    "CELL_COUNT",
    "FALLBACK_CONFIG",
    "GRID_SIZE",
    "LAUNCHPAD_PRO_HEADER",
    "Command",
    "ControlChangeEvent",
    "DeviceConfig",
    "DeviceEvent",
    "DialectRegistry",
    "GridDriver",
    "LaunchpadProDriver",
    "Layout",
    "Mode",
    "PadPressEvent",
    "PadReleaseEvent",
    "SysExFrameBuilder",
    "pixel_message",
    "ramp_color",
]
