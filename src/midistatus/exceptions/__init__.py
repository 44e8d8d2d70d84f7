"""
Custom exception hierarchy for midistatus.

## Exception Hierarchy

```
MidiStatusError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── DeviceError
│   ├── DeviceNotFoundError
│   ├── DeviceConnectionError
│   └── DeviceNotConnectedError
├── GridRangeError (also a ValueError)
├── TrackerError
│   ├── UnknownStatKeyError
│   └── TrackerConfigError
└── SchedulerStateError
```

All custom exceptions carry a `user_message`, a `technical_message` for
logs, a `recoverable` flag and an optional `recovery_hint`.
"""

from .base import MidiStatusError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import (
    DeviceConnectionError,
    DeviceError,
    DeviceNotConnectedError,
    DeviceNotFoundError,
    GridRangeError,
)
from .handlers import format_error_for_display, wrap_pydantic_error
from .tracker import SchedulerStateError, TrackerConfigError, TrackerError, UnknownStatKeyError

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Device
    "DeviceConnectionError",
    "DeviceError",
    "DeviceNotConnectedError",
    "DeviceNotFoundError",
    "GridRangeError",
    # Base
    "MidiStatusError",
    # Tracker / scheduler
    "SchedulerStateError",
    "TrackerConfigError",
    "TrackerError",
    "UnknownStatKeyError",
    # Handlers
    "format_error_for_display",
    "wrap_pydantic_error",
]
