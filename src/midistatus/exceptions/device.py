"""Device and grid exceptions.

- DeviceError: Base class for MIDI device errors
- DeviceNotFoundError: No MIDI endpoint matches the selector
- DeviceConnectionError: The input/output handshake could not complete
- DeviceNotConnectedError: A frame was sent without an open output
- GridRangeError: Coordinates or color arrays outside the 10x10 grid
"""

from typing import Optional

from .base import MidiStatusError


class DeviceError(MidiStatusError):
    """MIDI device error."""

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        device_name: Optional[str] = None,
        **kwargs
    ):
        super().__init__(user_message, technical_message, **kwargs)
        self.device_name = device_name


class DeviceNotFoundError(DeviceError):
    """No MIDI input endpoint matches the requested selector."""

    def __init__(self, selector: str):
        """
        Initialize device not found error.

        Args:
            selector: Endpoint id or name prefix that was requested
        """
        if selector:
            user_msg = f"MIDI device '{selector}' not found"
        else:
            user_msg = "No MIDI device selected"

        super().__init__(
            user_message=user_msg,
            technical_message=f"No MIDI input endpoint matched selector {selector!r}",
            recoverable=True,
            recovery_hint=(
                "Run 'midistatus midi list' to see available devices, then pass "
                "--device <id or name> or set 'default_device' in config.json"
            ),
        )
        self.selector = selector


class DeviceConnectionError(DeviceError):
    """The MIDI handshake could not be completed."""

    def __init__(self, device_name: str, reason: str):
        """
        Initialize device connection error.

        Args:
            device_name: Advertised name of the input endpoint
            reason: Why the handshake failed
        """
        super().__init__(
            user_message=f"Could not connect to MIDI device '{device_name}'",
            technical_message=f"Handshake with {device_name!r} failed: {reason}",
            device_name=device_name,
            recovery_hint=(
                "Make sure the device exposes an output port with the same name "
                "as its input port ('midistatus midi list')"
            ),
        )
        self.reason = reason


class DeviceNotConnectedError(DeviceError):
    """Output port is not open (not yet connected, or already closed)."""

    def __init__(self, device_name: Optional[str] = None):
        super().__init__(
            user_message="MIDI output is not connected",
            technical_message=f"Send attempted while {device_name or 'device'} output is not open",
            device_name=device_name,
        )


class GridRangeError(MidiStatusError, ValueError):
    """A row, column, index or color array is outside the grid bounds."""

    def __init__(self, name: str, value: int, valid: str):
        """
        Initialize grid range error.

        Args:
            name: Argument name that was out of range
            value: The offending value
            valid: Human-readable description of the valid range
        """
        super().__init__(
            user_message=f"{name} must be {valid}, got {value}",
            technical_message=f"Grid argument {name}={value} outside {valid}",
        )
        self.name = name
        self.value = value
