"""Base grid driver.

``GridDriver`` is the dialect used for devices nobody registered a
dialect for: it completes the handshake and reports input events, but
every draw operation is a no-op. Concrete dialects subclass it and
override the draw operations.
"""

import logging
from collections.abc import Callable

import mido

from midistatus.midi import ConnectionNegotiator, Endpoint, NegotiationState

from .config import DeviceConfig
from .events import GRID_SIZE, ControlChangeEvent, DeviceEvent, PadPressEvent, PadReleaseEvent

logger = logging.getLogger(__name__)

CELL_COUNT = GRID_SIZE * GRID_SIZE


class GridDriver:
    """
    Fallback dialect: input works, drawing does nothing.

    The driver owns its negotiator. Draw operations and ``update()`` must
    only be called from one thread (the scheduler's).
    """

    def __init__(self, negotiator: ConnectionNegotiator, config: DeviceConfig):
        """
        Args:
            negotiator: Unconnected negotiator for the device
            config: Device description resolved by the registry
        """
        self.config = config
        self._negotiator = negotiator
        self._listeners: list[Callable[[DeviceEvent], None]] = []
        self._closed = False

        negotiator.on_message(self._handle_message)
        negotiator.on_input_connected(self._on_input_connected)
        negotiator.on_output_connected(self._on_output_connected)

    # ================================================================
    # LIFECYCLE
    # ================================================================

    def connect(self, endpoint: Endpoint) -> None:
        """Start the handshake. Returns immediately."""
        logger.info(f"Connecting to {endpoint.name} as {self.config.display_name}")
        self._negotiator.connect(endpoint)

    def wait_settled(self, timeout: float | None = None) -> bool:
        """Block until the handshake is connected, failed or closed."""
        return self._negotiator.wait_settled(timeout)

    def close(self) -> None:
        """Close the device ports. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._negotiator.close()

    def _on_input_connected(self) -> None:
        """Hook: input port is open."""
        pass

    def _on_output_connected(self) -> None:
        """Hook: output port is open; send device init here."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    # ================================================================
    # PROPERTIES
    # ================================================================

    @property
    def negotiator(self) -> ConnectionNegotiator:
        return self._negotiator

    @property
    def connected(self) -> bool:
        return self._negotiator.connected

    @property
    def state(self) -> NegotiationState:
        return self._negotiator.state

    @property
    def error(self):
        """Handshake failure, if any."""
        return self._negotiator.error

    @property
    def device_name(self) -> str | None:
        return self._negotiator.device_name

    # ================================================================
    # OUTPUT
    # ================================================================

    def send(self, message: mido.Message) -> None:
        """
        Send a raw message.

        Raises:
            DeviceNotConnectedError: If the output is not open
        """
        self._negotiator.send(message)

    def clear(self) -> None:
        """Turn every LED off."""
        pass

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Set one cell immediately."""
        pass

    def draw_bar_x(self, value: int, x: int, color: int | None = None, clear: bool = True) -> None:
        """Draw a vertical bar in column ``x`` (buffered until ``update()``)."""
        pass

    def update(self) -> int:
        """
        Flush buffered drawing.

        Returns:
            Number of frames sent
        """
        return 0

    # ================================================================
    # INPUT
    # ================================================================

    def add_listener(self, callback: Callable[[DeviceEvent], None]) -> None:
        """
        Register a callback for parsed input events.

        Callbacks run on mido's I/O thread and must not draw.
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[DeviceEvent], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def parse_message(self, msg: mido.Message) -> DeviceEvent | None:
        """Translate a raw MIDI message into a device event."""
        if msg.type == "note_on" and msg.velocity > 0:
            return PadPressEvent(msg.note, msg.velocity)
        if msg.type in ("note_on", "note_off"):
            return PadReleaseEvent(msg.note)
        if msg.type == "control_change":
            return ControlChangeEvent(msg.control, msg.value)
        return None

    def _handle_message(self, msg: mido.Message) -> None:
        """Called from mido's internal I/O thread."""
        event = self.parse_message(msg)
        if event is None:
            logger.debug(f"Unhandled MIDI input: {msg.hex()}")
            return

        logger.info(f"MIDI input: {event!r}")
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Error in input listener: {e}")
