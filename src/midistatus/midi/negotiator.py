"""Two-phase MIDI connection handshake.

The negotiator opens a device's input port, then looks for an output port
advertised under the same name and opens that too. Both phases run on
worker threads; callers learn about completion through a single settled
signal::

    IDLE ─► INPUT_OPENING ─► INPUT_OPEN ─► OUTPUT_OPENING ─► CONNECTED
                 │                               │
                 └──────────────► FAILED ◄───────┘

``CONNECTED`` and ``FAILED`` are settled states. ``close()`` moves any
state to ``CLOSED``. There is no retry and no internal timeout: a caller
that needs a bound passes one to :meth:`ConnectionNegotiator.wait_settled`.
"""

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Optional

import mido

from midistatus.exceptions import DeviceConnectionError, DeviceError, DeviceNotConnectedError

from .endpoints import Endpoint

logger = logging.getLogger(__name__)


class NegotiationState(Enum):
    """Handshake states."""

    IDLE = "idle"
    INPUT_OPENING = "input_opening"
    INPUT_OPEN = "input_open"
    OUTPUT_OPENING = "output_opening"
    CONNECTED = "connected"
    FAILED = "failed"
    CLOSED = "closed"


class ConnectionNegotiator:
    """
    Opens and owns the input/output port pair of one MIDI device.

    Hooks are registered before :meth:`connect` and run on the handshake
    worker threads, except the message hook which runs on mido's I/O
    thread.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._settled = threading.Event()
        self._state = NegotiationState.IDLE
        self._endpoint: Endpoint | None = None
        self._input: Optional[mido.ports.BaseInput] = None
        self._output: Optional[mido.ports.BaseOutput] = None
        self._error: DeviceConnectionError | None = None

        self._message_callback: Callable[[mido.Message], None] | None = None
        self._input_connected_callback: Callable[[], None] | None = None
        self._output_connected_callback: Callable[[], None] | None = None

    # ================================================================
    # HOOKS
    # ================================================================

    def on_message(self, callback: Callable[[mido.Message], None]) -> None:
        """
        Register callback for incoming MIDI messages.

        Callback is executed in mido's internal I/O thread - keep it fast!
        """
        self._message_callback = callback

    def on_input_connected(self, callback: Callable[[], None]) -> None:
        """Register callback fired once the input port is open."""
        self._input_connected_callback = callback

    def on_output_connected(self, callback: Callable[[], None]) -> None:
        """
        Register callback fired once the output port is open.

        Runs before the negotiator reports ``connected``; frames sent from
        it reach the device ahead of anything the caller sends.
        """
        self._output_connected_callback = callback

    # ================================================================
    # HANDSHAKE
    # ================================================================

    def connect(self, endpoint: Endpoint) -> None:
        """
        Start the handshake with the device behind an input endpoint.

        Returns immediately. Failures are reported through :attr:`state`
        and :attr:`error`, never raised from here.

        Raises:
            DeviceError: If this negotiator was already used
        """
        with self._lock:
            if self._state is not NegotiationState.IDLE:
                raise DeviceError(
                    "MIDI device is already connecting",
                    technical_message=f"connect() called in state {self._state.value}",
                    device_name=endpoint.name,
                )
            self._endpoint = endpoint
            self._state = NegotiationState.INPUT_OPENING

        logger.debug(f"Opening MIDI input: {endpoint.name}")
        self._spawn(self._open_input, "input")

    def _spawn(self, target: Callable[..., None], phase: str, *args) -> None:
        thread = threading.Thread(
            target=target, args=args, name=f"midistatus-open-{phase}", daemon=True
        )
        thread.start()

    def _open_input(self) -> None:
        """First phase: open the input port and look up the matching output."""
        assert self._endpoint is not None
        name = self._endpoint.name

        try:
            port = mido.open_input(name, callback=self._midi_callback)
        except Exception as e:
            # Backends raise different types (OSError, rtmidi errors, IOError)
            self._fail(f"could not open input port: {e}")
            return

        with self._lock:
            if self._state is NegotiationState.CLOSED:
                port.close()
                return
            self._input = port
            self._state = NegotiationState.INPUT_OPEN

        logger.info(f"Input device {name} opened successfully")

        if not self._run_hook(self._input_connected_callback, "input connected"):
            return

        output_name = next((n for n in mido.get_output_names() if n == name), None)
        if output_name is None:
            self._fail(f"no output endpoint is named {name!r}")
            return

        with self._lock:
            if self._state is NegotiationState.CLOSED:
                return
            self._state = NegotiationState.OUTPUT_OPENING

        logger.debug(f"Opening MIDI output: {output_name}")
        self._spawn(self._open_output, "output", output_name)

    def _open_output(self, output_name: str) -> None:
        """Second phase: open the output port and run device init."""
        try:
            port = mido.open_output(output_name)
        except Exception as e:
            self._fail(f"could not open output port: {e}")
            return

        with self._lock:
            if self._state is NegotiationState.CLOSED:
                port.close()
                return
            self._output = port

        if not self._run_hook(self._output_connected_callback, "output connected"):
            return

        with self._lock:
            if self._state is NegotiationState.CLOSED:
                return
            self._state = NegotiationState.CONNECTED
        self._settled.set()
        logger.info(f"Output device {output_name} opened successfully")

    def _run_hook(self, callback: Callable[[], None] | None, what: str) -> bool:
        """Run a handshake hook; a raising hook fails the handshake."""
        if callback is None:
            return True
        try:
            callback()
            return True
        except Exception as e:
            logger.exception(f"Error in {what} hook")
            self._fail(f"{what} hook raised {type(e).__name__}: {e}")
            return False

    def _fail(self, reason: str) -> None:
        with self._lock:
            if self._state is NegotiationState.CLOSED:
                return
            self._state = NegotiationState.FAILED
            name = self._endpoint.name if self._endpoint else "unknown"
            self._error = DeviceConnectionError(name, reason)
        logger.error(f"MIDI handshake with {name} failed: {reason}")
        self._settled.set()

    def _midi_callback(self, msg: mido.Message) -> None:
        """MIDI message callback - called from mido's internal I/O thread."""
        try:
            if self._message_callback:
                self._message_callback(msg)
        except Exception as e:
            logger.error(f"Error in MIDI input callback: {e}")

    def wait_settled(self, timeout: float | None = None) -> bool:
        """
        Block until the handshake is connected, failed or closed.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            True if settled, False if the timeout expired first
        """
        return self._settled.wait(timeout)

    # ================================================================
    # I/O
    # ================================================================

    def send(self, message: mido.Message) -> None:
        """
        Send a message to the device. Fire-and-forget: no ack, no retry.

        Raises:
            DeviceNotConnectedError: If the output port is not open
        """
        with self._lock:
            if self._output is None or self._state is NegotiationState.CLOSED:
                raise DeviceNotConnectedError(self.device_name)
            self._output.send(message)

    def close(self) -> None:
        """Close both ports, blocking until each close completes. Idempotent."""
        with self._lock:
            if self._state is NegotiationState.CLOSED:
                return
            self._state = NegotiationState.CLOSED
            ports = [p for p in (self._output, self._input) if p is not None]
            self._output = None
            self._input = None

        for port in ports:
            try:
                port.close()
            except Exception as e:
                logger.error(f"Error closing MIDI port {port.name}: {e}")

        self._settled.set()
        logger.debug(f"Closed MIDI device {self.device_name}")

    # ================================================================
    # PROPERTIES
    # ================================================================

    @property
    def state(self) -> NegotiationState:
        """Current handshake state."""
        with self._lock:
            return self._state

    @property
    def connected(self) -> bool:
        """True once both ports are open and device init has run."""
        return self.state is NegotiationState.CONNECTED

    @property
    def error(self) -> DeviceConnectionError | None:
        """Why the handshake failed, if it did."""
        return self._error

    @property
    def endpoint(self) -> Endpoint | None:
        """Input endpoint passed to :meth:`connect`."""
        return self._endpoint

    @property
    def device_name(self) -> str | None:
        """Advertised name of the device."""
        return self._endpoint.name if self._endpoint else None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
