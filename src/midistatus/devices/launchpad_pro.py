"""
Launchpad Pro dialect.

Mirror Buffer and Batching
==========================

The driver keeps a 100-byte mirror of the palette index last sent to each
cell (``index = x + y * 10``, row 0 at the bottom) and a 10-bit mask of
columns whose mirror cells changed since they were last flushed::

    draw_bar_x(5, 2, 7)          mirror[12..52] = 7, mirror[62..82] = 0
    draw_bar_x(3, 4)             mirror[14..34] = ramp, ...
                                 dirty = 0b0000010100
    update()                     SET_COLUMN 2 [...10 cells...]
                                 SET_COLUMN 4 [...10 cells...]
                                 dirty = 0

Any number of bar draws inside one scheduler tick collapse into one
set-column frame per touched column. ``set_pixel`` and the ``send_*``
methods bypass the batching and write to the hardware immediately.

Bars occupy rows 1-8 (the 8x8 pad area); rows 0 and 9 and columns 0 and 9
are the side buttons.
"""

import logging

from midistatus.exceptions import DeviceError, GridRangeError
from midistatus.midi import ConnectionNegotiator
from midistatus.models import Color

from .config import DeviceConfig
from .driver import CELL_COUNT, GRID_SIZE, GridDriver
from .events import DeviceEvent
from .frames import Layout, Mode, SysExFrameBuilder, pixel_message

logger = logging.getLogger(__name__)

BAR_ROWS = range(1, 9)
MAX_PALETTE_INDEX = 127
MAX_RGB = 0x63  # channels go up to 99, not 255


def ramp_color(row: int) -> int:
    """Palette index for a bar cell at ``row`` when no color is given."""
    return (9 - row) * 4 + 3


def _check_coordinate(name: str, value: int) -> None:
    if not 0 <= value < GRID_SIZE:
        raise GridRangeError(name, value, "between 0 and 9")


def _check_color(name: str, value: int) -> None:
    if not 0 <= value <= MAX_PALETTE_INDEX:
        raise GridRangeError(name, value, "a palette index between 0 and 127")


def _check_colors(colors: list[int] | bytes) -> None:
    if not 1 <= len(colors) <= GRID_SIZE:
        raise GridRangeError("len(colors)", len(colors), "between 1 and 10")
    for color in colors:
        _check_color("color", color)


class LaunchpadProDriver(GridDriver):
    """Draws on a Novation Launchpad Pro (first generation)."""

    def __init__(self, negotiator: ConnectionNegotiator, config: DeviceConfig):
        super().__init__(negotiator, config)
        self.frames = SysExFrameBuilder(config.sysex_header)
        self._mirror = bytearray(CELL_COUNT)
        self._dirty = 0

    # ================================================================
    # STATE
    # ================================================================

    @property
    def mirror(self) -> bytes:
        """Copy of the mirror buffer."""
        return bytes(self._mirror)

    @property
    def dirty_columns(self) -> list[int]:
        """Columns waiting for the next ``update()``."""
        return [col for col in range(GRID_SIZE) if self._dirty & (1 << col)]

    # ================================================================
    # LIFECYCLE
    # ================================================================

    def _on_output_connected(self) -> None:
        """Put the device in Ableton mode with the session layout, then clear it."""
        self.send(self.frames.mode_select(Mode.ABLETON))
        self.send(self.frames.layout_select(Layout.SESSION))
        self.clear()
        logger.info(f"Initialized {self.config.display_name}")

    def close(self) -> None:
        """Blank the display if it is still reachable, then close the ports."""
        if self._closed:
            return
        if self.connected:
            try:
                self.clear()
            except DeviceError as e:
                logger.warning(f"Could not clear display on close: {e}")
        super().close()

    # ================================================================
    # IMMEDIATE DRAWING
    # ================================================================

    def clear(self) -> None:
        """Send clear-all and reset the mirror buffer and dirty mask."""
        self.send(self.frames.clear_all())
        self._mirror[:] = bytes(CELL_COUNT)
        self._dirty = 0

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """
        Set one cell immediately (single note-on, not batched).

        Raises:
            GridRangeError: If x, y or color are out of range
        """
        _check_coordinate("x", x)
        _check_coordinate("y", y)
        _check_color("color", color)

        index = x + y * GRID_SIZE
        self._mirror[index] = color
        self.send(pixel_message(index, color))

    def send_pixels(self, updates: list[tuple[int, int]]) -> None:
        """
        Set several cells in one frame.

        Args:
            updates: List of (index, palette_color) pairs, index = x + y * 10

        Raises:
            GridRangeError: If an index or color is out of range
        """
        if not updates:
            return
        for index, color in updates:
            if not 0 <= index < CELL_COUNT:
                raise GridRangeError("index", index, "between 0 and 99")
            _check_color("color", color)

        self.send(self.frames.pixels(updates))
        for index, color in updates:
            self._mirror[index] = color
        logger.debug(f"Set {len(updates)} pixels in bulk")

    def send_pixels_rgb(self, updates: list[tuple[int, Color]]) -> None:
        """
        Set several cells to RGB colors in one frame.

        Channels are clamped to the device range (0-99). RGB cells have no
        palette index, so the mirror buffer is left as it was.

        Args:
            updates: List of (index, color) pairs

        Raises:
            GridRangeError: If an index is out of range
        """
        if not updates:
            return
        specs = []
        for index, color in updates:
            if not 0 <= index < CELL_COUNT:
                raise GridRangeError("index", index, "between 0 and 99")
            specs.append((index, *color.clamped(MAX_RGB)))

        self.send(self.frames.pixels_rgb(specs))
        logger.debug(f"Set {len(specs)} RGB pixels in bulk")

    def send_column(self, column: int, colors: list[int] | bytes) -> None:
        """
        Set LEDs by column, immediately.

        Args:
            column: Column number (0-9)
            colors: 1 to 10 palette colors; ``colors[0]`` is the bottom LED

        Raises:
            GridRangeError: If column or colors are out of range; nothing
                is sent or changed in that case
        """
        _check_coordinate("column", column)
        _check_colors(colors)

        self.send(self.frames.column(column, colors))
        for row, color in enumerate(colors):
            self._mirror[column + row * GRID_SIZE] = color

    def send_row(self, row: int, colors: list[int] | bytes) -> None:
        """
        Set LEDs by row, immediately.

        Args:
            row: Row number (0-9)
            colors: 1 to 10 palette colors; ``colors[0]`` is the left LED

        Raises:
            GridRangeError: If row or colors are out of range; nothing is
                sent or changed in that case
        """
        _check_coordinate("row", row)
        _check_colors(colors)

        self.send(self.frames.row(row, colors))
        start = row * GRID_SIZE
        self._mirror[start:start + len(colors)] = bytes(colors)

    def flush_column(self, column: int) -> None:
        """Resend the mirrored contents of one column."""
        _check_coordinate("column", column)
        colors = self._mirror[column::GRID_SIZE]
        self.send(self.frames.column(column, colors))

    def flush_row(self, row: int) -> None:
        """Resend the mirrored contents of one row."""
        _check_coordinate("row", row)
        start = row * GRID_SIZE
        self.send(self.frames.row(row, self._mirror[start:start + GRID_SIZE]))

    # ================================================================
    # BUFFERED DRAWING
    # ================================================================

    def draw_bar_x(self, value: int, x: int, color: int | None = None, clear: bool = True) -> None:
        """
        Draw a vertical bar of height ``value`` in rows 1-8 of column ``x``.

        Only the mirror buffer is written; the column is sent on the next
        ``update()``.

        Args:
            value: Bar height; rows ``1..value`` are lit (values above 8 fill
                the column, values below 1 light nothing)
            x: Column (0-9)
            color: Palette index, or None for the built-in ramp
                (``(9 - row) * 4 + 3``)
            clear: If True, rows above the bar are turned off. If False they
                are left untouched so several bars can be layered

        Raises:
            GridRangeError: If x or color are out of range
        """
        _check_coordinate("x", x)
        if color is not None:
            _check_color("color", color)

        for row in BAR_ROWS:
            index = x + row * GRID_SIZE
            if value >= row:
                self._mirror[index] = ramp_color(row) if color is None else color
            elif clear:
                self._mirror[index] = 0

        self._dirty |= 1 << x

    def update(self) -> int:
        """
        Flush every dirty column as one set-column frame.

        Returns:
            Number of frames sent
        """
        sent = 0
        for column in range(GRID_SIZE):
            bit = 1 << column
            if not self._dirty & bit:
                continue
            self.flush_column(column)
            self._dirty &= ~bit
            sent += 1

        if sent:
            logger.debug(f"Flushed {sent} column(s)")
        return sent

    # ================================================================
    # INPUT
    # ================================================================

    def parse_message(self, msg) -> DeviceEvent | None:
        """Pressure messages are dropped; everything else as the base driver."""
        if msg.type in ("aftertouch", "polytouch"):
            return None
        return super().parse_message(msg)
