"""
SysEx frame builder for the Launchpad Pro.

Every drawing command except single-pixel writes is a System Exclusive
frame::

    [0xF0] [0x00 0x20 0x29] [0x02 0x10] [command] [payload...] [0xF7]
     Start   Novation         Product     │                     End
                              Launchpad   └─ see Command
                              Pro

mido adds the 0xF0/0xF7 markers itself, so the builder only assembles the
``data`` part. Single pixels are plain note-on messages on channel 1 whose
note is the cell index and whose velocity is the palette color.

Reference: Launchpad Pro Programmer's Reference Guide 1.01
(document FFFA001331-02).
"""

from enum import IntEnum

import mido

LAUNCHPAD_PRO_HEADER = [0x00, 0x20, 0x29, 0x02, 0x10]


class Command(IntEnum):
    """Launchpad Pro SysEx command ids."""

    SET_PIXELS = 0x0A
    SET_PIXELS_RGB = 0x0B
    SET_COLUMN = 0x0C
    SET_ROW = 0x0D
    CLEAR_ALL = 0x0E
    MODE_SELECT = 0x21
    LAYOUT_SELECT = 0x2C


class Mode(IntEnum):
    """Arguments of MODE_SELECT."""

    ABLETON = 0x00
    STANDALONE = 0x01


class Layout(IntEnum):
    """Arguments of LAYOUT_SELECT."""

    SESSION = 0x00
    DRUM_RACK = 0x01
    CHROMATIC_NOTE = 0x02
    USER = 0x03
    AUDIO = 0x04
    FADER = 0x05
    RECORD_ARM = 0x06
    TRACK_SELECT = 0x07
    MUTE = 0x08
    SOLO = 0x09
    VOLUME = 0x0A


class SysExFrameBuilder:
    """Builds framed commands for one vendor/product header."""

    def __init__(self, header: list[int] | None = None):
        """
        Args:
            header: Vendor and product id bytes (without 0xF0)
        """
        self.header = list(header) if header is not None else list(LAUNCHPAD_PRO_HEADER)

    def frame(self, command: Command, payload: list[int] | bytes = ()) -> mido.Message:
        """Build ``[header, command, payload]`` as a sysex message."""
        return mido.Message("sysex", data=[*self.header, int(command), *payload])

    def mode_select(self, mode: Mode = Mode.ABLETON) -> mido.Message:
        return self.frame(Command.MODE_SELECT, [mode])

    def layout_select(self, layout: Layout = Layout.SESSION) -> mido.Message:
        return self.frame(Command.LAYOUT_SELECT, [layout])

    def clear_all(self, color: int = 0) -> mido.Message:
        return self.frame(Command.CLEAR_ALL, [color])

    def pixels(self, updates: list[tuple[int, int]]) -> mido.Message:
        """
        Set multiple pads at once.

        Args:
            updates: List of (index, palette_color) pairs
        """
        payload = []
        for index, color in updates:
            payload.extend((index, color))
        return self.frame(Command.SET_PIXELS, payload)

    def pixels_rgb(self, updates: list[tuple[int, int, int, int]]) -> mido.Message:
        """
        Set multiple pads at once with RGB colors.

        Args:
            updates: List of (index, r, g, b); channels already in device range
        """
        payload = []
        for update in updates:
            payload.extend(update)
        return self.frame(Command.SET_PIXELS_RGB, payload)

    def column(self, column: int, colors: list[int] | bytes) -> mido.Message:
        """Set one column; ``colors[0]`` is the bottom LED."""
        return self.frame(Command.SET_COLUMN, [column, *colors])

    def row(self, row: int, colors: list[int] | bytes) -> mido.Message:
        """Set one row; ``colors[0]`` is the left LED."""
        return self.frame(Command.SET_ROW, [row, *colors])


def pixel_message(index: int, color: int) -> mido.Message:
    """Build the single-pixel note-on for a cell index."""
    return mido.Message("note_on", channel=0, note=index, velocity=color)
