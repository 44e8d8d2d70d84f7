"""Unit tests for the Launchpad Pro SysEx frame builder."""

import pytest

from midistatus.devices import LAUNCHPAD_PRO_HEADER, Command, Layout, Mode, SysExFrameBuilder, pixel_message


@pytest.mark.unit
class TestSysExFrameBuilder:
    """Frame layout of every command."""

    @pytest.fixture
    def frames(self):
        return SysExFrameBuilder()

    def test_default_header(self, frames):
        assert frames.header == [0x00, 0x20, 0x29, 0x02, 0x10]

    def test_frame_is_wrapped_in_sysex_markers(self, frames):
        msg = frames.clear_all()
        assert msg.type == 'sysex'
        assert msg.bytes() == [0xF0, 0x00, 0x20, 0x29, 0x02, 0x10, 0x0E, 0x00, 0xF7]

    def test_mode_select_ableton(self, frames):
        msg = frames.mode_select(Mode.ABLETON)
        assert list(msg.data) == LAUNCHPAD_PRO_HEADER + [0x21, 0x00]

    def test_layout_select_session(self, frames):
        msg = frames.layout_select(Layout.SESSION)
        assert list(msg.data) == LAUNCHPAD_PRO_HEADER + [0x2C, 0x00]

    def test_pixels(self, frames):
        msg = frames.pixels([(11, 5), (88, 127)])
        assert list(msg.data) == LAUNCHPAD_PRO_HEADER + [0x0A, 11, 5, 88, 127]

    def test_pixels_rgb(self, frames):
        msg = frames.pixels_rgb([(11, 99, 0, 50)])
        assert list(msg.data) == LAUNCHPAD_PRO_HEADER + [0x0B, 11, 99, 0, 50]

    def test_column(self, frames):
        msg = frames.column(3, [1, 2, 3])
        assert list(msg.data) == LAUNCHPAD_PRO_HEADER + [Command.SET_COLUMN, 3, 1, 2, 3]

    def test_row_accepts_bytes(self, frames):
        msg = frames.row(9, bytes([4, 5]))
        assert list(msg.data) == LAUNCHPAD_PRO_HEADER + [Command.SET_ROW, 9, 4, 5]

    def test_custom_header(self):
        frames = SysExFrameBuilder([0x00, 0x20, 0x29, 0x02, 0x0E])
        assert list(frames.clear_all().data) == [0x00, 0x20, 0x29, 0x02, 0x0E, 0x0E, 0x00]


@pytest.mark.unit
def test_pixel_message_is_note_on_channel_1():
    msg = pixel_message(45, 21)
    assert msg.type == 'note_on'
    assert msg.bytes() == [0x90, 45, 21]
