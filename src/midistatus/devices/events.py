"""Raw input events from the grid controller."""

GRID_SIZE = 10


class DeviceEvent:
    """Generic device event (input from hardware)."""

    pass


class PadPressEvent(DeviceEvent):
    """Pad was pressed."""

    def __init__(self, index: int, velocity: int):
        self.index = index  # x + y * 10
        self.velocity = velocity

    @property
    def x(self) -> int:
        return self.index % GRID_SIZE

    @property
    def y(self) -> int:
        return self.index // GRID_SIZE

    def __repr__(self) -> str:
        return f"PadPressEvent(x={self.x}, y={self.y}, velocity={self.velocity})"


class PadReleaseEvent(DeviceEvent):
    """Pad was released."""

    def __init__(self, index: int):
        self.index = index

    @property
    def x(self) -> int:
        return self.index % GRID_SIZE

    @property
    def y(self) -> int:
        return self.index // GRID_SIZE

    def __repr__(self) -> str:
        return f"PadReleaseEvent(x={self.x}, y={self.y})"


class ControlChangeEvent(DeviceEvent):
    """MIDI control change received."""

    def __init__(self, control: int, value: int):
        self.control = control
        self.value = value

    def __repr__(self) -> str:
        return f"ControlChangeEvent(control={self.control}, value={self.value})"
