"""RGB color for the multi-pixel RGB command."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """
    An RGB triple with 8-bit channels.

    Grid cells are normally addressed by palette index; RGB is only used by
    ``LaunchpadProDriver.send_pixels_rgb``, which clamps each channel to the
    device's 0-99 range.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def clamped(self, maximum: int) -> tuple[int, int, int]:
        """Channels limited to ``maximum``: ``Color(r=255, g=50, b=0).clamped(99) == (99, 50, 0)``."""
        return tuple(min(channel, maximum) for channel in self.to_rgb_tuple())
