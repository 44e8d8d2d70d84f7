"""Display profile models.

A profile lists the trackers to poll and, for each, the items to draw on
the grid. Profiles are plain configuration: the scheduler keeps its own
bookkeeping (last update times) outside of them.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .enums import Direction, DrawMode, TrackerType

DEFAULT_PROFILE_PATH = Path("profile.json")


class ProfileItem(BaseModel):
    """One drawable statistic of a tracker."""

    stat_key: str | None = Field(default=None, description="Which statistic to draw (tracker specific)")
    stat_value: str | None = Field(default=None, description="Sub-selector within the statistic")
    mode: DrawMode = Field(default=DrawMode.DEFAULT, description="Render mode")
    colors: list[int] = Field(default_factory=list, description="Palette indices (0-127)")
    pos_x: int = Field(default=0, ge=0, le=9, description="Grid column")
    pos_y: int = Field(default=0, ge=0, le=9, description="Grid row")
    size: int = Field(default=1, ge=0, description="Item size, or current state for ping items")
    scale: float = Field(default=1.0, description="Multiplier applied to the raw value")
    direction: Direction = Field(default=Direction.X, description="Growth direction")

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, v: list[int]) -> list[int]:
        """Palette indices must fit in a MIDI data byte."""
        for color in v:
            if not 0 <= color <= 127:
                raise ValueError(f"Palette color {color} out of range (0-127)")
        return v


class TrackerConfig(BaseModel):
    """A tracker entry: one metric source, its interval and its items."""

    tracker_type: TrackerType = Field(description="Metric source to poll")
    update_interval: int = Field(default=60000, ge=1, description="Polling interval (ms)")
    items: list[ProfileItem] = Field(default_factory=list, description="Items drawn by this tracker")


class Profile(BaseModel):
    """Display profile."""

    device: str | None = Field(
        default="", description="MIDI input id or name prefix (overrides config default_device)"
    )
    trackers: list[TrackerConfig] = Field(default_factory=list, description="Trackers to poll")

    def uses_tracker(self, tracker_type: TrackerType) -> bool:
        """Check if any tracker entry uses the given type."""
        return any(tracker.tracker_type == tracker_type for tracker in self.trackers)

    @classmethod
    def load_or_create(cls, path: Path | None = None) -> "Profile":
        """Load profile from file, writing an empty profile first if it is missing."""
        from midistatus.persistence import PydanticPersistence

        return PydanticPersistence.load_or_create(path or DEFAULT_PROFILE_PATH, cls)
