"""Enumerations for profile configuration."""

from enum import Enum


class TrackerType(str, Enum):
    """Metric sources a profile can reference."""

    PING = "ping"
    JELLYFIN = "jellyfin"
    TRUENAS = "truenas"


class DrawMode(str, Enum):
    """How a profile item is rendered."""

    DEFAULT = "default"
    BAR_X = "bar_x"
    BAR_Y = "bar_y"


class Direction(str, Enum):
    """Growth direction of a drawn item."""

    X = "x"
    Y = "y"
