"""Data models for midistatus."""

from .color import Color
from .config import DEFAULT_CONFIG_PATH, AppConfig
from .enums import Direction, DrawMode, TrackerType
from .profile import DEFAULT_PROFILE_PATH, Profile, ProfileItem, TrackerConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_PROFILE_PATH",
    "AppConfig",
    "Color",
    # Enums
    "Direction",
    "DrawMode",
    "Profile",
    "ProfileItem",
    "TrackerConfig",
    "TrackerType",
]
